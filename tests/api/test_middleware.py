"""
API Middleware Tests - Request tracking and cache headers
"""

import uuid

import pytest


class TestRequestIDMiddleware:
    """X-Request-ID is generated or echoed on every response."""

    def test_generates_request_id(self, client):
        response = client.get("/api/metrics/teams")

        request_id = response.headers["X-Request-ID"]
        assert str(uuid.UUID(request_id)) == request_id

    def test_echoes_incoming_request_id(self, client):
        response = client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    def test_error_responses_carry_request_id(self, client):
        response = client.post("/api/metrics/overview")
        assert response.status_code == 405
        assert "X-Request-ID" in response.headers


class TestCacheControlMiddleware:
    """Cache-Control depends on the endpoint family."""

    @pytest.mark.parametrize(
        "path", ["/api/metrics/overview", "/api/metrics/teams", "/api/git/metrics", "/api/jira/stats"]
    )
    def test_metrics_use_configured_max_age(self, client, path):
        response = client.get(path)

        assert response.headers["Cache-Control"] == "public, max-age=120"
        assert response.headers["Expires"].endswith("GMT")

    def test_health_cached_for_one_minute(self, client):
        assert client.get("/health").headers["Cache-Control"] == "public, max-age=60"

    def test_export_not_cached(self, client):
        assert client.get("/api/export").headers["Cache-Control"] == "no-cache, must-revalidate"

    def test_errors_not_cached(self, client):
        response = client.get("/api/metrics/teams", params={"id": "does-not-exist"})

        assert response.status_code == 404
        assert "Cache-Control" not in response.headers
