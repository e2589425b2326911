"""
API Error Handling Tests

Tests for HTTP error responses and the {"error": message} body format.
"""

import pytest
from fastapi.testclient import TestClient

from engmetrics.api.app import create_app
from engmetrics.config import ApiConfig
from engmetrics.fixtures import FixtureStore


class ExplodingStore(FixtureStore):
    """Store whose reads fail with an unexpected error."""

    def get(self, domain):
        raise RuntimeError("fixture disk on fire")


@pytest.fixture
def broken_client():
    """Client whose every data read raises."""
    app = create_app(config=ApiConfig(log_level="CRITICAL"), store=ExplodingStore())
    return TestClient(app)


# ============================================================
# 405 Method Not Allowed Tests
# ============================================================


class TestMethodNotAllowed:
    """Only GET is accepted on data endpoints."""

    def test_post_overview_returns_405(self, client):
        response = client.post("/api/metrics/overview")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    @pytest.mark.parametrize(
        "method,path",
        [
            ("put", "/api/metrics/teams"),
            ("delete", "/api/metrics/members"),
            ("patch", "/api/git/metrics"),
            ("post", "/api/metrics/correlation"),
            ("post", "/api/export"),
            ("post", "/api/metrics/integrated"),
            ("put", "/api/jira/stats"),
        ],
    )
    def test_non_get_methods_rejected(self, client, method, path):
        response = client.request(method.upper(), path)

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_405_is_rejected_before_filtering(self, client):
        """A bad metric name does not turn a 405 into a 404."""
        response = client.post("/api/git/metrics", params={"metric": "deployments"})
        assert response.status_code == 405


# ============================================================
# 404 Not Found Tests
# ============================================================


class TestNotFoundErrors:
    """Tests for 404 Not Found responses."""

    def test_nonexistent_endpoint_returns_404(self, client):
        response = client.get("/api/v1/nonexistent")

        assert response.status_code == 404
        assert "error" in response.json()

    def test_404_body_has_only_error_key(self, client):
        response = client.get("/api/git/metrics", params={"metric": "velocity"})
        assert list(response.json()) == ["error"]


# ============================================================
# 500 Internal Server Error Tests
# ============================================================


class TestInternalErrors:
    """Unexpected faults become a generic 500 without leaking details."""

    @pytest.mark.parametrize(
        "path",
        [
            "/api/metrics/overview",
            "/api/metrics/teams",
            "/api/metrics/members",
            "/api/git/metrics",
            "/api/metrics/correlation",
            "/api/export",
            "/api/metrics/integrated?type=overview",
            "/api/jira/stats",
        ],
    )
    def test_fault_returns_generic_500(self, broken_client, path):
        response = broken_client.get(path)

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert "disk on fire" not in response.text
