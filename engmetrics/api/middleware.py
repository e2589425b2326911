"""
API Middleware - Request Tracking, Cache Control

Middleware for FastAPI application to handle:
- Request ID tracking (for debugging)
- Cache-Control headers (client-side caching)
"""

import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from engmetrics.core import get_logger

logger = get_logger(__name__)


# ============================================================
# Request ID Middleware
# ============================================================

class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Add unique request ID to each request for tracing and debugging.

    Adds X-Request-ID header to both request and response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add request ID to request and response."""

        # Generate or use existing request ID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        # Add to request state for access in endpoints
        request.state.request_id = request_id

        logger.info(
            "API request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else "unknown",
            },
        )

        start_time = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start_time) * 1000

        response.headers["X-Request-ID"] = request_id

        logger.info(
            "API response",
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response


# ============================================================
# Cache Control Middleware
# ============================================================

class CacheControlMiddleware(BaseHTTPMiddleware):
    """
    Add Cache-Control headers for client-side caching.

    Different cache strategies for different endpoint types:
    - /health: 1 minute cache
    - /api/metrics/*, /api/git/*, /api/jira/*: ``max_age`` (fixtures never change while running)
    - /api/export: no cache (each export is a fresh download)
    - /docs, /redoc: 1 day cache (static docs)
    """

    def __init__(self, app, max_age: int = 300):
        super().__init__(app)
        self.max_age = max_age

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Add Cache-Control headers based on endpoint."""

        response = await call_next(request)

        # Only add cache headers for successful GET requests
        if request.method != "GET" or response.status_code >= 400:
            return response

        path = request.url.path

        if path == "/health":
            self._set_max_age(response, 60)

        elif path.startswith(("/api/metrics/", "/api/git/", "/api/jira/")):
            self._set_max_age(response, self.max_age)

        elif path in ["/docs", "/redoc", "/openapi.json"]:
            self._set_max_age(response, 86400)

        # Default: No cache (export and unknown endpoints)
        else:
            response.headers["Cache-Control"] = "no-cache, must-revalidate"

        return response

    def _set_max_age(self, response: Response, seconds: int) -> None:
        response.headers["Cache-Control"] = f"public, max-age={seconds}"
        response.headers["Expires"] = self._get_expires_header(seconds)

    def _get_expires_header(self, seconds: int) -> str:
        """Generate Expires header value."""
        expires_time = datetime.now(timezone.utc) + timedelta(seconds=seconds)
        return expires_time.strftime("%a, %d %b %Y %H:%M:%S GMT")
