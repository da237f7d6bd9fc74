# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP Middleware — request ID propagation, access logging, Prometheus metrics.
"""

import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from presenter_picker.core.logging import get_logger
from presenter_picker.metrics import HTTP_ERRORS, REQUEST_COUNT, REQUEST_LATENCY

logger = get_logger(__name__)

# Probes and docs are excluded from metrics and access logs.
SKIP_PATHS: tuple[str, ...] = (
    "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate or generate X-Request-ID."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record latency and status per route template, then log the request."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        path = request.url.path
        if path in SKIP_PATHS:
            return response

        route = request.scope.get("route")
        endpoint = getattr(route, "path", path)
        status = str(response.status_code)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)
        if response.status_code >= 400:
            HTTP_ERRORS.labels(method=request.method, endpoint=endpoint, status=status).inc()

        logger.info(
            "%s %s -> %s",
            request.method, path, status,
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            },
        )
        return response
