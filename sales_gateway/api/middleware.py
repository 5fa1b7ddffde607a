"""FastAPI middleware for request tracing and metrics"""

import re
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from sales_gateway.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"

# Caller-supplied IDs are echoed back and logged, so keep them short and header-safe
REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._\-]{1,64}")


def resolve_request_id(candidate: str | None) -> str:
    """Reuse a well-formed inbound request ID, otherwise mint a new one"""
    if candidate and REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate the caller's X-Request-ID through logs and the response"""

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency per route template; unhandled errors count as 500"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            request_duration_histogram.labels(
                method=request.method,
                endpoint=getattr(route, "path", "unmatched"),
                status=status,
            ).observe(time.perf_counter() - start_time)
