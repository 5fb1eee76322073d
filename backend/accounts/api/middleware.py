"""HTTP Middleware: request id, real client address, request logging, recovery.

Invariants:
    - Chain order (outermost first): RequestID → RealIP → RequestLogging → Recoverer
    - Every response carries X-Request-ID, including 500s from the recoverer
    - An unhandled handler exception becomes a 500 response; the process keeps serving
    - request.state.request_id and request.state.client_ip set before any handler runs

Design Decisions:
    - BaseHTTPMiddleware subclasses: request.state is shared with downstream
      handlers through the ASGI scope
    - Recoverer is innermost so RequestLogging records the 500 it produces
"""

import logging
import time
import uuid

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


REQUEST_ID_HEADER = "X-Request-ID"

# Proxy headers, most specific first
_REAL_IP_HEADERS = ("true-client-ip", "x-real-ip")
_FORWARDED_FOR_HEADER = "x-forwarded-for"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate an inbound X-Request-ID or assign a new one."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def resolve_client_ip(request: Request) -> str | None:
    """Client address as seen through proxies, else the socket peer."""
    for header in _REAL_IP_HEADERS:
        value = request.headers.get(header, "").strip()
        if value:
            return value
    forwarded = request.headers.get(_FORWARDED_FOR_HEADER, "")
    first_hop = forwarded.split(",")[0].strip()
    if first_hop:
        return first_hop
    return request.client.host if request.client else None


class RealIPMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        request.state.client_ip = resolve_client_ip(request)
        return await call_next(request)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with method, path, status, and timing."""

    def __init__(self, app: ASGIApp, logger: logging.Logger | None = None):
        super().__init__(app)
        self._logger = logger or logging.getLogger(__name__)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        self._logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"({duration_ms}ms)",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "client_ip": getattr(request.state, "client_ip", None),
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        return response


class RecovererMiddleware(BaseHTTPMiddleware):
    """Turn unhandled exceptions into 500 responses. Never leaks internals."""

    def __init__(self, app: ASGIApp, logger: logging.Logger | None = None):
        super().__init__(app)
        self._logger = logger or logging.getLogger(__name__)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            self._logger.error(
                f"Unhandled exception on {request.url.path}: {e}",
                exc_info=True,
                extra={
                    "request_id": getattr(request.state, "request_id", None),
                    "path": request.url.path,
                },
            )
            return JSONResponse(
                status_code=500, content={"error": "internal server error"},
            )
