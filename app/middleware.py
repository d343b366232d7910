# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# - SecurityHeadersMiddleware: hardening headers on every response
# - BodySizeLimitMiddleware: rejects oversized request bodies up front
# - RequestLoggingMiddleware: access log ("dev" or Apache "combined" format)
# =============================================================================

import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.exceptions import error_envelope

access_logger = logging.getLogger("app.access")


# =============================================================================
# Security Headers
# =============================================================================

DEFAULT_SECURITY_HEADERS = {
    "Content-Security-Policy": (
        "default-src 'self'; base-uri 'self'; font-src 'self' https: data:; "
        "form-action 'self'; frame-ancestors 'self'; img-src 'self' data:; "
        "object-src 'none'; script-src 'self'; script-src-attr 'none'; "
        "style-src 'self' https: 'unsafe-inline'; upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    # Images and files served by this API are embedded by the frontend origin
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds hardening headers to every response.

    Headers already set by a route are left alone.
    """

    def __init__(self, app, headers: dict[str, str] | None = None):
        super().__init__(app)
        self.headers = dict(DEFAULT_SECURITY_HEADERS if headers is None else headers)

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        if "x-powered-by" in response.headers:
            del response.headers["x-powered-by"]
        return response


# =============================================================================
# Body Size Limit
# =============================================================================

class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests whose declared Content-Length exceeds the limit.

    Returns 413 with the standard error envelope.
    """

    def __init__(self, app, max_bytes: int):
        super().__init__(app)
        self.max_bytes = max_bytes

    async def dispatch(self, request: Request, call_next) -> Response:
        content_length = request.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                return JSONResponse(
                    status_code=400,
                    content=error_envelope("Invalid Content-Length header", "BAD_REQUEST"),
                )
            if size > self.max_bytes:
                return JSONResponse(
                    status_code=413,
                    content=error_envelope(
                        f"Request body too large (max: {self.max_bytes // (1024 * 1024)}MB)",
                        "PAYLOAD_TOO_LARGE",
                    ),
                )
        return await call_next(request)


# =============================================================================
# Access Logging
# =============================================================================

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request.

    - "dev": GET /api/events 200 12.3 ms
    - "combined": Apache combined log format

    Paths in `skip_paths` (health checks) are not logged.
    """

    def __init__(self, app, log_format: str = "combined", skip_paths: tuple[str, ...] = ("/health",)):
        super().__init__(app)
        self.log_format = log_format
        self.skip_paths = skip_paths

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.skip_paths:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        if self.log_format == "dev":
            access_logger.info(
                f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms"
            )
        else:
            access_logger.info(self._combined_line(request, response))
        return response

    @staticmethod
    def _combined_line(request: Request, response: Response) -> str:
        client = request.client.host if request.client else "-"
        timestamp = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        version = request.scope.get("http_version", "1.1")
        length = response.headers.get("content-length", "-")
        referer = request.headers.get("referer", "-")
        agent = request.headers.get("user-agent", "-")
        return (
            f'{client} - - [{timestamp}] "{request.method} {target} HTTP/{version}" '
            f'{response.status_code} {length} "{referer}" "{agent}"'
        )
