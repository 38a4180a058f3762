"""Request tracing middleware.

Tags every HTTP request with an id, writes one access log line per request
and adds the id plus security headers to the response. Pure ASGI, so
streaming responses are passed through untouched.
"""

import logging
import time
from uuid import uuid4

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == REQUEST_ID_HEADER:
            # Client ids are echoed only when short enough to be an identifier
            text = value.decode("latin-1").strip()
            return text if 0 < len(text) <= 128 else None
    return None


class RequestTracingMiddleware:
    """
    Assign a request id, log the request outcome and set response headers.

    The id is taken from an incoming X-Request-Id header when present,
    otherwise generated. It is stored as ``request.state.request_id`` so
    route handlers can include it in their own log lines.

    Headers added:
        - X-Request-Id
        - X-Content-Type-Options: nosniff
        - X-Frame-Options: DENY
        - Strict-Transport-Security: (only when hsts=True)
    """

    def __init__(self, app, hsts: bool = False):
        self.app = app
        self.hsts = hsts

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or str(uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_code = 500

        async def send_with_headers(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                headers.append((b"x-content-type-options", b"nosniff"))
                headers.append((b"x-frame-options", b"DENY"))
                if self.hsts:
                    headers.append(
                        (b"strict-transport-security", b"max-age=31536000; includeSubDomains")
                    )
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"[{request_id}] {scope['method']} {scope['path']} -> {status_code} "
                f"({elapsed_ms:.1f}ms)"
            )
