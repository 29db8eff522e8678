"""
CORS middleware whose rejections are answered by `core.error_handlers`.

Any request carrying an `Origin` that is not allowed is refused with 403,
preflight or not. Starlette alone would answer a bad preflight with a bare
400 and let simple requests through without CORS headers.
"""

from __future__ import annotations

from starlette.datastructures import Headers
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import Response
from starlette.types import Receive, Scope, Send

from .error_handlers import cors_forbidden_response

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")
ALLOWED_HEADERS = ("content-type",)
DISALLOWED_ORIGIN = "Disallowed CORS origin"


class RejectingCORSMiddleware(CORSMiddleware):
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = Headers(scope=scope).get("origin")
            if origin is not None and not self.is_allowed_origin(origin=origin):
                response = cors_forbidden_response(DISALLOWED_ORIGIN)
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 400:
            return response
        reason = bytes(response.body).decode("utf-8", errors="replace")
        return cors_forbidden_response(reason)
