"""
Single place where failures become HTTP responses.

Maps domain errors and framework rejections (malformed body, disallowed
origin, unmatched route) to a status code, a `{"detail": ...}` body and a log
record. Upstream and storage details are logged, never returned.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import (
    DatabaseQueryError,
    DomainError,
    MissingParametersError,
    ModerationError,
    NotFoundError,
    ParseIntError,
)

logger = logging.getLogger(__name__)

HTTP_403 = 403
HTTP_404 = 404
HTTP_422 = 422
HTTP_500 = 500

INTERNAL_SERVER_ERROR = "Internal Server Error"
ROUTE_NOT_FOUND = "Route not found"


def _error_response(status_code: int, detail: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": detail})


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(item) for item in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "invalid request"


def cors_forbidden_response(reason: str) -> JSONResponse:
    """
    Response for a rejected cross-origin request (used by `core.cors`).
    """
    logger.error("cors_forbidden reason=%r", reason)
    return _error_response(HTTP_403, f"CORS request forbidden: {reason}")


def domain_error_response(exc: DomainError) -> JSONResponse:
    if isinstance(exc, (MissingParametersError, ParseIntError)):
        logger.info("invalid_query_parameters error=%s", exc)
        return _error_response(HTTP_422, str(exc))

    if isinstance(exc, NotFoundError):
        logger.error("%s", exc)
        return _error_response(HTTP_404, str(exc))

    if isinstance(exc, DatabaseQueryError):
        logger.error("database_query_error operation=%r", exc.operation)
        return _error_response(HTTP_422, DatabaseQueryError.message)

    if isinstance(exc, ModerationError):
        logger.error("moderation_failed kind=%s error=%s", type(exc).__name__, exc)
        return _error_response(HTTP_500, INTERNAL_SERVER_ERROR)

    logger.error("unhandled_domain_error kind=%s error=%s", type(exc).__name__, exc)
    return _error_response(HTTP_422, str(exc))


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def handle_domain_error(_request: Request, exc: DomainError) -> JSONResponse:
        return domain_error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(_request: Request, exc: RequestValidationError) -> JSONResponse:
        detail = _describe_validation_errors(exc)
        logger.error("Cannot deserialize request body: %s", detail)
        return _error_response(
            HTTP_422,
            f"Cannot deserialize request body: {detail}",
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == HTTP_404:
            logger.warning("Requested route not found method=%s path=%s", request.method, request.url.path)
            return _error_response(HTTP_404, ROUTE_NOT_FOUND)

        logger.warning(
            "http_rejection status=%s method=%s path=%s detail=%s",
            exc.status_code,
            request.method,
            request.url.path,
            exc.detail,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected_error kind=%s", type(exc).__name__)
        return _error_response(HTTP_500, INTERNAL_SERVER_ERROR)
