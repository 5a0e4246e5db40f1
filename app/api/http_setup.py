"""Request middleware and error handlers shared by the inspections API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.errors import ApiError, ApiErrorCode, error_envelope
from app.core.config import AppConfig
from app.core.logging import bind_request_id
from app.core.security import SECURITY_HEADERS


def _declared_length(request: Request) -> int:
    try:
        return int(request.headers.get("content-length") or 0)
    except ValueError:
        return 0


def _validation_message(exc: RequestValidationError) -> str:
    """Summarize validation errors as ``location: reason`` pairs."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        reason = str(error.get("msg") or "invalid value")
        problems.append(f"{location}: {reason}" if location else reason)
    return "; ".join(problems) or "Invalid request"


def register_http_middleware(
    app: FastAPI, *, config: AppConfig, logger: logging.Logger
) -> None:
    """Bind request ids, reject oversized bodies and add security headers."""
    max_bytes = config.security.request_max_bytes

    @app.middleware("http")
    async def inspection_request_middleware(request: Request, call_next):
        request_id = bind_request_id(request.headers)
        if _declared_length(request) > max_bytes:
            response = JSONResponse(
                status_code=413,
                content=error_envelope(
                    ApiErrorCode.REQUEST_TOO_LARGE,
                    f"Request body exceeds {max_bytes} bytes.",
                ),
            )
        else:
            response = await call_next(request)

        response.headers["X-Request-ID"] = request_id
        response.headers.update(SECURITY_HEADERS)
        logger.info(
            "request_completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
            },
        )
        return response


def register_exception_handlers(app: FastAPI, *, logger: logging.Logger) -> None:
    """Render every failure with the ``{"error_code", "message"}`` envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if isinstance(exc, ApiError):
            error_code, message = str(exc.error_code), exc.message
        else:
            error_code, message = f"HTTP_{exc.status_code}", str(exc.detail)
        logger.warning(
            "request_failed",
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "error_code": error_code,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(error_code, message),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logger.warning("request_invalid", extra={"path": request.url.path, "status_code": 422})
        return JSONResponse(
            status_code=422,
            content=error_envelope(ApiErrorCode.VALIDATION_ERROR, message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("request_crashed", extra={"path": request.url.path, "status_code": 500})
        return JSONResponse(
            status_code=500,
            content=error_envelope(ApiErrorCode.INTERNAL_SERVER_ERROR, "Internal server error"),
        )
