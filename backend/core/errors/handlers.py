"""FastAPI exception handlers.

Everything that leaves the API, AppErrors raised from routes, request
parsing failures, routing errors and unexpected exceptions, is rendered
as the ``{status, message, data}`` envelope.
"""
from __future__ import annotations

from typing import NoReturn

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logging import get_logger

from .types import AppError, ErrorCode, ErrorContext

log = get_logger("netflix_shows.errors")


class AppErrorException(Exception):
    """Carries an AppError out of a route handler."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def _request_context(request: Request, origin: str) -> ErrorContext:
    correlation_id = request.headers.get("X-Correlation-ID")
    if correlation_id:
        return ErrorContext(correlation_id=correlation_id, origin=origin,
                            request_id=request.headers.get("X-Request-ID"))
    return ErrorContext(origin=origin, request_id=request.headers.get("X-Request-ID"))


def result_to_response(error: AppError) -> JSONResponse:
    """Log the error and render its envelope."""
    (log.warning if error.status < 500 else log.error)(
        "error_response",
        error_code=error.code.name,
        category=error.code.category,
        status=error.status,
        error_message=error.message,
        origin=error.context.origin,
        metadata=error.metadata,
    )
    return JSONResponse(status_code=error.status, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    return result_to_response(exc.error.with_context(
        correlation_id=request.headers.get("X-Correlation-ID"),
        request_id=request.headers.get("X-Request-ID"),
    ))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown paths and unsupported methods keep their own status code."""
    message = str(exc.detail) if exc.detail else f"HTTP {exc.status_code}"
    log.warning("http_exception", status=exc.status_code, error_message=message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "message": message, "data": None},
        headers=getattr(exc, "headers", None),
    )


def _describe(err: dict) -> str:
    field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
    msg = err.get("msg", "Invalid value")
    return f"{field}: {msg}" if field else msg


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed input FastAPI rejected before the route ran.

    Non-integer ids, invalid JSON and wrongly typed fields all answer 400.
    """
    errors = exc.errors()
    code = (
        ErrorCode.E2021_INVALID_JSON
        if any(err.get("type") == "json_invalid" for err in errors)
        else ErrorCode.E2004_INVALID_TYPE
    )
    return result_to_response(AppError(
        code=code,
        message="Invalid request: " + "; ".join(_describe(err) for err in errors),
        context=_request_context(request, "request_parsing"),
        metadata={"error_count": len(errors)},
    ))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_exception", error_type=type(exc).__name__)
    return result_to_response(AppError(
        code=ErrorCode.E9001_UNEXPECTED_ERROR,
        message=str(exc) or "An unexpected error occurred",
        context=_request_context(request, "unhandled"),
        cause=exc,
    ))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def raise_error(error: AppError) -> NoReturn:
    raise AppErrorException(error)


def raise_result(result) -> None:
    """Raise the error of an ``Err``; do nothing for ``Ok``.

    Usage:
        result = await service.get(show_id)
        raise_result(result)
        show = result.unwrap()
    """
    if result.is_err():
        raise AppErrorException(result.unwrap_err())
