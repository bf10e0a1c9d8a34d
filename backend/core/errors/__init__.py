"""Monadic Error Handling System

Result types plus a typed error taxonomy used from the database helpers
up to the HTTP boundary.

Key components:
- Result[T, E]: container for success/failure
- AppError: error with code, message, envelope payload and context
- ErrorCode: error code taxonomy mapped to HTTP statuses
- Builder functions: ergonomic error construction

Usage:
    from core.errors import Ok, Result, AppError, not_found

    async def find_show(show_id: int) -> Result[NetflixShow, AppError]:
        show = await session.get(NetflixShow, show_id)
        if show is None:
            return not_found("NetflixShow", show_id, origin="netflix_shows")
        return Ok(show)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .builders import (
    validation_error,
    required_field,
    db_error,
    not_found,
    db_connection_failed,
    transaction_failed,
    internal_error,
)

from .boundaries import (
    ErrorMapper,
    DatabaseErrorMapper,
    map_errors,
    map_db_errors,
)

from .handlers import (
    AppErrorException,
    register_error_handlers,
    result_to_response,
    raise_error,
    raise_result,
)

__all__ = [
    "Result", "Ok", "Err", "AppError", "ErrorCode", "ErrorContext",
    "validation_error", "required_field", "db_error", "not_found",
    "db_connection_failed", "transaction_failed", "internal_error",
    "ErrorMapper", "DatabaseErrorMapper", "map_errors", "map_db_errors",
    "AppErrorException", "register_error_handlers", "result_to_response",
    "raise_error", "raise_result",
]
