"""Shortcuts that build an AppError and wrap it in Err."""
from typing import Any

from .types import AppError, Err, ErrorCode, ErrorContext


def _err(code: ErrorCode, message: str, *, origin: str = "", data: Any = None,
         cause: Exception | None = None, **metadata) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        data=data,
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


def _with_reason(message: str, reason: str) -> str:
    return f"{message}: {reason}" if reason else message


# Request / validation (400)

def validation_error(message: str, *, data: Any = None, field: str | None = None,
                     code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
                     origin: str = "", **metadata) -> Err[AppError]:
    """``data`` is sent to the client, typically the grouped field errors."""
    return _err(code, message, origin=origin, data=data, field=field, **metadata)


def required_field(name: str, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"{name} must not be null",
        code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        field=name,
        origin=origin,
    )


# Persistence (404 / 500)

def db_error(message: str, *, code: ErrorCode = ErrorCode.E4000_DATABASE_GENERIC,
             table: str | None = None, origin: str = "", cause: Exception | None = None,
             **metadata) -> Err[AppError]:
    return _err(code, message, origin=origin, cause=cause, table=table, **metadata)


def not_found(entity: str, id: int | str | None = None, origin: str = "", *,
              message: str | None = None) -> Err[AppError]:
    """``message`` overrides the default "<entity> not found"."""
    return db_error(
        message or f"{entity} not found",
        code=ErrorCode.E4010_NOT_FOUND,
        entity=entity,
        entity_id=None if id is None else str(id),
        origin=origin,
    )


def db_connection_failed(reason: str = "", origin: str = "") -> Err[AppError]:
    return db_error(
        _with_reason("Database connection failed", reason),
        code=ErrorCode.E4001_CONNECTION_FAILED,
        origin=origin,
    )


def transaction_failed(reason: str = "", origin: str = "") -> Err[AppError]:
    return db_error(
        _with_reason("Database transaction failed", reason),
        code=ErrorCode.E4003_TRANSACTION_FAILED,
        origin=origin,
    )


# Unexpected (500)

def internal_error(message: str, *, origin: str = "", cause: Exception | None = None,
                   **metadata) -> Err[AppError]:
    return _err(ErrorCode.E9001_UNEXPECTED_ERROR, message, origin=origin, cause=cause, **metadata)
