"""Error boundaries.

A mapper sits on the edge of a module and turns whatever escapes it,
raised exceptions or foreign ``Err`` values, into that module's AppError.
"""
from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from .builders import db_connection_failed, internal_error, transaction_failed
from .types import AppError, Err, ErrorCode, ErrorContext, Result

T = TypeVar("T")

CONNECTION_HINTS = ("connect", "connection")


def driver_message(exc: Exception) -> str:
    """The DBAPI message when SQLAlchemy wrapped one, else ``str(exc)``."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig else str(exc)


class ErrorMapper(ABC):

    @abstractmethod
    def map_error(self, error: AppError) -> AppError:
        ...

    @abstractmethod
    def map_exception(self, exc: Exception, action: str | None = None) -> AppError:
        ...

    def map_result(self, result: Result[T, AppError]) -> Result[T, AppError]:
        if result.is_ok():
            return result
        return Err(self.map_error(result.unwrap_err()))


class DatabaseErrorMapper(ErrorMapper):
    """SQLAlchemy exceptions to E4xxx codes.

    IntegrityError -> E4013, OperationalError -> E4001 when the driver
    complains about connecting, otherwise E4003. Any other SQLAlchemyError
    is E4003 and non-database exceptions are E9001. With an ``action`` the
    message becomes ``"Failed to <action>: <driver message>"``.
    """

    def __init__(self, origin: str = "database"):
        self.origin = origin

    def map_error(self, error: AppError) -> AppError:
        if error.code.category == "database":
            return error
        return error.with_context(origin=self.origin)

    def map_exception(self, exc: Exception, action: str | None = None) -> AppError:
        message = driver_message(exc)

        if isinstance(exc, IntegrityError):
            error = AppError(
                code=ErrorCode.E4013_CHECK_CONSTRAINT,
                message=f"Constraint violation: {message}",
                context=ErrorContext(origin=self.origin),
            )
        elif isinstance(exc, OperationalError) and any(h in message.lower() for h in CONNECTION_HINTS):
            error = db_connection_failed(message, origin=self.origin).error
        elif isinstance(exc, SQLAlchemyError):
            error = transaction_failed(message, origin=self.origin).error
        else:
            error = internal_error(f"Database error: {exc}", origin=self.origin).error

        if action is not None:
            return AppError(
                code=error.code,
                message=f"Failed to {action}: {message}",
                context=error.context,
                metadata={**error.metadata, "action": action},
                cause=exc,
            )
        return AppError(
            code=error.code,
            message=error.message,
            context=error.context,
            metadata=error.metadata,
            cause=exc,
        )


def map_errors(mapper: ErrorMapper, action: str | None = None):
    """Wrap an async Result-returning function so nothing escapes unmapped.

    Usage:
        @map_errors(DatabaseErrorMapper("netflix_shows"), "create netflix show")
        async def create(...) -> Result[NetflixShowDTO, AppError]:
            ...
    """
    def decorator(fn: Callable[..., Awaitable[Result[T, AppError]]]):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs) -> Result[T, AppError]:
            try:
                result = await fn(*args, **kwargs)
            except Exception as exc:
                return Err(mapper.map_exception(exc, action))
            return mapper.map_result(result)
        return wrapper
    return decorator


def map_db_errors(origin: str = "database", action: str | None = None):
    return map_errors(DatabaseErrorMapper(origin), action)
