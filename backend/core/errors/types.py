"""Error taxonomy and Result type.

Engines and database helpers return ``Ok``/``Err`` values instead of
raising; the API layer turns an ``Err`` into the response envelope.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union, final
from uuid import uuid4

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound="AppError")


class ErrorCode(Enum):
    """Numbered error codes.

    E2xxx request and validation errors (400)
    E4xxx persistence errors (E4010 is 404, the rest 500)
    E9xxx anything unexpected (500)
    """
    E2000_VALIDATION_GENERIC = 2000
    E2001_REQUIRED_FIELD_MISSING = 2001
    E2004_INVALID_TYPE = 2004
    E2021_INVALID_JSON = 2021

    E4000_DATABASE_GENERIC = 4000
    E4001_CONNECTION_FAILED = 4001
    E4003_TRANSACTION_FAILED = 4003
    E4010_NOT_FOUND = 4010
    E4013_CHECK_CONSTRAINT = 4013

    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        if 2000 <= self.value < 3000:
            return "validation"
        if 4000 <= self.value < 5000:
            return "database"
        return "internal"

    @property
    def http_status(self) -> int:
        if self is ErrorCode.E4010_NOT_FOUND:
            return 404
        return 400 if self.category == "validation" else 500


def _short_id() -> str:
    return uuid4().hex[:8]


@dataclass(frozen=True, slots=True)
class ErrorContext:
    correlation_id: str = field(default_factory=_short_id)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    origin: str = ""
    request_id: str | None = None


@dataclass(frozen=True, slots=True)
class AppError:
    """An error on its way to the client.

    ``message`` and ``data`` become the envelope's ``message`` and ``data``;
    ``metadata`` and ``cause`` only reach the logs.
    """
    code: ErrorCode
    message: str
    context: ErrorContext = field(default_factory=ErrorContext)
    data: Any = None
    metadata: dict = field(default_factory=dict)
    cause: Exception | None = None

    @property
    def status(self) -> int:
        return self.code.http_status

    def with_context(self, *, correlation_id: str | None = None, **changes) -> AppError:
        """Copy with context fields replaced. A falsy correlation id keeps the current one."""
        if correlation_id:
            changes["correlation_id"] = correlation_id
        return replace(self, context=replace(self.context, **changes))

    def to_dict(self) -> dict:
        return {"status": self.status, "message": self.message, "data": self.data}

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (correlation_id={self.context.correlation_id})"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable) -> Err[E]:
        return self


Result = Union[Ok[T], Err[E]]
