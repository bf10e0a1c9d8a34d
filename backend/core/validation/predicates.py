"""Compositional Predicates

Boolean checks over an extracted field value. Predicates are immutable
and combine via operators:
- ``~p``: negation
- ``p & q``: both must hold (short-circuit)
- ``p | q``: at least one must hold (lazy)

A predicate never raises for an unexpected input type; it answers False.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable
import re


def utf16_length(value: str) -> int:
    """Length in UTF-16 code units, the unit string lengths are counted in by API clients."""
    return len(value.encode("utf-16-le")) // 2


class Predicate(ABC):
    """Base class for field predicates."""

    @abstractmethod
    def test(self, value: Any) -> bool:
        """Return True when the value satisfies the predicate."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Human-readable constraint name for default messages and logs."""

    def __call__(self, value: Any) -> bool: return self.test(value)

    def __and__(self, other: Predicate) -> And: return And(self, other)

    def __or__(self, other: Predicate) -> Or: return Or(self, other)

    def __invert__(self) -> Not: return Not(self)


# ============================================================================
# Presence
# ============================================================================

@dataclass(frozen=True, slots=True)
class NullValue(Predicate):
    """True iff the value is None."""

    @property
    def constraint_name(self) -> str:
        return "null"

    def test(self, value: Any) -> bool:
        return value is None


@dataclass(frozen=True, slots=True)
class StringEmptyOrNull(Predicate):
    """True iff the value is None or a zero-length string."""

    @property
    def constraint_name(self) -> str:
        return "empty_or_null"

    def test(self, value: Any) -> bool:
        return value is None or (isinstance(value, str) and len(value) == 0)


# ============================================================================
# String checks
# ============================================================================

@dataclass(frozen=True)
class StringMatches(Predicate):
    """True iff the value is a string fully matching the pattern."""
    pattern: str
    flags: int = 0
    _compiled: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_compiled", re.compile(self.pattern, self.flags))

    @property
    def constraint_name(self) -> str:
        return f"pattern[{self.pattern}]"

    def test(self, value: Any) -> bool:
        return isinstance(value, str) and self._compiled.fullmatch(value) is not None


@dataclass(frozen=True, slots=True)
class StringSizeLessThanOrEqual(Predicate):
    """True iff the value is a string of at most ``size`` UTF-16 code units.

    Characters outside the Basic Multilingual Plane count as two.
    """
    size: int

    @property
    def constraint_name(self) -> str:
        return f"max_length[{self.size}]"

    def test(self, value: Any) -> bool:
        return isinstance(value, str) and utf16_length(value) <= self.size


# ============================================================================
# Combinators
# ============================================================================

@dataclass(frozen=True, slots=True)
class Not(Predicate):
    """Logical negation."""
    predicate: Predicate

    @property
    def constraint_name(self) -> str:
        return f"NOT({self.predicate.constraint_name})"

    def test(self, value: Any) -> bool:
        return not self.predicate.test(value)

    def __invert__(self) -> Predicate: return self.predicate


@dataclass(frozen=True, slots=True)
class And(Predicate):
    left: Predicate
    right: Predicate

    @property
    def constraint_name(self) -> str:
        return f"({self.left.constraint_name} AND {self.right.constraint_name})"

    def test(self, value: Any) -> bool:
        return self.left.test(value) and self.right.test(value)


@dataclass(frozen=True, slots=True)
class Or(Predicate):
    left: Predicate
    right: Predicate

    @property
    def constraint_name(self) -> str:
        return f"({self.left.constraint_name} OR {self.right.constraint_name})"

    def test(self, value: Any) -> bool:
        return self.left.test(value) or self.right.test(value)


# ============================================================================
# Custom
# ============================================================================

@dataclass(frozen=True, slots=True)
class CustomPredicate(Predicate):
    """Predicate from a plain function.

    Usage:
        is_even = CustomPredicate(lambda n: n % 2 == 0, name="even")
    """
    fn: Callable[[Any], bool]
    name: str = "custom"

    @property
    def constraint_name(self) -> str:
        return self.name

    def test(self, value: Any) -> bool:
        return bool(self.fn(value))


# ============================================================================
# Factories
# ============================================================================

_NULL_VALUE = NullValue()
_STRING_EMPTY_OR_NULL = StringEmptyOrNull()


def not_(predicate: Predicate | Callable[[Any], bool]) -> Predicate:
    return Not(as_predicate(predicate))


def null_value() -> Predicate:
    return _NULL_VALUE


def string_empty_or_null() -> Predicate:
    return _STRING_EMPTY_OR_NULL


def string_matches(pattern: str, flags: int = 0) -> Predicate:
    return StringMatches(pattern, flags)


def string_size_less_than_or_equal(size: int) -> Predicate:
    return StringSizeLessThanOrEqual(size)


def custom(fn: Callable[[Any], bool], name: str | None = None) -> Predicate:
    return CustomPredicate(fn, name=name or getattr(fn, "__name__", "custom"))


def as_predicate(obj: Predicate | Callable[[Any], bool]) -> Predicate:
    """Accept either a Predicate or a plain callable."""
    if isinstance(obj, Predicate):
        return obj
    if callable(obj):
        return custom(obj)
    raise TypeError(f"Expected a predicate or callable, got {type(obj).__name__}")
