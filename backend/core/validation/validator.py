"""Record Validators

Subclasses declare their rules once; the compiled rule tuple is immutable
and the validator can be shared by every request.

Usage:
    class ShowValidator(AbstractValidator[ShowDTO]):
        def rules(self):
            return [
                rule_for("title")
                    .must(not_(string_empty_or_null()))
                    .with_message("Title must not be null or empty")
                    .with_field_name("Title"),
            ]

    result = ShowValidator().validate(dto)
    if not result.is_valid:
        ...
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, TypeVar

from core.logging import validation_logger

from .errors import ValidationResult
from .rules import Rule, RuleBuilder

T = TypeVar("T")

log = validation_logger()


class AbstractValidator(ABC, Generic[T]):
    """Runs an ordered set of field rules against a record."""

    __slots__ = ("_rules",)

    def __init__(self):
        self._rules: tuple[Rule, ...] = tuple(
            r.build() if isinstance(r, RuleBuilder) else r for r in self.rules()
        )

    @abstractmethod
    def rules(self) -> Iterable[Rule | RuleBuilder]:
        """Declare the rules in evaluation order."""

    @property
    def compiled_rules(self) -> tuple[Rule, ...]:
        return self._rules

    def validate(self, instance: T) -> ValidationResult:
        """Run every rule and collect all failures in declaration order.

        Raises ValueError when called without a record.
        """
        if instance is None:
            raise ValueError(f"{type(self).__name__}.validate() requires a record, got None")

        result = ValidationResult()
        for rule in self._rules:
            result.extend(rule.evaluate(instance))

        if not result.is_valid:
            log.debug(
                "validation_failed",
                validator=type(self).__name__,
                error_count=len(result.errors),
                fields=result.fields,
            )
        return result
