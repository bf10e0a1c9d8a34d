"""Field Rules

A Rule binds a field accessor to an ordered tuple of checks. Each check
is a predicate, an optional guard, a message and a field name. Rules are
plain immutable values and can be declared as a table:

    Rule(
        accessor=attrgetter("title"),
        checks=(
            RuleCheck(not_(string_empty_or_null()), message="Title must not be null or empty", field_name="Title"),
        ),
    )

or through the fluent builder, which produces the same structure:

    rule_for("title")
        .must(not_(string_empty_or_null()))
            .with_message("Title must not be null or empty")
            .with_field_name("Title")
        .must(string_matches(PRINTABLE_ASCII))
            .when(not_(string_empty_or_null()))
            .with_message("Title must contain only printable ASCII characters")
            .with_field_name("Title")

Evaluation extracts the value once. Every check whose guard passes is
evaluated; a failing check records an error and the next check still runs.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from operator import attrgetter
from typing import Any, Callable

from .errors import ValidationErrorDetail
from .predicates import Predicate, as_predicate

Accessor = Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class RuleCheck:
    """One guarded predicate of a rule."""
    predicate: Predicate
    when: Predicate | None = None
    message: str | None = None
    field_name: str | None = None

    def applies_to(self, value: Any) -> bool:
        return self.when is None or self.when.test(value)

    def failure(self, value: Any, default_field: str) -> ValidationErrorDetail:
        name = self.field_name or default_field
        return ValidationErrorDetail(
            field=name,
            message=self.message or f"{name} must satisfy {self.predicate.constraint_name}",
            constraint=self.predicate.constraint_name,
            actual_value=value,
        )


@dataclass(frozen=True, slots=True)
class Rule:
    """A field accessor with its ordered checks."""
    accessor: Accessor
    checks: tuple[RuleCheck, ...]
    name: str = "value"

    def evaluate(self, instance: Any) -> list[ValidationErrorDetail]:
        value = self.accessor(instance)
        return [
            check.failure(value, self.name)
            for check in self.checks
            if check.applies_to(value) and not check.predicate.test(value)
        ]


class RuleBuilder:
    """Fluent construction of a Rule.

    ``when``, ``with_message`` and ``with_field_name`` modify the check
    added by the most recent ``must``.
    """

    def __init__(self, accessor: Accessor | str, name: str | None = None):
        if isinstance(accessor, str):
            self._name = name or accessor
            self._accessor: Accessor = attrgetter(accessor)
        else:
            self._name = name or getattr(accessor, "__name__", "value")
            self._accessor = accessor
        self._checks: list[RuleCheck] = []

    def must(self, predicate: Predicate | Callable[[Any], bool]) -> RuleBuilder:
        self._checks.append(RuleCheck(predicate=as_predicate(predicate)))
        return self

    def when(self, guard: Predicate | Callable[[Any], bool]) -> RuleBuilder:
        return self._amend("when", when=as_predicate(guard))

    def with_message(self, message: str) -> RuleBuilder:
        return self._amend("with_message", message=message)

    def with_field_name(self, field_name: str) -> RuleBuilder:
        return self._amend("with_field_name", field_name=field_name)

    def _amend(self, method: str, **changes) -> RuleBuilder:
        if not self._checks:
            raise ValueError(f"{method}() must follow a must() call")
        self._checks[-1] = replace(self._checks[-1], **changes)
        return self

    def build(self) -> Rule:
        return Rule(accessor=self._accessor, checks=tuple(self._checks), name=self._name)


def rule_for(accessor: Accessor | str, name: str | None = None) -> RuleBuilder:
    """Begin a rule bound to a field accessor or attribute name."""
    return RuleBuilder(accessor, name)
