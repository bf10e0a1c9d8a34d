"""Declarative Validation System

Field rules are built from composable predicates, each optionally guarded
by a precondition. A validator runs every rule against a record and
returns a ValidationResult; it never raises for invalid data.

Key Features:
- Immutable predicates with ~, & and | combinators
- Guarded checks ("validate only if present")
- Rules declared as a table or with a fluent builder
- Collect-all error accumulation in declaration order
- Field-grouped error formatting for API responses

Usage:
    from core.validation import (
        AbstractValidator, rule_for, not_, string_empty_or_null,
        string_matches, group_errors,
    )

    class TitleValidator(AbstractValidator[ShowDTO]):
        def rules(self):
            return [
                rule_for("title")
                    .must(string_matches(r"[\\x20-\\x7E]+"))
                    .when(not_(string_empty_or_null()))
                    .with_message("Title must contain only printable ASCII characters")
                    .with_field_name("Title"),
            ]

    result = TitleValidator().validate(dto)
    if not result.is_valid:
        return group_errors(result)
"""

from .predicates import (
    Predicate,
    NullValue,
    StringEmptyOrNull,
    StringMatches,
    StringSizeLessThanOrEqual,
    Not,
    And,
    Or,
    CustomPredicate,
    not_,
    null_value,
    string_empty_or_null,
    string_matches,
    string_size_less_than_or_equal,
    custom,
    as_predicate,
)

from .errors import (
    ValidationErrorDetail,
    ValidationResult,
    VALIDATION_FAILED_MESSAGE,
)

from .rules import (
    Rule,
    RuleCheck,
    RuleBuilder,
    rule_for,
)

from .validator import AbstractValidator

from .formatting import group_errors

__all__ = [
    "Predicate", "NullValue", "StringEmptyOrNull", "StringMatches",
    "StringSizeLessThanOrEqual", "Not", "And", "Or", "CustomPredicate",
    "not_", "null_value", "string_empty_or_null", "string_matches",
    "string_size_less_than_or_equal", "custom", "as_predicate",
    "ValidationErrorDetail", "ValidationResult", "VALIDATION_FAILED_MESSAGE",
    "Rule", "RuleCheck", "RuleBuilder", "rule_for",
    "AbstractValidator",
    "group_errors",
]
