"""Error grouping for API consumers."""
from __future__ import annotations

from .errors import ValidationResult


def group_errors(result: ValidationResult) -> dict[str, list[str]]:
    """Group error messages by field name.

    Messages keep the order in which they were produced; the returned
    mapping is ordered by field name.
    """
    grouped: dict[str, list[str]] = {}
    for detail in result.errors:
        grouped.setdefault(detail.field, []).append(detail.message)
    return {name: grouped[name] for name in sorted(grouped)}
