# src/app/domain/validation.py
"""
Declarative validation for catalog entities.

Each entity type has a rule table: an ordered list of fields, each with an
ordered list of rules. `validate` walks the table and reports at most one
violation per field (the first rule that fails), so callers can rely on a
single entry per offending field.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from src.app.domain.models import Recipe, Source

NAME_MAX_LENGTH = 255
INT_MAX = 2_147_483_647


@dataclass(frozen=True)
class Rule:
    """A single check. `predicate` returns True when the value is acceptable."""
    predicate: Callable[[Any], bool]
    message: str

    def check(self, value: Any, field_name: str) -> Optional[str]:
        if self.predicate(value):
            return None
        return self.message.format(field=field_name)


@dataclass(frozen=True)
class FieldRules:
    attribute: str
    name: str  # name exposed in violations (matches the JSON field)
    rules: tuple[Rule, ...]


@dataclass(frozen=True)
class Violation:
    field: str
    attribute: str
    reason: str


def required() -> Rule:
    return Rule(lambda value: value is not None, "The {field} field is required.")


def required_text() -> Rule:
    def _present(value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip() != ""
        return True

    return Rule(_present, "The {field} field is required.")


def max_length(limit: int) -> Rule:
    return Rule(
        lambda value: value is None or len(value) <= limit,
        "The field {field} exceeds maximum length of %d." % limit,
    )


def int_range(minimum: int, maximum: int = INT_MAX) -> Rule:
    return Rule(
        lambda value: value is None or minimum <= value <= maximum,
        "The field {field} must be between %d and %d." % (minimum, maximum),
    )


SOURCE_RULES: tuple[FieldRules, ...] = (
    FieldRules("name", "name", (required_text(), max_length(NAME_MAX_LENGTH))),
    FieldRules("has_page_numbers", "hasPageNumbers", (required(),)),
)

# page_number is deliberately unchecked against Source.has_page_numbers
RECIPE_RULES: tuple[FieldRules, ...] = (
    FieldRules("name", "name", (required_text(), max_length(NAME_MAX_LENGTH))),
    FieldRules("source_id", "sourceId", (required(),)),
    FieldRules("preparation_time", "preparationTime", (required(), int_range(1))),
)

RULES_BY_TYPE: dict[type, tuple[FieldRules, ...]] = {
    Source: SOURCE_RULES,
    Recipe: RECIPE_RULES,
}


def rules_for(instance: Any) -> tuple[FieldRules, ...]:
    try:
        return RULES_BY_TYPE[type(instance)]
    except KeyError:
        raise TypeError(f"No validation rules registered for {type(instance).__name__}") from None


def validate(
    instance: Any,
    rules: Optional[Sequence[FieldRules]] = None,
) -> list[Violation]:
    """
    Evaluate the rule table against an entity.

    Args:
        instance: The entity to check
        rules: Rule table to use; defaults to the one registered for the type

    Returns:
        Violations in rule-table order; empty when the entity is valid
    """
    table = rules if rules is not None else rules_for(instance)
    violations: list[Violation] = []

    for spec in table:
        value = getattr(instance, spec.attribute, None)
        for rule in spec.rules:
            reason = rule.check(value, spec.name)
            if reason is not None:
                violations.append(Violation(field=spec.name, attribute=spec.attribute, reason=reason))
                break

    return violations


def is_valid(instance: Any, rules: Optional[Sequence[FieldRules]] = None) -> bool:
    return not validate(instance, rules)
