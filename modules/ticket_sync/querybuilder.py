"""
Freshdesk filter query builder.

Predicates compose independently of the field they test:

    query = all_of(
        Parameter('agent_id').equals(42),
        Parameter('status').equals(TicketStatus.OPEN),
    )
    str(query)  # "(agent_id:42 AND status:2)"
"""

from enum import Enum
from typing import Any


def _literal(value: Any) -> str:
    """Render a Python value as a Freshdesk query literal."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, (int, float)):
        return str(value)
    escaped = str(value).replace("'", "\\'")
    return f"'{escaped}'"


class Predicate:
    """A rendered query fragment."""

    def __init__(self, expression: str):
        self.expression = expression

    def __str__(self) -> str:
        return self.expression

    def __repr__(self) -> str:
        return f"Predicate({self.expression!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Predicate) and other.expression == self.expression

    def __hash__(self) -> int:
        return hash(self.expression)

    def __and__(self, other: 'Predicate') -> 'Predicate':
        return all_of(self, other)

    def __or__(self, other: 'Predicate') -> 'Predicate':
        return any_of(self, other)


class Parameter:
    """A queryable ticket field."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("Parameter name must not be empty")
        self.name = name

    def equals(self, value: Any) -> Predicate:
        return Predicate(f"{self.name}:{_literal(value)}")


def _combine(operator: str, predicates: tuple) -> Predicate:
    if not predicates:
        raise ValueError(f"{operator} needs at least one predicate")
    if len(predicates) == 1:
        return predicates[0]
    joined = f" {operator} ".join(str(p) for p in predicates)
    return Predicate(f"({joined})")


def all_of(*predicates: Predicate) -> Predicate:
    """Combine predicates with AND."""
    return _combine('AND', predicates)


def any_of(*predicates: Predicate) -> Predicate:
    """Combine predicates with OR."""
    return _combine('OR', predicates)
