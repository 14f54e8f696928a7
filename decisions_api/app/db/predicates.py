"""
Predicate evaluation for the in-memory database.

A predicate is a ``(column, operator, value)`` triple collected by a
query builder.  Evaluating it against a record happens in two steps:
the column is resolved to a value (``resolve_column``) and the value is
compared with the operator (``compare``).

Column resolution accepts both naming conventions used in the code
base.  Rows written by repositories use snake_case column names, while
rows built from domain objects in tests sometimes carry camelCase keys
(``fullText``).  A lookup tries the exact name first and then the
camelCase form of a snake_case name.  A field that cannot be found
resolves to ``MISSING`` rather than raising.

The comparison rules are deliberately permissive: unknown operators
match every record, and a missing field or a pair of values that cannot
be ordered simply fails to match.  Nothing here validates a query.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Sequence, Union


class _Missing:
    """Marker for a field that is absent from a record."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_SNAKE_SEGMENT = re.compile(r"_([a-z])")

ORDERING_OPERATORS = {
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
}


def to_camel_case(name: str) -> str:
    """Convert ``snake_case`` to ``camelCase`` (``full_text`` -> ``fullText``)."""
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), name)


def strip_qualifier(column: str) -> str:
    """Drop a ``table.`` prefix from a column reference."""
    parts = str(column or "").split(".")
    return parts[1] if len(parts) > 1 else parts[0]


def resolve_column(record: Mapping[str, Any], column: str) -> Any:
    """Look up ``column`` in ``record``.

    The exact name is tried first, then its camelCase form.  Returns
    ``MISSING`` when neither key is present.
    """
    name = strip_qualifier(column)
    if name in record:
        return record[name]
    camel = to_camel_case(name)
    if camel in record:
        return record[camel]
    return MISSING


def _strict_equals(left: Any, right: Any) -> bool:
    # Booleans only equal booleans (True must not match 1).
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return left == right


def compare(value: Any, operator: str, other: Any) -> bool:
    """Evaluate ``value <operator> other``.

    Parameters
    ----------
    value : Any
        The resolved field value, possibly ``MISSING``.
    operator : str
        One of ``=``, ``!=``, ``>``, ``>=``, ``<``, ``<=`` or ``ilike``.
        Any other string is a pass-through and always matches.
    other : Any
        The value supplied by the caller.
    """
    if operator == "=":
        if value is MISSING:
            return False
        return _strict_equals(value, other)
    if operator == "!=":
        return not _strict_equals(value, other)
    if operator in ORDERING_OPERATORS:
        # An absent field or incomparable types never satisfy an ordering.
        if value is MISSING or value is None or other is None:
            return False
        try:
            return bool(ORDERING_OPERATORS[operator](value, other))
        except TypeError:
            return False
    if operator == "ilike":
        if isinstance(value, str) and isinstance(other, str):
            return other.replace("%", "").lower() in value.lower()
        return False
    # Pass-through: unknown operators are not validated.
    return True


@dataclass(frozen=True)
class Predicate:
    """A single ``column operator value`` condition."""

    column: str
    operator: str
    value: Any

    def matches(self, record: Mapping[str, Any]) -> bool:
        return compare(resolve_column(record, self.column), self.operator, self.value)


@dataclass(frozen=True)
class AnyOf:
    """Disjunction of predicates, treated as one opaque condition."""

    predicates: tuple

    def matches(self, record: Mapping[str, Any]) -> bool:
        return any(predicate.matches(record) for predicate in self.predicates)


Condition = Union[Predicate, AnyOf]


class ExpressionBuilder:
    """Factory handed to ``where(callback)`` for compound conditions.

    ``eb("title", "ilike", term)`` builds a predicate and
    ``eb.or_([...])`` combines several into one ``AnyOf``.
    """

    def __call__(self, column: str, operator: str, value: Any) -> Predicate:
        return Predicate(column, operator, value)

    def or_(self, conditions: Sequence[Condition]) -> AnyOf:
        return AnyOf(tuple(conditions))


def build_condition(column_or_callback: Union[str, Callable[[ExpressionBuilder], Condition]],
                    operator: str | None = None,
                    value: Any = None) -> Condition:
    """Turn the arguments of a ``where`` call into a condition."""
    if callable(column_or_callback):
        return column_or_callback(ExpressionBuilder())
    return Predicate(column_or_callback, operator, value)


def matches_all(record: Mapping[str, Any], conditions: Sequence[Condition]) -> bool:
    """Return ``True`` if ``record`` satisfies every condition."""
    return all(condition.matches(record) for condition in conditions)


def filter_records(records: Sequence[Mapping[str, Any]],
                   conditions: Sequence[Condition]) -> List[Mapping[str, Any]]:
    """Return the records satisfying all conditions, in their original order."""
    return [record for record in records if matches_all(record, conditions)]
