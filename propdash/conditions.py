"""
Filter condition DSL for propdash.

This module provides a DynCondition wrapper and Attr builder for describing
listing filters. Conditions are built on boto3's condition objects and
evaluate() walks the resulting tree in memory against dicts or pydantic
models, resolving attribute names as dotted paths.

Design:
- DynCondition wraps a boto3 ConditionBase, stored in .raw
- Attr wraps boto3 Attr internally and returns DynCondition
- Operators &, |, ~ on DynCondition produce new DynCondition instances
- TextContains / SelectEquals are boto3 Contains / Equals subclasses that
  carry the dashboard's matching rules (case-insensitive search,
  select-widget equality).

Usage:
    from propdash import Attr

    condition = Attr("guest.first_name").icontains("ali") & Attr("status").matches("confirmed")
    visible = [booking for booking in bookings if condition.evaluate(booking)]
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Union

from boto3.dynamodb.conditions import And as Boto3And
from boto3.dynamodb.conditions import Attr as Boto3Attr
from boto3.dynamodb.conditions import AttributeBase as Boto3AttributeBase
from boto3.dynamodb.conditions import AttributeExists as Boto3AttributeExists
from boto3.dynamodb.conditions import AttributeNotExists as Boto3AttributeNotExists
from boto3.dynamodb.conditions import BeginsWith as Boto3BeginsWith
from boto3.dynamodb.conditions import Between as Boto3Between
from boto3.dynamodb.conditions import ConditionBase as Boto3ConditionBase
from boto3.dynamodb.conditions import Contains as Boto3Contains
from boto3.dynamodb.conditions import Equals as Boto3Equals
from boto3.dynamodb.conditions import GreaterThan as Boto3GreaterThan
from boto3.dynamodb.conditions import GreaterThanEquals as Boto3GreaterThanEquals
from boto3.dynamodb.conditions import In as Boto3In
from boto3.dynamodb.conditions import LessThan as Boto3LessThan
from boto3.dynamodb.conditions import LessThanEquals as Boto3LessThanEquals
from boto3.dynamodb.conditions import Not as Boto3Not
from boto3.dynamodb.conditions import NotEquals as Boto3NotEquals
from boto3.dynamodb.conditions import Or as Boto3Or
from boto3.dynamodb.conditions import Size as Boto3Size

from .coercion import as_bool, is_numeric_text, to_sort_value
from .exceptions import ConditionError
from .paths import MISSING, iter_text_values, resolve_path, to_text

# Type alias for condition parameter (DynCondition or raw boto3 for passthrough)
Condition = Union["DynCondition", Boto3ConditionBase]


class TextContains(Boto3Contains):
    """contains() that ignores case when evaluated in memory."""


class SelectEquals(Boto3Equals):
    """
    Equality as a select widget means it.

    A boolean expected value matches the field's boolean semantics, and a
    numeric string matches a number field by value ("1200" == 1200.0). Any
    other string matches the text form of a non-string field (ids, enums).
    Everything else is strict equality.
    """


class DynCondition:
    """
    propdash-owned wrapper for filter conditions.

    This class wraps a boto3 condition object (stored in .raw) and provides
    Python operators for composing conditions.

    Users typically don't instantiate this directly - use Attr() instead.

    Attributes:
        raw: The underlying boto3 ConditionBase object (internal use)
    """

    __slots__ = ("raw",)

    def __init__(self, raw: Boto3ConditionBase) -> None:
        self.raw = raw

    def __and__(self, other: Condition) -> DynCondition:
        """
        Combine conditions with AND.

        Usage:
            condition = (Attr("rent") >= 900) & (Attr("status") == "vacant")
        """
        return DynCondition(Boto3And(self.raw, _extract_raw(other)))

    def __rand__(self, other: Condition) -> DynCondition:
        """Support for: boto3_condition & DynCondition"""
        return DynCondition(Boto3And(_extract_raw(other), self.raw))

    def __or__(self, other: Condition) -> DynCondition:
        """
        Combine conditions with OR.

        Usage:
            condition = Attr("name").icontains("ali") | Attr("email").icontains("ali")
        """
        return DynCondition(Boto3Or(self.raw, _extract_raw(other)))

    def __ror__(self, other: Condition) -> DynCondition:
        """Support for: boto3_condition | DynCondition"""
        return DynCondition(Boto3Or(_extract_raw(other), self.raw))

    def __invert__(self) -> DynCondition:
        """
        Negate a condition with NOT.

        Usage:
            condition = ~Attr("banned").matches("true")
        """
        return DynCondition(Boto3Not(self.raw))

    def evaluate(self, item: Any) -> bool:
        """Evaluates this condition against a single item."""
        return evaluate(self, item)

    def __repr__(self) -> str:
        return f"DynCondition({self.raw!r})"


class Attr:
    """
    Represents an item field, addressed by dotted path, for building conditions.

    Usage:
        # Comparison operators
        Attr("rent") >= 900
        Attr("status") == "active"
        Attr("check_in_date") < "2024-06-01"

        # Functions
        Attr("supplier").exists()
        Attr("name").begins_with("Sun")
        Attr("guest.email").contains("@gmail.com")
        Attr("rent").between(500, 1500)
        Attr("status").is_in(["active", "maintenance"])

        # Dashboard matching rules
        Attr("guest.first_name").icontains("ali")
        Attr("is_active").matches("true")
    """

    __slots__ = ("name", "_boto3_attr")

    def __init__(self, name: str) -> None:
        self.name = name
        self._boto3_attr = Boto3Attr(name)

    # Comparison Operators - all return DynCondition

    def __eq__(self, value: Any) -> DynCondition:  # type: ignore[override]
        return DynCondition(self._boto3_attr.eq(value))

    def __ne__(self, value: Any) -> DynCondition:  # type: ignore[override]
        return DynCondition(self._boto3_attr.ne(value))

    def __lt__(self, value: Any) -> DynCondition:
        return DynCondition(self._boto3_attr.lt(value))

    def __le__(self, value: Any) -> DynCondition:
        return DynCondition(self._boto3_attr.lte(value))

    def __gt__(self, value: Any) -> DynCondition:
        return DynCondition(self._boto3_attr.gt(value))

    def __ge__(self, value: Any) -> DynCondition:
        return DynCondition(self._boto3_attr.gte(value))

    # Function Methods - all return DynCondition

    def exists(self) -> DynCondition:
        return DynCondition(self._boto3_attr.exists())

    def not_exists(self) -> DynCondition:
        return DynCondition(self._boto3_attr.not_exists())

    def begins_with(self, prefix: str) -> DynCondition:
        return DynCondition(self._boto3_attr.begins_with(prefix))

    def contains(self, value: Any) -> DynCondition:
        """
        Checks if the field contains value.

        For strings: case-sensitive substring match
        For lists/sets: membership check
        """
        return DynCondition(self._boto3_attr.contains(value))

    def between(self, low: Any, high: Any) -> DynCondition:
        return DynCondition(self._boto3_attr.between(low, high))

    def is_in(self, values: list[Any]) -> DynCondition:
        return DynCondition(self._boto3_attr.is_in(values))

    def icontains(self, term: str) -> DynCondition:
        """Case-insensitive substring match, as the dashboard search box does."""
        return DynCondition(TextContains(self._boto3_attr, term))

    def matches(self, value: Any) -> DynCondition:
        """Select-filter equality (see SelectEquals)."""
        return DynCondition(SelectEquals(self._boto3_attr, value))

    def __repr__(self) -> str:
        return f"Attr({self.name!r})"


def _extract_raw(condition: Condition) -> Boto3ConditionBase:
    """
    Extracts the boto3 condition from either DynCondition or raw boto3 condition.

    Raises:
        TypeError: If condition is neither DynCondition nor boto3 ConditionBase
    """
    if isinstance(condition, DynCondition):
        return condition.raw
    elif isinstance(condition, Boto3ConditionBase):
        return condition
    else:
        raise TypeError(
            f"Expected DynCondition or boto3 ConditionBase, got {type(condition).__name__}"
        )


def wrap_condition(condition: Condition) -> DynCondition:
    """
    Ensures a condition is wrapped in DynCondition.

    If already a DynCondition, returns as-is.
    If a raw boto3 condition, wraps it in DynCondition.
    """
    if isinstance(condition, DynCondition):
        return condition
    return DynCondition(_extract_raw(condition))


# --- In-memory evaluation ---


def _operand(value: Any, item: Any) -> Any:
    # Size must be checked before AttributeBase, it is both a condition and an attribute
    if isinstance(value, Boto3Size):
        target = resolve_path(item, value.name)
        try:
            return len(target)
        except TypeError:
            return MISSING
    if isinstance(value, Boto3AttributeBase):
        return resolve_path(item, value.name)
    return value


def _compare(left: Any, right: Any, op: str) -> bool:
    if left is MISSING or right is MISSING:
        return False
    try:
        return _apply(left, right, op)
    except TypeError:
        pass
    # Mixed representations (datetime vs ISO string, Decimal vs str) meet on the sort axis
    left_key, right_key = to_sort_value(left), to_sort_value(right)
    if left_key is None or right_key is None:
        return False
    return _apply(left_key, right_key, op)


def _apply(left: Any, right: Any, op: str) -> bool:
    if op == "<":
        return bool(left < right)
    if op == "<=":
        return bool(left <= right)
    if op == ">":
        return bool(left > right)
    return bool(left >= right)


def _text_contains(actual: Any, term: Any) -> bool:
    if actual is MISSING:
        return False
    needle = to_text(term).lower()
    # Nested records and lists are searched by their scalar values, never their keys
    return any(needle in text.lower() for text in iter_text_values(actual))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _select_equals(actual: Any, expected: Any) -> bool:
    if actual is MISSING:
        return False
    if isinstance(expected, bool):
        return as_bool(actual) is expected
    if is_numeric_text(expected) and _is_number(actual):
        return to_sort_value(actual) == to_sort_value(expected)
    if isinstance(expected, str) and not isinstance(actual, str):
        return to_text(actual) == expected
    return bool(actual == expected)


def _contains(actual: Any, value: Any) -> bool:
    if isinstance(actual, str):
        return isinstance(value, str) and value in actual
    if isinstance(actual, (list, tuple, set, frozenset)):
        return value in actual
    return False


def evaluate(condition: Condition, item: Any) -> bool:
    """
    Evaluates a condition tree against one item.

    Field names are dotted paths resolved with resolve_path(). A comparison
    involving a missing field is false; it never raises for missing or
    mistyped data.

    Raises:
        ConditionError: If the tree contains a condition type with no
            in-memory meaning (e.g. attribute_type()).
    """
    raw = _extract_raw(condition)
    values = raw.get_expression()["values"]

    # Logical operators
    if isinstance(raw, Boto3And):
        return all(evaluate(value, item) for value in values)
    if isinstance(raw, Boto3Or):
        return any(evaluate(value, item) for value in values)
    if isinstance(raw, Boto3Not):
        return not evaluate(values[0], item)

    operands = [_operand(value, item) for value in values]
    actual = operands[0]

    # Subclasses first: they override their boto3 parents
    if isinstance(raw, TextContains):
        return _text_contains(actual, operands[1])
    if isinstance(raw, SelectEquals):
        return _select_equals(actual, operands[1])

    if isinstance(raw, Boto3AttributeExists):
        return actual is not MISSING
    if isinstance(raw, Boto3AttributeNotExists):
        return actual is MISSING

    if actual is MISSING:
        return False

    if isinstance(raw, Boto3Equals):
        return bool(actual == operands[1])
    if isinstance(raw, Boto3NotEquals):
        return bool(actual != operands[1])
    if isinstance(raw, Boto3LessThan):
        return _compare(actual, operands[1], "<")
    if isinstance(raw, Boto3LessThanEquals):
        return _compare(actual, operands[1], "<=")
    if isinstance(raw, Boto3GreaterThan):
        return _compare(actual, operands[1], ">")
    if isinstance(raw, Boto3GreaterThanEquals):
        return _compare(actual, operands[1], ">=")
    if isinstance(raw, Boto3Between):
        return _compare(actual, operands[1], ">=") and _compare(actual, operands[2], "<=")
    if isinstance(raw, Boto3In):
        return actual in operands[1]
    if isinstance(raw, Boto3BeginsWith):
        return isinstance(actual, str) and actual.startswith(to_text(operands[1]))
    if isinstance(raw, Boto3Contains):
        return _contains(actual, operands[1])

    raise ConditionError(f"Condition {type(raw).__name__} cannot be evaluated in memory")
