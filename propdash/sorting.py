from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

from ._logging import logger
from .coercion import to_sort_value
from .exceptions import InvalidSortOrderError
from .filtering import ensure_items
from .paths import resolve_path

T = TypeVar("T")


class SortOrder(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"
    NONE = "none"


_ALIASES = {
    "asc": SortOrder.ASCENDING,
    "desc": SortOrder.DESCENDING,
    "": SortOrder.NONE,
}


def parse_sort_order(order: "SortOrder | str | None") -> SortOrder:
    """Accepts a SortOrder, its value, or the 'asc' / 'desc' shorthands."""
    if order is None:
        return SortOrder.NONE
    if isinstance(order, SortOrder):
        return order
    if isinstance(order, str):
        key = order.strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return SortOrder(key)
        except ValueError as e:
            raise InvalidSortOrderError(order, original_error=e) from e
    raise InvalidSortOrderError(order)


def sort_items(
    items: Iterable[T],
    sort_key: str | None,
    sort_order: "SortOrder | str | None" = SortOrder.NONE,
) -> Sequence[T]:
    """
    Orders items by a numeric or date-like field.

    With SortOrder.NONE (or no sort key) the input sequence is returned as-is.
    Otherwise a new list is returned, stable for equal keys. Keys that are
    missing or cannot be read as a number or a date go last in both
    directions, keeping their input order.

    Raises:
        InvalidSortOrderError: For an unknown order string.
        InvalidItemsError: If items is not a collection of records.
    """
    order = parse_sort_order(sort_order)
    records = ensure_items(items)

    if order is SortOrder.NONE or not sort_key:
        return records

    keyed: list[tuple[float, T]] = []
    unordered: list[T] = []
    for item in records:
        value = to_sort_value(resolve_path(item, sort_key))
        if value is None:
            unordered.append(item)
        else:
            keyed.append((value, item))

    # sorted() keeps ties in input order, also with reverse=True
    keyed = sorted(keyed, key=lambda pair: pair[0], reverse=order is SortOrder.DESCENDING)

    logger.debug(
        "Sorted items",
        extra={
            "sort_key": sort_key,
            "sort_order": order.value,
            "total": len(records),
            "unordered": len(unordered),
        },
    )
    return [item for _, item in keyed] + unordered


def sort_key_value(item: Any, sort_key: str) -> float | None:
    """The comparable value sort_items() uses for one item."""
    return to_sort_value(resolve_path(item, sort_key))
