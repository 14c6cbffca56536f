"""
Free-text search and select filters for listing pages.

A listing page narrows the records it was given in two ways: a search box
matched against a handful of text fields, and zero or more dropdowns that
pin a field to one value. Both are expressed as one condition (see
propdash.conditions) and applied with a stable, order-preserving filter.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from ._logging import logger, redact_term
from .coercion import is_bool_text, parse_bool_text
from .conditions import Attr, DynCondition
from .exceptions import InvalidItemsError
from .paths import iter_text_values

T = TypeVar("T")

# Select value meaning "no constraint on this field"
ALL = "all"


def is_unconstrained(value: Any) -> bool:
    """True for the 'all' sentinel and for empty / None dropdown values."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == "" or value.strip().lower() == ALL
    return False


def ensure_items(items: Any) -> Sequence[Any]:
    """
    Validates the items argument at the call boundary.

    Strings, bytes, mappings and single models are iterable but are never a
    collection of records; passing one is a programmer error.
    """
    if isinstance(items, (str, bytes, bytearray, Mapping, BaseModel)):
        raise InvalidItemsError(items)
    if not isinstance(items, Iterable):
        raise InvalidItemsError(items)
    if isinstance(items, Sequence):
        return items
    return list(items)


def search_condition(search_term: str, search_fields: Iterable[str]) -> DynCondition | None:
    """ORs a case-insensitive contains() over every search field."""
    term = search_term or ""
    if not term:
        return None

    condition: DynCondition | None = None
    for path in search_fields:
        part = Attr(path).icontains(term)
        condition = part if condition is None else condition | part
    return condition


def select_condition(select_filters: Mapping[str, Any] | None) -> DynCondition | None:
    """ANDs one matches() per active select filter."""
    condition: DynCondition | None = None
    for path, expected in (select_filters or {}).items():
        if is_unconstrained(expected):
            continue
        value = parse_bool_text(expected) if is_bool_text(expected) else expected
        part = Attr(path).matches(value)
        condition = part if condition is None else condition & part
    return condition


def build_filter_condition(
    search_term: str = "",
    search_fields: Iterable[str] = (),
    select_filters: Mapping[str, Any] | None = None,
) -> DynCondition | None:
    """
    Combines search and select filters into a single condition.

    Returns None when nothing constrains the listing. A search term without
    search fields cannot be expressed per field and is left out; see
    filter_items() for how that case is matched.
    """
    search = search_condition(search_term, search_fields)
    select = select_condition(select_filters)
    if search is None:
        return select
    if select is None:
        return search
    return search & select


def _matches_any_text(item: Any, term: str) -> bool:
    needle = term.lower()
    return any(needle in text.lower() for text in iter_text_values(item))


def filter_items(
    items: Iterable[T],
    search_term: str = "",
    search_fields: Iterable[str] = (),
    select_filters: Mapping[str, Any] | None = None,
) -> list[T]:
    """
    Returns the items matching the search term and every active select filter.

    Args:
        items: The records to narrow (dicts or pydantic models)
        search_term: Free text; empty matches everything
        search_fields: Dotted paths searched case-insensitively. When empty,
            every scalar value of the item is searched instead.
        select_filters: Dotted path -> expected value. 'all', '' and None
            leave a field unconstrained; 'true'/'false' compare against the
            field's boolean value.

    Returns:
        A new list, in input order.

    Raises:
        InvalidItemsError: If items is not a collection of records.

    Usage:
        filter_items(bookings, "ali", ["guest.first_name", "guest.last_name"],
                     {"status": "confirmed", "property.name": "all"})
    """
    records = ensure_items(items)
    fields = list(search_fields)
    term = search_term or ""

    condition = build_filter_condition(term, fields, select_filters)
    search_everything = bool(term) and not fields

    if condition is None and not search_everything:
        return list(records)

    result = [
        item
        for item in records
        if (condition is None or condition.evaluate(item))
        and (not search_everything or _matches_any_text(item, term))
    ]

    logger.debug(
        "Filtered items",
        extra={
            "term_hash": redact_term(term),
            "search_fields": fields,
            "select_filters": sorted((select_filters or {}).keys()),
            "total": len(records),
            "matched": len(result),
        },
    )
    return result
