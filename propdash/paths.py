"""
Dotted path resolution for listing items.

Items reach the listing utilities either as plain dicts (straight from the
data layer) or as pydantic models. Both are walked the same way: mappings by
key, everything else by attribute. A path that cannot be followed resolves to
MISSING instead of raising, so one malformed record never aborts a listing.
"""

from collections.abc import Iterator, Mapping
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel


class _Missing:
    """Marker for a field that is absent or unreachable."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Final = _Missing()

_SCALARS = (str, int, float, Decimal, bool, datetime, date, Enum)


def split_path(path: str) -> list[str]:
    """Splits 'guest.first_name' into ['guest', 'first_name']."""
    return [part for part in path.split(".") if part]


def _step(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key, MISSING)
    # Only public attributes are reachable; '_private' parts never resolve
    if key.startswith("_"):
        return MISSING
    return getattr(current, key, MISSING)


def resolve_path(item: Any, path: str) -> Any:
    """
    Returns the value at a dotted path, or MISSING.

    None anywhere along the path (including the final value) is treated as
    absent, matching how optional relations come back from the data layer.
    """
    parts = split_path(path)
    if not parts:
        return MISSING

    current = item
    for key in parts:
        if current is None or current is MISSING:
            return MISSING
        current = _step(current, key)

    if current is None:
        return MISSING
    return current


def to_text(value: Any) -> str:
    """Text form used by search and select-filter comparisons."""
    if value is MISSING or value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def iter_text_values(item: Any) -> Iterator[str]:
    """Yields every scalar leaf of an item as text, depth first."""
    if item is None or item is MISSING:
        return
    if isinstance(item, _SCALARS):
        yield to_text(item)
    elif isinstance(item, BaseModel):
        for name in type(item).model_fields:
            yield from iter_text_values(getattr(item, name, None))
    elif isinstance(item, Mapping):
        for value in item.values():
            yield from iter_text_values(value)
    elif isinstance(item, (list, tuple, set, frozenset)):
        for value in item:
            yield from iter_text_values(value)
