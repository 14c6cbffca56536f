import math
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .paths import MISSING

_datetime_adapter = TypeAdapter(datetime)
_date_adapter = TypeAdapter(date)

_NUMERIC_TEXT = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

_BOOL_TEXT = {"true": True, "false": False}


def is_bool_text(value: Any) -> bool:
    """True for the strings 'true' / 'false' (any case) that select widgets emit."""
    return isinstance(value, str) and value.strip().lower() in _BOOL_TEXT


def parse_bool_text(value: str) -> bool:
    """Parses 'true' / 'false'. Raises ValueError for anything else."""
    key = value.strip().lower()
    if key not in _BOOL_TEXT:
        raise ValueError(f"Not a boolean string: {value!r}")
    return _BOOL_TEXT[key]


def as_bool(value: Any) -> bool | None:
    """
    The boolean semantics of a field value, or None when it has none.

    Real booleans map to themselves and 'true'/'false' strings are parsed.
    Anything else (numbers, names, missing fields) has no boolean reading.
    """
    if isinstance(value, bool):
        return value
    if is_bool_text(value):
        return parse_bool_text(value)
    return None


def is_numeric_text(value: Any) -> bool:
    """True for strings such as '1200', '-3.5' or '1e3'."""
    return isinstance(value, str) and bool(_NUMERIC_TEXT.match(value.strip()))


def _instant(value: datetime) -> float:
    # Naive datetimes are read as UTC so mixed inputs still order consistently
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def _parse_date_text(text: str) -> float | None:
    try:
        return _instant(_datetime_adapter.validate_python(text))
    except PydanticValidationError:
        pass
    try:
        parsed = _date_adapter.validate_python(text)
    except PydanticValidationError:
        return None
    return _instant(datetime.combine(parsed, time.min))


def to_sort_value(value: Any) -> float | None:
    """
    Converts a field value into a float that orders it, or None.

    Architectural Note:
    -------------------
    Listing columns mix plain numbers (rent, guest counts), datetimes coming
    from the ORM and ISO strings coming from JSON payloads. Everything is
    mapped onto one numeric axis: numbers as-is, dates and datetimes as UTC
    epoch seconds. Numeric strings are read as numbers before any date
    parsing, since pydantic would otherwise read '1200' as an epoch offset.
    None means "cannot be ordered"; the caller decides where those go.
    """
    if value is MISSING or value is None:
        return None

    if isinstance(value, Enum):
        value = value.value

    result: float | None
    if isinstance(value, bool):
        result = float(value)
    elif isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, Decimal):
        try:
            result = float(value)
        except (InvalidOperation, ValueError):
            return None
    elif isinstance(value, datetime):
        result = _instant(value)
    elif isinstance(value, date):
        result = _instant(datetime.combine(value, time.min))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if _NUMERIC_TEXT.match(text):
            result = float(text)
        else:
            result = _parse_date_text(text)
    else:
        return None

    if result is None or math.isnan(result):
        return None
    return result
