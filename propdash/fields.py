import types
import typing
from typing import Any

from pydantic import BaseModel, Field

SEARCHABLE = "_propdash_searchable"
FILTERABLE = "_propdash_filterable"
SORTABLE = "_propdash_sortable"


def _marked(flag: str, default: Any, kwargs: dict[str, Any]) -> Any:
    json_schema_extra = kwargs.pop("json_schema_extra", None) or {}
    json_schema_extra[flag] = True
    return Field(default, json_schema_extra=json_schema_extra, **kwargs)


def Searchable(default: Any = ..., **kwargs: Any) -> Any:
    """
    Marks a Pydantic field as matched by the listing search box.

    Usage:
        name: str = Searchable()

    Architectural Note:
    -------------------
    This function wraps the standard Pydantic Field. It injects a hidden flag
    into 'json_schema_extra'. collect_paths() inspects the flag to build the
    search fields of a listing, so the model stays the single place that says
    which columns are searchable.
    """
    return _marked(SEARCHABLE, default, kwargs)


def Filterable(default: Any = ..., **kwargs: Any) -> Any:
    """Marks a Pydantic field as driven by a select filter (dropdown)."""
    return _marked(FILTERABLE, default, kwargs)


def Sortable(default: Any = ..., **kwargs: Any) -> Any:
    """Marks a numeric or date Pydantic field as a sortable column."""
    return _marked(SORTABLE, default, kwargs)


def _has_flag(field_info: Any, flag: str) -> bool:
    extra = field_info.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(flag))


def _nested_model(annotation: Any) -> type[BaseModel] | None:
    """Returns the model class behind 'Model' or 'Model | None', if any."""
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        models = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(models) == 1:
            return _nested_model(models[0])
    return None


def collect_paths(model_cls: type[BaseModel], flag: str, prefix: str = "") -> list[str]:
    """
    Collects the dotted paths of every field carrying a marker flag.

    Nested models (e.g. Booking.guest) are walked, so a Searchable() field
    on GuestRef shows up as 'guest.first_name'. Declaration order is kept.
    """
    paths: list[str] = []
    for name, field_info in model_cls.model_fields.items():
        path = f"{prefix}{name}"
        if _has_flag(field_info, flag):
            paths.append(path)
        nested = _nested_model(field_info.annotation)
        if nested is not None:
            paths.extend(collect_paths(nested, flag, prefix=f"{path}."))
    return paths
