from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from pydantic import ValidationError as PydanticValidationError


class PropdashError(Exception):
    """Base exception for all propdash errors."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class InvalidItemsError(PropdashError):
    """Raised when a listing is handed something that is not a sequence of items."""

    def __init__(self, items: Any, original_error: Exception | None = None) -> None:
        super().__init__(
            f"Expected a sequence of items, got {type(items).__name__}", original_error
        )
        self.items_type = type(items)


class InvalidSortOrderError(PropdashError):
    """Raised for a sort order outside ascending/descending/none."""

    def __init__(self, order: Any, original_error: Exception | None = None) -> None:
        super().__init__(
            f"Unknown sort order {order!r}, expected 'ascending', 'descending' or 'none'",
            original_error,
        )
        self.order = order


class InvalidSortKeyError(PropdashError):
    """Raised when a listing is sorted by a column it does not mark sortable."""

    def __init__(
        self, key: str, allowed: tuple[str, ...], original_error: Exception | None = None
    ) -> None:
        super().__init__(
            f"Cannot sort by '{key}', sortable columns are: {', '.join(allowed)}",
            original_error,
        )
        self.key = key
        self.allowed = allowed


class InvalidPageError(PropdashError):
    """Raised when a page number or page size is below 1."""

    def __init__(
        self, message: str, value: Any | None = None, original_error: Exception | None = None
    ) -> None:
        super().__init__(message, original_error)
        self.value = value


class InvalidPageStateError(PropdashError):
    """Raised when externally supplied pagination flags fail validation."""

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message, original_error)
        self.errors = errors or []


class UnknownListingError(PropdashError):
    """Raised when no listing preset is registered under a name."""

    def __init__(self, name: str, original_error: Exception | None = None) -> None:
        super().__init__(f"Listing '{name}' is not registered", original_error)
        self.name = name


class ConditionError(PropdashError):
    """Raised when a condition cannot be evaluated in memory."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message, original_error)


@contextmanager
def handle_validation_errors(model_name: str | None = None) -> Generator[None, None, None]:
    """
    Context manager that catches pydantic.ValidationError
    and raises InvalidPageStateError instead.

    Args:
        model_name: Optional model name for better error messages

    Usage:
        with handle_validation_errors(model_name="PageState"):
            PageState.model_validate(data)
    """
    try:
        yield
    except PydanticValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidPageStateError(
            message=f"Invalid {model_name or 'page state'}: {details}",
            errors=[dict(err) for err in e.errors()],
            original_error=e,
        ) from e
