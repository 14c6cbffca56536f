"""
Pagination support for propdash.

Listings are paged server-side: the data layer returns one page of records
together with total_pages / has_next / has_prev. This module covers both
ends of that exchange:

- PageState / paginate(): compute the page flags from counts, the way the
  listing endpoints do.
- next_page() / previous_page() / go_to_page(): turn a navigation request
  into the destination page number. The flags are the authority on whether
  a move is allowed; the arithmetic only bounds where it lands.
- parse_page_param() / page_query(): read and write the ?page= parameter the
  navigation layer routes on.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ._logging import logger
from .exceptions import InvalidPageError, handle_validation_errors
from .filtering import ensure_items

T = TypeVar("T")

FIRST_PAGE = 1


class PageDirection(str, Enum):
    NEXT = "next"
    PREVIOUS = "previous"


class PageState(BaseModel):
    """
    Position within a paged listing, as reported by the data layer.

    has_next / has_prev may be stricter than the arithmetic allows (the
    server can know the next page is empty) but never looser.
    """

    model_config = ConfigDict(frozen=True)

    current_page: int = Field(default=FIRST_PAGE, ge=FIRST_PAGE)
    total_pages: int = Field(default=0, ge=0)
    has_next: bool = False
    has_prev: bool = False

    @model_validator(mode="after")
    def _check_flags(self) -> "PageState":
        if self.has_next and self.current_page >= self.total_pages:
            raise ValueError("has_next requires current_page < total_pages")
        if self.has_prev and self.current_page <= FIRST_PAGE:
            raise ValueError("has_prev requires current_page > 1")
        return self

    @classmethod
    def from_counts(cls, page: int, total_items: int, page_size: int) -> "PageState":
        """
        Derives the flags for one page of a listing from its counts.

        A page past the end has neither next nor previous, so the controls
        of an out-of-range page are both disabled.
        """
        if page < FIRST_PAGE:
            raise InvalidPageError(f"Page must be >= 1, got {page}", value=page)
        if page_size < 1:
            raise InvalidPageError(f"Page size must be >= 1, got {page_size}", value=page_size)

        total_pages = math.ceil(max(total_items, 0) / page_size)
        return cls(
            current_page=page,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=FIRST_PAGE < page <= total_pages,
        )


def load_page_state(data: Mapping[str, Any]) -> PageState:
    """
    Validates page flags received from the data layer.

    Raises:
        InvalidPageStateError: If the payload breaks the PageState invariants.
    """
    with handle_validation_errors(model_name="PageState"):
        return PageState.model_validate(dict(data))


@dataclass
class PageResult(Generic[T]):
    """
    Represents a single page of a listing.

    Attributes:
        items: The records on this page
        current_page: 1-based page number
        total_pages: Number of pages in the listing (0 when it is empty)
        total_items: Number of records across all pages
        has_next: Whether a next page may be requested
        has_prev: Whether a previous page may be requested
    """

    items: list[T]
    current_page: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool

    @property
    def count(self) -> int:
        """Number of items on this page."""
        return len(self.items)

    @property
    def state(self) -> PageState:
        return PageState(
            current_page=self.current_page,
            total_pages=self.total_pages,
            has_next=self.has_next,
            has_prev=self.has_prev,
        )


def paginate(items: Iterable[T], page: int = FIRST_PAGE, page_size: int = 10) -> PageResult[T]:
    """
    Slices one page out of a collection.

    A page past the end yields an empty page rather than an error.

    Raises:
        InvalidPageError: If page or page_size is below 1.
        InvalidItemsError: If items is not a collection of records.
    """
    records = ensure_items(items)
    state = PageState.from_counts(page, len(records), page_size)
    start = (page - 1) * page_size

    logger.debug(
        "Paginating items",
        extra={"page": page, "page_size": page_size, "total_pages": state.total_pages},
    )
    return PageResult(
        items=list(records[start : start + page_size]),
        current_page=state.current_page,
        total_pages=state.total_pages,
        total_items=len(records),
        has_next=state.has_next,
        has_prev=state.has_prev,
    )


# --- Navigation ---


def next_page(state: PageState) -> int:
    """Destination of a 'next' request: min(current + 1, total), or a no-op."""
    if not state.has_next or state.total_pages == 0:
        return state.current_page
    return min(state.current_page + 1, state.total_pages)


def previous_page(state: PageState) -> int:
    """Destination of a 'previous' request: max(current - 1, 1), or a no-op."""
    if not state.has_prev or state.total_pages == 0:
        return state.current_page
    return max(state.current_page - 1, FIRST_PAGE)


def go_to_page(state: PageState, target: int) -> int:
    """Destination of a direct jump, clamped to [1, total_pages]."""
    if state.total_pages == 0:
        return state.current_page
    return min(max(target, FIRST_PAGE), state.total_pages)


def change_page(state: PageState, request: "PageDirection | str | int") -> int:
    """
    Resolves a navigation request against a page state.

    Args:
        state: Where the listing currently is
        request: PageDirection.NEXT / PageDirection.PREVIOUS (or their string
            values), or an explicit page number

    Returns:
        The page number to hand to the navigation layer. Equal to
        state.current_page when the request is a no-op.
    """
    if isinstance(request, bool):
        raise TypeError("Page request must be a direction or a page number, got bool")
    if isinstance(request, int):
        destination = go_to_page(state, request)
    else:
        direction = PageDirection(request)
        if direction is PageDirection.NEXT:
            destination = next_page(state)
        else:
            destination = previous_page(state)

    logger.debug(
        "Page change resolved",
        extra={
            "current_page": state.current_page,
            "total_pages": state.total_pages,
            "request": request.value if isinstance(request, PageDirection) else request,
            "destination": destination,
        },
    )
    return destination


def parse_page_param(value: Any) -> int:
    """
    Reads a ?page= value. Missing, non-numeric and values below 1 read as page 1.
    """
    if value is None or isinstance(value, bool):
        return FIRST_PAGE
    try:
        page = int(str(value).strip())
    except ValueError:
        return FIRST_PAGE
    return page if page >= FIRST_PAGE else FIRST_PAGE


def page_query(params: "str | Mapping[str, Any] | None", page: int) -> str:
    """
    Builds the query string for a destination page, keeping other parameters.

    Usage:
        page_query("status=active&page=2", 3)  # -> "?status=active&page=3"
    """
    if params is None:
        pairs: list[tuple[str, str]] = []
    elif isinstance(params, str):
        pairs = parse_qsl(params.lstrip("?"), keep_blank_values=True)
    else:
        pairs = [(key, str(value)) for key, value in params.items()]

    pairs = [(key, value) for key, value in pairs if key != "page"]
    pairs.append(("page", str(page)))
    return f"?{urlencode(pairs)}"
