from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._logging import logger, redact_term
from .filtering import build_filter_condition, ensure_items, filter_items, is_unconstrained
from .sorting import SortOrder, parse_sort_order, sort_items

if TYPE_CHECKING:
    from .conditions import Condition, DynCondition
    from .config import ListingOptions
    from .pagination import PageResult

T = TypeVar("T")


class ListingQuery(Generic[T]):
    """
    Implements the Builder Pattern for a dashboard listing.
    Allows chaining methods (e.g., .search().where().sort_by())
    before the filter -> sort pipeline runs.

    Usage:
        bookings_page = (
            ListingQuery(bookings, get_listing("bookings"))
            .search("ali")
            .where("status", "confirmed")
            .sort_by("check_in_date", "desc")
            .page(2)
        )
    """

    def __init__(self, items: Iterable[T], options: "ListingOptions | None" = None):
        self.items = ensure_items(items)
        self.options = options

        # Internal state of the query
        self.search_term = ""
        self.search_fields: list[str] = list(options.search_fields) if options else []
        self.select_filters: dict[str, Any] = options.default_filters() if options else {}
        self.sort_key: str | None = options.sort_key if options else None
        self.sort_order: SortOrder = options.sort_order if options else SortOrder.NONE

        # User-provided extra condition
        self.user_condition: DynCondition | None = None

    # --- BUILDER INTERFACE ---

    def search(self, term: str, fields: Iterable[str] | None = None) -> "ListingQuery[T]":
        """
        Sets the free-text search term.

        Args:
            term: Text typed in the search box
            fields: Dotted paths to search; keeps the listing's fields when None
        """
        self.search_term = term or ""
        if fields is not None:
            self.search_fields = list(fields)
        return self

    def where(self, path: str, value: Any) -> "ListingQuery[T]":
        """Sets one select filter. 'all' clears it."""
        self.select_filters[path] = value
        return self

    def filter(self, condition: "Condition") -> "ListingQuery[T]":
        """
        Adds an arbitrary condition. Multiple calls are combined with AND.

        Usage:
            ListingQuery(units).filter(Attr("rent") <= 1000).all()
        """
        from .conditions import wrap_condition

        new_condition = wrap_condition(condition)
        if self.user_condition is not None:
            self.user_condition = self.user_condition & new_condition
        else:
            self.user_condition = new_condition
        return self

    def sort_by(
        self, key: str | None, order: "SortOrder | str" = SortOrder.ASCENDING
    ) -> "ListingQuery[T]":
        """
        Sets the sort column and direction ('none' keeps the input order).

        Raises:
            InvalidSortKeyError: If the listing does not mark key sortable.
        """
        if self.options is not None:
            self.options.check_sort_key(key)
        self.sort_key = key
        self.sort_order = parse_sort_order(order)
        return self

    def unsorted(self) -> "ListingQuery[T]":
        self.sort_order = SortOrder.NONE
        return self

    def condition(self) -> "DynCondition | None":
        """The combined condition this query filters with, if any."""
        condition = build_filter_condition(
            self.search_term, self.search_fields, self.select_filters
        )
        if self.user_condition is None:
            return condition
        if condition is None:
            return self.user_condition
        return condition & self.user_condition

    # --- EXECUTION STRATEGIES ---

    def _run(self) -> list[T]:
        logger.info(
            "Running listing query",
            extra={
                "listing": self.options.name if self.options else None,
                "term_hash": redact_term(self.search_term),
                "has_filter": self.user_condition is not None
                or not all(is_unconstrained(v) for v in self.select_filters.values()),
                "sort_key": self.sort_key,
                "sort_order": self.sort_order.value,
            },
        )

        results = filter_items(
            self.items, self.search_term, self.search_fields, self.select_filters
        )
        if self.user_condition is not None:
            results = [item for item in results if self.user_condition.evaluate(item)]
        return list(sort_items(results, self.sort_key, self.sort_order))

    def __iter__(self) -> Iterator[T]:
        """Lazy Execution: the pipeline runs only when iteration starts."""
        return iter(self._run())

    def all(self) -> list[T]:
        return self._run()

    def first(self) -> T | None:
        results = self._run()
        return results[0] if results else None

    def count(self) -> int:
        return len(self._run())

    def page(self, number: int = 1, size: int | None = None) -> "PageResult[T]":
        """
        Runs the query and returns one page of the results.

        Args:
            number: 1-based page number
            size: Page size; defaults to the listing's page_size (or 10)

        Raises:
            InvalidPageError: If number or size is below 1.
        """
        from .pagination import paginate

        if size is None:
            size = self.options.page_size if self.options else 10
        return paginate(self._run(), number, size)
