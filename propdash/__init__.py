from .conditions import Attr, Condition, DynCondition, evaluate
from .config import ListingOptions, get_listing, register_listing
from .exceptions import (
    ConditionError,
    InvalidItemsError,
    InvalidPageError,
    InvalidPageStateError,
    InvalidSortKeyError,
    InvalidSortOrderError,
    PropdashError,
    UnknownListingError,
)
from .fields import Filterable, Searchable, Sortable
from .filtering import ALL, build_filter_condition, filter_items
from .pagination import (
    PageDirection,
    PageResult,
    PageState,
    change_page,
    go_to_page,
    load_page_state,
    next_page,
    page_query,
    paginate,
    parse_page_param,
    previous_page,
)
from .paths import MISSING, resolve_path
from .query import ListingQuery
from .sorting import SortOrder, sort_items

__all__ = [
    # Core utilities
    "filter_items",
    "build_filter_condition",
    "sort_items",
    "SortOrder",
    "resolve_path",
    "MISSING",
    "ALL",
    # Pagination
    "PageState",
    "PageResult",
    "PageDirection",
    "paginate",
    "next_page",
    "previous_page",
    "go_to_page",
    "change_page",
    "load_page_state",
    "parse_page_param",
    "page_query",
    # Conditions DSL
    "Attr",  # Primary builder for conditions
    "DynCondition",  # Wrapper type (rarely used directly)
    "Condition",  # Type alias for type hints
    "evaluate",
    # Listings
    "ListingQuery",
    "ListingOptions",
    "get_listing",
    "register_listing",
    "Searchable",
    "Filterable",
    "Sortable",
    # Exceptions
    "PropdashError",
    "InvalidItemsError",
    "InvalidSortKeyError",
    "InvalidSortOrderError",
    "InvalidPageError",
    "InvalidPageStateError",
    "UnknownListingError",
    "ConditionError",
]
