from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .exceptions import InvalidSortKeyError, UnknownListingError
from .fields import FILTERABLE, SEARCHABLE, SORTABLE, collect_paths
from .models import Assignment, Booking, Guest, InventoryItem, Invitation, Property, Unit, User
from .sorting import SortOrder, parse_sort_order


@dataclass
class ListingOptions:
    """
    Per-page settings of a dashboard listing.

    Holds what the page searches, which dropdown filters it offers, its
    default ordering and its page size. An empty sort_fields leaves every
    column sortable. table_mode is the default of the card/table switch; the
    rendering layer owns it, listings only carry it.
    """

    name: str
    search_fields: tuple[str, ...] = ()
    filter_fields: tuple[str, ...] = ()
    sort_fields: tuple[str, ...] = ()
    sort_key: str | None = None
    sort_order: SortOrder = SortOrder.NONE
    page_size: int = 10
    table_mode: bool = False
    model: type[BaseModel] | None = None

    def __post_init__(self) -> None:
        self.sort_order = parse_sort_order(self.sort_order)
        if self.page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {self.page_size}")
        self.check_sort_key(self.sort_key)

    @classmethod
    def for_model(
        cls,
        name: str,
        model: type[BaseModel],
        extra_search_fields: tuple[str, ...] = (),
        extra_filter_fields: tuple[str, ...] = (),
        extra_sort_fields: tuple[str, ...] = (),
        **kwargs: Any,
    ) -> "ListingOptions":
        """
        Builds options from a model's Searchable() / Filterable() / Sortable() markers.

        Relations are not marked on the shared reference models, since a
        property name is searched on one page and filtered on another; pass
        those paths through extra_search_fields / extra_filter_fields.
        """
        search = tuple(collect_paths(model, SEARCHABLE)) + tuple(extra_search_fields)
        filters = tuple(collect_paths(model, FILTERABLE)) + tuple(extra_filter_fields)
        sorts = tuple(collect_paths(model, SORTABLE)) + tuple(extra_sort_fields)
        return cls(
            name=name,
            search_fields=search,
            filter_fields=filters,
            sort_fields=sorts,
            model=model,
            **kwargs,
        )

    def check_sort_key(self, key: str | None) -> None:
        """
        Raises:
            InvalidSortKeyError: If key is not one of sort_fields
        """
        if key is None or not self.sort_fields or key in self.sort_fields:
            return
        raise InvalidSortKeyError(key, self.sort_fields)

    def default_filters(self) -> dict[str, str]:
        """Every filter field set to 'all', the initial state of the dropdowns."""
        return dict.fromkeys(self.filter_fields, "all")


@dataclass
class ListingRegistry:
    """Name -> ListingOptions lookup for the dashboard pages."""

    listings: dict[str, ListingOptions] = field(default_factory=dict)

    def register(self, options: ListingOptions) -> ListingOptions:
        """
        Raises:
            ValueError: If the name is already registered
        """
        if options.name in self.listings:
            raise ValueError(f"Listing '{options.name}' is already registered")
        self.listings[options.name] = options
        return options

    def get(self, name: str) -> ListingOptions:
        """
        Raises:
            UnknownListingError: If nothing is registered under name
        """
        try:
            return self.listings[name]
        except KeyError as e:
            raise UnknownListingError(name, original_error=e) from e

    def names(self) -> list[str]:
        return sorted(self.listings)


registry = ListingRegistry()


def register_listing(options: ListingOptions) -> ListingOptions:
    return registry.register(options)


def get_listing(name: str) -> ListingOptions:
    return registry.get(name)


# --- Built-in dashboard listings ---

register_listing(ListingOptions.for_model("properties", Property, page_size=6))
register_listing(ListingOptions.for_model("units", Unit, page_size=4))
register_listing(
    ListingOptions.for_model(
        "bookings",
        Booking,
        extra_search_fields=(
            "guest.first_name",
            "guest.last_name",
            "guest.email",
            "property.name",
            "unit.name",
        ),
        extra_filter_fields=("property.name",),
        sort_key="check_out_date",
        page_size=6,
        table_mode=True,
    )
)
register_listing(
    ListingOptions.for_model("guests", Guest, sort_key="created_at", page_size=6)
)
register_listing(
    ListingOptions.for_model("inventory", InventoryItem, page_size=10, table_mode=True)
)
register_listing(
    ListingOptions.for_model(
        "assignments",
        Assignment,
        extra_search_fields=("inventory_item.item_name",),
        extra_filter_fields=("property.name",),
        sort_key="assigned_at",
    )
)
register_listing(
    ListingOptions.for_model(
        "users", User, sort_key="created_at", sort_order=SortOrder.DESCENDING, page_size=6
    )
)
register_listing(
    ListingOptions.for_model("invitations", Invitation, sort_key="accepted_at", page_size=6)
)
