"""
Dashboard records as they arrive from the data layer.

Payloads use camelCase keys (checkInDate, isActive); the models accept
either spelling and expose snake_case attributes, which is what listing
paths refer to.
"""

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .fields import Filterable, Searchable, Sortable


class DashboardModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"


# --- Nested references (relations included with a record) ---


class GuestRef(DashboardModel):
    id: int
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class PropertyRef(DashboardModel):
    id: int
    name: str


class UnitRef(DashboardModel):
    id: int
    name: str


class InventoryItemRef(DashboardModel):
    id: int
    item_name: str


# --- Listed records ---


class Property(DashboardModel):
    id: int
    name: str = Searchable()
    address: str = Searchable()
    description: str = Searchable("")
    type: str = Filterable()
    status: str = Filterable()
    rent: float = Sortable(0)
    total_units: int | None = None
    occupied: int = 0
    created_at: datetime | None = Sortable(None)


class Unit(DashboardModel):
    id: int | None = None
    name: str = Searchable()
    type: str = Filterable()
    status: str = Filterable()
    rent: float = Sortable(0)
    bedrooms: int | None = Sortable(None)
    property: PropertyRef | None = None


class Guest(DashboardModel):
    id: int
    first_name: str = Searchable()
    last_name: str = Searchable()
    email: str = Searchable()
    phone: str = Searchable()
    nationality: str | None = Searchable(None)
    verification_status: str = Filterable("pending")
    date_of_birth: date | None = None
    created_at: datetime | None = Sortable(None)


class Booking(DashboardModel):
    id: int
    guest: GuestRef
    property: PropertyRef
    unit: UnitRef
    check_in_date: datetime = Sortable()
    check_out_date: datetime = Sortable()
    number_of_guests: int = Sortable(1)
    total_amount: float = Sortable(0)
    source: str = Filterable()
    purpose: str = Searchable("")
    status: str = Filterable()
    payment_method: str | None = None
    created_at: datetime | None = Sortable(None)


class InventoryItem(DashboardModel):
    id: int
    item_name: str = Searchable()
    description: str = Searchable("")
    category: str = Searchable()
    supplier: str | None = Searchable(None)
    status: str = Filterable("active")
    quantity: int = Sortable(0)
    unit_price: float | None = Sortable(None)


class Assignment(DashboardModel):
    id: int
    inventory_item: InventoryItemRef
    property: PropertyRef | None = None
    unit: UnitRef | None = None
    quantity: int = Sortable(1)
    is_active: bool = Filterable(True)
    assigned_at: datetime | None = Sortable(None)
    returned_at: datetime | None = Sortable(None)


class User(DashboardModel):
    id: str
    name: str = Searchable()
    email: str = Searchable()
    role: Role = Filterable(Role.USER)
    banned: bool = Filterable(False)
    email_verified: bool = False
    created_at: datetime | None = Sortable(None)


class Invitation(DashboardModel):
    name: str = Searchable()
    email: str = Searchable()
    role: Role = Filterable(Role.USER)
    accepted_at: datetime | None = Sortable(None)
