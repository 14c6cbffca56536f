"""
Shared pytest fixtures and configuration for propdash tests.

This module provides the sample listings used across the unit tests: plain
dict payloads as the data layer returns them, and the same records parsed
into pydantic models.
"""

from datetime import datetime, timezone

import pytest

from propdash.models import Assignment, Booking, User


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests with no external dependencies")


@pytest.fixture
def tenants() -> list[dict]:
    """The two-record listing used by the search scenarios."""
    return [{"name": "Alice", "unit": "2A"}, {"name": "Bob", "unit": "3B"}]


@pytest.fixture
def units() -> list[dict]:
    """Units with rents out of order and one record without a rent."""
    return [
        {"id": 1, "name": "Apartment 2A", "status": "occupied", "rent": 1200},
        {"id": 2, "name": "Studio 1C", "status": "vacant", "rent": 950},
        {"id": 3, "name": "Penthouse", "status": "maintenance", "rent": 1800},
        {"id": 4, "name": "Garden Flat", "status": "vacant"},
    ]


@pytest.fixture
def booking_payloads() -> list[dict]:
    """Bookings as camelCase payloads, relations included."""
    return [
        {
            "id": 1,
            "guest": {
                "id": 10,
                "firstName": "Alice",
                "lastName": "Martin",
                "email": "alice@example.com",
            },
            "property": {"id": 1, "name": "Sunset Apartments"},
            "unit": {"id": 100, "name": "2A"},
            "checkInDate": "2024-03-01T14:00:00Z",
            "checkOutDate": "2024-03-10T10:00:00Z",
            "numberOfGuests": 2,
            "totalAmount": 900.0,
            "source": "direct",
            "purpose": "vacation",
            "status": "confirmed",
        },
        {
            "id": 2,
            "guest": {
                "id": 11,
                "firstName": "Bob",
                "lastName": "Nguyen",
                "email": "bob@example.com",
            },
            "property": {"id": 2, "name": "Harbor View"},
            "unit": {"id": 200, "name": "3B"},
            "checkInDate": "2024-02-15T14:00:00Z",
            "checkOutDate": "2024-02-20T10:00:00Z",
            "numberOfGuests": 1,
            "totalAmount": 500.0,
            "source": "airbnb",
            "purpose": "business",
            "status": "checked_in",
        },
        {
            "id": 3,
            "guest": {
                "id": 12,
                "firstName": "Carla",
                "lastName": "Alison",
                "email": "carla@example.com",
            },
            "property": {"id": 1, "name": "Sunset Apartments"},
            "unit": {"id": 101, "name": "2B"},
            "checkInDate": "2024-04-01T14:00:00Z",
            "checkOutDate": "2024-04-03T10:00:00Z",
            "numberOfGuests": 3,
            "totalAmount": 300.0,
            "source": "direct",
            "purpose": "family visit",
            "status": "confirmed",
        },
    ]


@pytest.fixture
def bookings(booking_payloads) -> list[Booking]:
    return [Booking.model_validate(payload) for payload in booking_payloads]


@pytest.fixture
def assignments() -> list[Assignment]:
    """Inventory assignments; one without a property and one returned."""
    return [
        Assignment.model_validate(
            {
                "id": 1,
                "inventoryItem": {"id": 1, "itemName": "Microwave"},
                "property": {"id": 1, "name": "Sunset Apartments"},
                "isActive": True,
            }
        ),
        Assignment.model_validate(
            {
                "id": 2,
                "inventoryItem": {"id": 2, "itemName": "Bed Linen Set"},
                "property": {"id": 2, "name": "Harbor View"},
                "isActive": False,
            }
        ),
        Assignment.model_validate(
            {"id": 3, "inventoryItem": {"id": 3, "itemName": "Microwave Oven"}, "isActive": True}
        ),
    ]


@pytest.fixture
def users() -> list[User]:
    return [
        User(
            id="u1",
            name="Dana Admin",
            email="dana@example.com",
            role="admin",
            created_at=datetime(2024, 1, 5, tzinfo=timezone.utc),
        ),
        User(
            id="u2",
            name="Eli User",
            email="eli@example.com",
            banned=True,
            created_at=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ),
        User(id="u3", name="Fay User", email="fay@example.com"),
    ]
