"""
Unit tests for field markers and path collection.
"""

import pytest
from pydantic import BaseModel

from propdash.fields import (
    FILTERABLE,
    SEARCHABLE,
    SORTABLE,
    Filterable,
    Searchable,
    Sortable,
    collect_paths,
)
from propdash.models import Booking, Guest


class Owner(BaseModel):
    name: str = Searchable()
    phone: str | None = None


class Listing(BaseModel):
    title: str = Searchable()
    status: str = Filterable("draft")
    price: float = Sortable(0, ge=0)
    owner: Owner
    co_owner: Owner | None = None
    notes: str = ""


@pytest.mark.unit
class TestMarkers:
    """Test Searchable / Filterable / Sortable markers."""

    def test_markers_set_flags(self):
        fields = Listing.model_fields
        assert fields["title"].json_schema_extra == {SEARCHABLE: True}
        assert fields["status"].json_schema_extra == {FILTERABLE: True}
        assert fields["price"].json_schema_extra == {SORTABLE: True}

    def test_markers_keep_defaults_and_constraints(self):
        listing = Listing(title="Loft", owner=Owner(name="Ann"))
        assert listing.status == "draft"
        assert listing.price == 0
        with pytest.raises(ValueError):
            Listing(title="Loft", owner=Owner(name="Ann"), price=-1)

    def test_markers_are_required_without_default(self):
        with pytest.raises(ValueError):
            Listing(owner=Owner(name="Ann"))  # type: ignore[call-arg]

    def test_existing_json_schema_extra_is_kept(self):
        field = Searchable(json_schema_extra={"example": "Sunset"})
        assert field.json_schema_extra == {"example": "Sunset", SEARCHABLE: True}


@pytest.mark.unit
class TestCollectPaths:
    """Test collect_paths over flat and nested models."""

    def test_flat_and_nested_paths(self):
        assert collect_paths(Listing, SEARCHABLE) == ["title", "owner.name", "co_owner.name"]

    def test_filterable_and_sortable(self):
        assert collect_paths(Listing, FILTERABLE) == ["status"]
        assert collect_paths(Listing, SORTABLE) == ["price"]

    def test_dashboard_models(self):
        assert collect_paths(Guest, SEARCHABLE) == [
            "first_name",
            "last_name",
            "email",
            "phone",
            "nationality",
        ]
        assert "check_out_date" in collect_paths(Booking, SORTABLE)
        assert collect_paths(Booking, FILTERABLE) == ["source", "status"]
