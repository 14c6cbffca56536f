"""
Unit tests for the conditions DSL module.

These tests verify:
1. Attr builder produces DynCondition instances wrapping boto3 conditions
2. Composition with &, |, ~ returns DynCondition
3. evaluate() applies conditions in memory to dicts and models
4. Missing fields never raise and never match
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from boto3.dynamodb.conditions import Attr as Boto3Attr
from boto3.dynamodb.conditions import ConditionBase as Boto3ConditionBase
from boto3.dynamodb.conditions import Contains as Boto3Contains
from boto3.dynamodb.conditions import Equals as Boto3Equals

from propdash.conditions import (
    Attr,
    DynCondition,
    SelectEquals,
    TextContains,
    evaluate,
    wrap_condition,
)
from propdash.exceptions import ConditionError


@pytest.mark.unit
class TestAttrBuilder:
    """Test the Attr class for building conditions."""

    def test_attr_creation(self):
        assert Attr("guest.first_name").name == "guest.first_name"
        assert repr(Attr("rent")) == "Attr('rent')"

    def test_operators_return_dyncondition(self):
        for condition in (
            Attr("rent") == 1,
            Attr("rent") != 1,
            Attr("rent") < 1,
            Attr("rent") <= 1,
            Attr("rent") > 1,
            Attr("rent") >= 1,
        ):
            assert isinstance(condition, DynCondition)
            assert isinstance(condition.raw, Boto3ConditionBase)

    def test_icontains_is_a_boto3_contains(self):
        condition = Attr("name").icontains("ali")
        assert isinstance(condition.raw, TextContains)
        assert isinstance(condition.raw, Boto3Contains)

    def test_matches_is_a_boto3_equals(self):
        condition = Attr("status").matches("active")
        assert isinstance(condition.raw, SelectEquals)
        assert isinstance(condition.raw, Boto3Equals)

    def test_composition_returns_dyncondition(self):
        condition = ~((Attr("rent") >= 900) & (Attr("status") == "vacant") | Attr("x").exists())
        assert isinstance(condition, DynCondition)

    def test_raw_boto3_condition_passthrough(self):
        condition = (Attr("rent") > 1) & Boto3Attr("status").eq("vacant")
        assert isinstance(condition, DynCondition)
        assert evaluate(condition, {"rent": 2, "status": "vacant"})

    def test_wrap_condition(self):
        wrapped = wrap_condition(Boto3Attr("status").eq("vacant"))
        assert isinstance(wrapped, DynCondition)
        assert wrap_condition(wrapped) is wrapped

    def test_wrap_condition_rejects_other_types(self):
        with pytest.raises(TypeError, match="Expected DynCondition"):
            wrap_condition("status = vacant")  # type: ignore[arg-type]


@pytest.mark.unit
class TestEvaluate:
    """Test in-memory evaluation of condition trees."""

    unit = {
        "name": "Apartment 2A",
        "rent": 1200,
        "status": "occupied",
        "tags": ["balcony", "Sea View"],
        "property": {"name": "Sunset Apartments"},
        "available_from": datetime(2024, 5, 1, tzinfo=timezone.utc),
    }

    def test_comparisons(self):
        assert evaluate(Attr("rent") == 1200, self.unit)
        assert evaluate(Attr("rent") != 1000, self.unit)
        assert evaluate(Attr("rent") > 1000, self.unit)
        assert evaluate(Attr("rent") >= 1200, self.unit)
        assert not evaluate(Attr("rent") < 1200, self.unit)
        assert evaluate(Attr("rent") <= 1200, self.unit)
        assert evaluate(Attr("rent").between(1000, 1500), self.unit)
        assert evaluate(Attr("status").is_in(["occupied", "vacant"]), self.unit)

    def test_nested_path(self):
        assert evaluate(Attr("property.name").begins_with("Sun"), self.unit)

    def test_datetime_against_iso_string(self):
        """Mixed representations compare on the sort axis."""
        assert evaluate(Attr("available_from") > "2024-04-30T00:00:00Z", self.unit)
        assert not evaluate(Attr("available_from") < "2024-01-01", self.unit)

    def test_incomparable_types_do_not_match(self):
        assert not evaluate(Attr("name") > 5, self.unit)

    def test_contains_is_case_sensitive(self):
        assert evaluate(Attr("name").contains("2A"), self.unit)
        assert not evaluate(Attr("name").contains("apartment"), self.unit)
        assert evaluate(Attr("tags").contains("balcony"), self.unit)

    def test_icontains_ignores_case(self):
        assert evaluate(Attr("name").icontains("APART"), self.unit)
        assert evaluate(Attr("tags").icontains("sea"), self.unit)
        assert evaluate(Attr("rent").icontains("20"), self.unit)

    def test_exists(self):
        assert evaluate(Attr("rent").exists(), self.unit)
        assert evaluate(Attr("supplier").not_exists(), self.unit)

    def test_missing_fields_never_match(self):
        for condition in (
            Attr("supplier") == "x",
            Attr("supplier") != "x",
            Attr("supplier") > 1,
            Attr("supplier").icontains("x"),
            Attr("supplier").matches("x"),
            Attr("guest.first_name").contains("x"),
        ):
            assert not evaluate(condition, self.unit)

    def test_logical_operators(self):
        assert evaluate((Attr("rent") > 1000) & (Attr("status") == "occupied"), self.unit)
        assert evaluate((Attr("rent") > 5000) | (Attr("status") == "occupied"), self.unit)
        assert evaluate(~(Attr("status") == "vacant"), self.unit)

    def test_size(self):
        condition = DynCondition(Boto3Attr("tags").size().eq(2))
        assert evaluate(condition, self.unit)

    def test_evaluate_method(self):
        assert (Attr("rent") == 1200).evaluate(self.unit)

    def test_attribute_type_is_not_supported(self):
        condition = DynCondition(Boto3Attr("rent").attribute_type("N"))
        with pytest.raises(ConditionError, match="cannot be evaluated in memory"):
            evaluate(condition, self.unit)


@pytest.mark.unit
class TestSelectEquals:
    """Test select-widget equality."""

    def test_strict_string_equality(self):
        assert evaluate(Attr("status").matches("active"), {"status": "active"})
        assert not evaluate(Attr("status").matches("Active"), {"status": "active"})

    def test_boolean_expected_value(self):
        assert evaluate(Attr("is_active").matches(True), {"is_active": True})
        assert not evaluate(Attr("is_active").matches(True), {"is_active": False})
        assert evaluate(Attr("is_active").matches(False), {"is_active": "false"})
        assert not evaluate(Attr("is_active").matches(False), {"is_active": 0})

    def test_string_against_non_string_field(self):
        """Dropdown values are strings; ids are not."""
        assert evaluate(Attr("property.id").matches("3"), {"property": {"id": 3}})
        assert not evaluate(Attr("property.id").matches("4"), {"property": {"id": 3}})

    def test_numeric_string_against_number_field(self):
        assert evaluate(Attr("rent").matches("1200"), {"rent": 1200.0})
        assert evaluate(Attr("rent").matches("950.50"), {"rent": Decimal("950.5")})
        assert not evaluate(Attr("rent").matches("1200"), {"rent": 1200.5})

    def test_numeric_string_against_boolean_field(self):
        assert not evaluate(Attr("is_active").matches("1"), {"is_active": True})

    def test_icontains_on_nested_record_ignores_field_names(self):
        guest = {"guest": {"first_name": "Alice", "last_name": "Martin"}}
        assert evaluate(Attr("guest").icontains("mart"), guest)
        assert not evaluate(Attr("guest").icontains("first"), guest)
