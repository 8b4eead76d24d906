"""
Unit tests for the input normalizer.
Tests: source precedence, invalid-number handling, costPerUnit derivation, location fallback.
"""
from __future__ import annotations

import math

import pytest

from core.models import BillFields
from solar.normalizer import derive_cost_per_unit, normalize_bill, safe_num


def _fields(**kwargs: object) -> BillFields:
    return BillFields.from_mapping(kwargs)


@pytest.mark.parametrize(
    "value,expected",
    [(600, 600.0), (12.5, 12.5), (0, 0.0), (-3, -3.0), (None, None), ("600", None),
     (True, None), (float("nan"), None), (math.inf, None), (10**400, None), ([1], None)],
)
def test_safe_num(value: object, expected: float | None) -> None:
    assert safe_num(value) == expected


def test_parsed_values_take_precedence() -> None:
    out = normalize_bill(
        _fields(unitsKWh=600, totalCost=18000, location="Lahore"),
        _fields(unitsKWh=450, totalCost=9000, location="Karachi"),
    )
    assert out.units_kwh == 600.0
    assert out.total_cost == 18000.0
    assert out.cost_per_unit == 30.0
    assert out.location == "Lahore"


@pytest.mark.parametrize("bad", [None, "600 kWh", float("nan"), False, {"v": 1}])
def test_invalid_parsed_value_falls_back_to_override(bad: object) -> None:
    out = normalize_bill(_fields(unitsKWh=bad, totalCost=18000), _fields(unitsKWh=600))
    assert out.units_kwh == 600.0
    assert out.cost_per_unit == 30.0


def test_everything_missing_gives_nulls_without_error() -> None:
    out = normalize_bill(_fields(), None)
    assert (out.units_kwh, out.total_cost, out.cost_per_unit, out.location) == (None, None, None, None)


def test_explicit_cost_per_unit_beats_derivation() -> None:
    out = normalize_bill(_fields(unitsKWh=600, totalCost=18000, costPerUnit=25))
    assert out.cost_per_unit == 25.0


def test_override_cost_per_unit_used_when_parsed_missing() -> None:
    out = normalize_bill(_fields(unitsKWh=600, totalCost=18000), _fields(costPerUnit=28))
    assert out.cost_per_unit == 28.0


def test_negative_cost_per_unit_is_ignored() -> None:
    out = normalize_bill(_fields(unitsKWh=600, totalCost=18000, costPerUnit=-4))
    assert out.cost_per_unit == 30.0


@pytest.mark.parametrize(
    "total,units,expected",
    [(18000.0, 600.0, 30.0), (18000.0, 0.0, None), (None, 600.0, None), (18000.0, None, None),
     (0.0, 600.0, None), (-100.0, 10.0, None)],
)
def test_derive_cost_per_unit(total: float | None, units: float | None, expected: float | None) -> None:
    assert derive_cost_per_unit(total, units) == expected


def test_zero_units_does_not_divide() -> None:
    out = normalize_bill(_fields(unitsKWh=0, totalCost=18000))
    assert out.units_kwh == 0.0
    assert out.cost_per_unit is None


def test_location_fallback_order() -> None:
    assert normalize_bill(_fields(location="Lahore"), _fields(location="Karachi"), city="Peshawar").location == "Lahore"
    assert normalize_bill(_fields(location="  "), _fields(location="Karachi"), city="Peshawar").location == "Karachi"
    assert normalize_bill(_fields(), _fields(), city=" Peshawar ").location == "Peshawar"
    assert normalize_bill(_fields(location=42), None, city=None).location is None


def test_from_mapping_tolerates_non_mappings() -> None:
    assert BillFields.from_mapping(None) == BillFields()
    assert BillFields.from_mapping(["unitsKWh", 600]) == BillFields()
