"""
Unit tests for MarketDefaults: validation, immutability, location lookup.
"""
from __future__ import annotations

import dataclasses

import pytest

from core.exceptions import ConfigError
from solar.market import DEFAULT_PROD_BY_LOCATION, MarketDefaults


def test_defaults() -> None:
    market = MarketDefaults()
    assert market.cost_per_kw == 180000.0
    assert dict(market.prod_by_location) == DEFAULT_PROD_BY_LOCATION
    assert market.install_cost_split == (0.60, 0.25, 0.15)
    assert market.emission_factor_kg_per_kwh == 0.45


@pytest.mark.parametrize("location,expected", [
    ("Karachi", 160.0), ("PESHAWAR", 155.0), ("lahore ", 150.0),
    ("Quetta", 150.0), ("", 150.0), (None, 150.0), (123, 150.0),
])
def test_production_for_always_resolves(location: object, expected: float) -> None:
    assert MarketDefaults().production_for(location) == expected


def test_configured_keys_are_lowercased() -> None:
    market = MarketDefaults(prod_by_location={"Karachi": 170, "DEFAULT": 140})
    assert market.production_for("karachi") == 170.0
    assert market.production_for("multan") == 140.0


def test_market_is_immutable() -> None:
    market = MarketDefaults()
    with pytest.raises(TypeError):
        market.prod_by_location["multan"] = 155.0  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        market.cost_per_kw = 1.0  # type: ignore[misc]


@pytest.mark.parametrize("kwargs", [
    {"prod_by_location": {"karachi": 160}},
    {"prod_by_location": {"default": 0}},
    {"prod_by_location": ["default", 150]},
    {"install_cost_split": (0.6, 0.3, 0.15)},
    {"install_cost_split": (0.5, 0.5)},
    {"install_cost_split": (1.2, -0.1, -0.1)},
    {"install_cost_split": "0.6,0.25,0.15"},
    {"cost_per_kw": -1},
    {"cost_per_kw": "cheap"},
    {"emission_factor_kg_per_kwh": 0},
])
def test_invalid_market_data_raises_config_error(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        MarketDefaults(**kwargs)


def test_from_mapping_accepts_wire_names_and_split_mapping() -> None:
    market = MarketDefaults.from_mapping({
        "costPerKw": 150000,
        "installCostSplit": {"panels": 0.5, "inverterAndBalance": 0.3, "installation": 0.2},
    })
    assert market.cost_per_kw == 150000.0
    assert market.install_cost_split == (0.5, 0.3, 0.2)
    # untouched keys keep defaults
    assert market.emission_factor_kg_per_kwh == 0.45
    assert market.production_for("karachi") == 160.0


def test_from_mapping_rejects_unknown_option() -> None:
    with pytest.raises(ConfigError):
        MarketDefaults.from_mapping({"panelPricePerWatt": 30})


def test_used_defaults() -> None:
    assert MarketDefaults().used_defaults("Karachi") == {
        "costPerKw": 180000.0,
        "prodPerKwPerMonth": 160.0,
        "emissionKgPerKwh": 0.45,
    }
