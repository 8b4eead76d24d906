"""
Market data for recommendation pricing: cost per kW, production yield by location,
install cost split and grid emission factor.

Built once at process start (see utils.config) and passed explicitly to the calculator.
Defaults reflect the 2025 Pakistan residential market (PKR).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from core.exceptions import ConfigError

DEFAULT_LOCATION_KEY = "default"

# PKR per installed kW; market range is roughly 150k - 200k
DEFAULT_COST_PER_KW = 180000.0
# kWh produced per installed kW per month
DEFAULT_PROD_BY_LOCATION: dict[str, float] = {
    "karachi": 160.0,
    "lahore": 150.0,
    "islamabad": 150.0,
    "peshawar": 155.0,
    DEFAULT_LOCATION_KEY: 150.0,
}
# panels, inverter + balance of system, installation labour
DEFAULT_INSTALL_COST_SPLIT: tuple[float, float, float] = (0.60, 0.25, 0.15)
# kg CO2 per kWh of grid electricity
DEFAULT_EMISSION_FACTOR_KG_PER_KWH = 0.45

SPLIT_TOLERANCE = 1e-6

# Accepted config keys (wire name and Python name) -> MarketDefaults field
_CONFIG_KEYS = {
    "costPerKw": "cost_per_kw",
    "cost_per_kw": "cost_per_kw",
    "prodByLocation": "prod_by_location",
    "prod_by_location": "prod_by_location",
    "installCostSplit": "install_cost_split",
    "install_cost_split": "install_cost_split",
    "emissionFactorKgPerKwh": "emission_factor_kg_per_kwh",
    "emission_factor_kg_per_kwh": "emission_factor_kg_per_kwh",
}
_SPLIT_KEYS = (
    ("panels",),
    ("inverterAndBalance", "inverter_and_balance"),
    ("installation",),
)


def _positive_float(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(number) or number <= 0:
        raise ConfigError(f"{name} must be a positive number, got {value!r}")
    return number


def _split_from_value(value: Any) -> tuple[float, float, float]:
    """Accept a 3-sequence or a {panels, inverterAndBalance, installation} mapping."""
    if isinstance(value, Mapping):
        weights = []
        for aliases in _SPLIT_KEYS:
            found = next((value[a] for a in aliases if a in value), None)
            if found is None:
                raise ConfigError(f"installCostSplit missing '{aliases[0]}'")
            weights.append(found)
        value = weights
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        raise ConfigError(f"installCostSplit must be three weights, got {value!r}")
    items = list(value)
    if len(items) != 3:
        raise ConfigError(f"installCostSplit must be three weights, got {len(items)}")
    split: list[float] = []
    for item in items:
        if isinstance(item, bool):
            raise ConfigError(f"installCostSplit weight must be a number, got {item!r}")
        try:
            weight = float(item)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"installCostSplit weight must be a number, got {item!r}") from e
        if not math.isfinite(weight) or weight < 0:
            raise ConfigError(f"installCostSplit weight must be >= 0, got {item!r}")
        split.append(weight)
    if abs(sum(split) - 1.0) > SPLIT_TOLERANCE:
        raise ConfigError(f"installCostSplit must sum to 1.0, got {sum(split):.6f}")
    return (split[0], split[1], split[2])


@dataclass(frozen=True)
class MarketDefaults:
    """Immutable market data. Location keys are stored lowercase; 'default' is required."""

    cost_per_kw: float = DEFAULT_COST_PER_KW
    prod_by_location: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_PROD_BY_LOCATION)
    )
    install_cost_split: tuple[float, float, float] = DEFAULT_INSTALL_COST_SPLIT
    emission_factor_kg_per_kwh: float = DEFAULT_EMISSION_FACTOR_KG_PER_KWH

    def __post_init__(self) -> None:
        if not isinstance(self.prod_by_location, Mapping):
            raise ConfigError("prodByLocation must be a mapping of location -> kWh/kW/month")
        table = {
            str(key).strip().lower(): _positive_float(f"prodByLocation[{key}]", value)
            for key, value in self.prod_by_location.items()
        }
        if DEFAULT_LOCATION_KEY not in table:
            raise ConfigError("prodByLocation must contain a 'default' entry")
        object.__setattr__(self, "prod_by_location", MappingProxyType(table))
        object.__setattr__(self, "cost_per_kw", _positive_float("costPerKw", self.cost_per_kw))
        object.__setattr__(
            self,
            "emission_factor_kg_per_kwh",
            _positive_float("emissionFactorKgPerKwh", self.emission_factor_kg_per_kwh),
        )
        object.__setattr__(self, "install_cost_split", _split_from_value(self.install_cost_split))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None, base: "MarketDefaults | None" = None) -> "MarketDefaults":
        """Build from a config mapping; keys not present keep the values of base (or the defaults)."""
        base = base or cls()
        values: dict[str, Any] = {
            "cost_per_kw": base.cost_per_kw,
            "prod_by_location": dict(base.prod_by_location),
            "install_cost_split": base.install_cost_split,
            "emission_factor_kg_per_kwh": base.emission_factor_kg_per_kwh,
        }
        for key, value in (data or {}).items():
            name = _CONFIG_KEYS.get(key)
            if name is None:
                raise ConfigError(f"Unknown market option: {key}")
            if value is not None:
                values[name] = value
        return cls(**values)

    def production_for(self, location: Any) -> float:
        """Monthly kWh per installed kW for location (case-insensitive); unknown -> 'default'."""
        key = location.strip().lower() if isinstance(location, str) else ""
        return self.prod_by_location.get(key, self.prod_by_location[DEFAULT_LOCATION_KEY])

    def used_defaults(self, location: Any) -> dict[str, float]:
        """Values a recommendation for location was priced with (response metadata)."""
        return {
            "costPerKw": self.cost_per_kw,
            "prodPerKwPerMonth": self.production_for(location),
            "emissionKgPerKwh": self.emission_factor_kg_per_kwh,
        }
