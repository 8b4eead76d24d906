"""
Data models for the advisor pipeline.
Uses dataclasses for DTOs; Pydantic schemas (requests, Recommendation) in core.schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

DEFAULT_BUDGET_REQUEST: dict[str, Any] = {"needsBudget": False, "reason": None}


@dataclass(frozen=True)
class BillFields:
    """
    Raw, untrusted bill fields as supplied by the LLM or the caller.
    Values are kept exactly as received; the normalizer decides what is usable.
    """

    units_kwh: Any = None
    total_cost: Any = None
    cost_per_unit: Any = None
    location: Any = None
    billing_date: Any = None
    tariff: Any = None
    peak_demand_kw: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "BillFields":
        """Build from a camelCase mapping (LLM / HTTP shape). Non-mappings give an empty record."""
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            units_kwh=data.get("unitsKWh"),
            total_cost=data.get("totalCost"),
            cost_per_unit=data.get("costPerUnit"),
            location=data.get("location"),
            billing_date=data.get("billingDate"),
            tariff=data.get("tariff"),
            peak_demand_kw=data.get("peakDemandKw"),
        )


@dataclass(frozen=True)
class CanonicalBill:
    """Normalized numeric view of a bill. Every field is usable or None."""

    units_kwh: float | None = None
    total_cost: float | None = None
    cost_per_unit: float | None = None
    location: str | None = None


@dataclass(frozen=True)
class ParsedBill:
    """LLM reply that parsed into the expected JSON object."""

    parsed_fields: dict[str, Any]
    assumptions: list[str] = field(default_factory=list)
    budget_request: dict[str, Any] = field(default_factory=lambda: dict(DEFAULT_BUDGET_REQUEST))
    raw: str = ""


@dataclass(frozen=True)
class ParseFailure:
    """LLM reply that could not be interpreted. Carries the raw text for the caller."""

    reason: str
    raw: str = ""
