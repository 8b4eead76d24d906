"""
Pydantic schemas for HTTP requests and the computed recommendation.
Field names are snake_case; camelCase aliases match the JSON wire shape.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Recommendation (calculator output)
# ---------------------------------------------------------------------------


class CostBreakdown(BaseModel):
    """Install cost split into panels, inverter + balance of system, and labour."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    panels: int
    inverter_and_balance: int = Field(alias="inverterAndBalance")
    installation: int

    @property
    def total(self) -> int:
        return self.panels + self.inverter_and_balance + self.installation


class Recommendation(BaseModel):
    """Sized PV recommendation. All numeric fields are None on the degraded path."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    suggested_system_kw: float | None = Field(default=None, alias="suggestedSystemKw")
    est_monthly_production_kwh: float | None = Field(default=None, alias="estMonthlyProductionKwh")
    est_monthly_savings: int | None = Field(default=None, alias="estMonthlySavings")
    approx_install_cost: int | None = Field(default=None, alias="approxInstallCost")
    cost_breakdown: CostBreakdown | None = Field(default=None, alias="costBreakdown")
    payback_years: float | None = Field(default=None, alias="paybackYears")
    co2_reduction_tons_per_year: float | None = Field(default=None, alias="co2ReductionTonsPerYear")
    percent_offset: float | None = Field(default=None, alias="percentOffset")
    notes: list[str] = Field(default_factory=list)

    @property
    def is_degraded(self) -> bool:
        return self.suggested_system_kw is None

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    """Body of POST /api/analyze-bill. budget stays untyped; non-numbers mean no budget."""

    text: str | None = None
    fields: dict[str, Any] | None = None
    budget: Any = None
    city: str | None = None

    @property
    def has_input(self) -> bool:
        return bool(self.text) or self.fields is not None


class SuggestionRequest(BaseModel):
    """Body of POST /api/solar-suggestions."""

    model_config = ConfigDict(populate_by_name=True)

    units: int | float | None = None
    cost: int | float | None = None
    billing_date: str | None = Field(default=None, alias="billingDate")
    location: str | None = None
    roof_area: int | float | None = Field(default=None, alias="roofArea")
    additional_info: str | None = Field(default=None, alias="additionalInfo")


# ---------------------------------------------------------------------------
# Pipeline output
# ---------------------------------------------------------------------------


class AnalysisResult(BaseModel):
    """Final result of analysing one bill (single public output of the pipeline)."""

    parsed_fields: dict[str, Any]
    assumptions: list[str] = Field(default_factory=list)
    recommendation: Recommendation
    budget_request: dict[str, Any]
    used_defaults: dict[str, float]

    def to_response(self) -> dict[str, Any]:
        return {
            "success": True,
            "parsedFields": self.parsed_fields,
            "assumptions": list(self.assumptions),
            "recommendation": self.recommendation.to_response(),
            "budgetRequest": self.budget_request,
            "meta": {"usedDefaults": dict(self.used_defaults)},
        }
