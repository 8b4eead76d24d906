"""
Recommendation calculator: CanonicalBill + optional budget + MarketDefaults -> Recommendation.

Pure arithmetic, no I/O. Missing or non-positive consumption / unit cost gives the
degraded Recommendation (all numbers None, explanatory note) instead of an error.

Rounding is half-up on the exact float value, so 3.125 years reports as 3.13.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from core.models import CanonicalBill
from core.schema import CostBreakdown, Recommendation
from solar.market import MarketDefaults
from solar.normalizer import safe_num

logger = logging.getLogger(__name__)

MIN_SYSTEM_KW = 0.5
MONTHS_PER_YEAR = 12
KG_PER_TON = 1000.0

MISSING_INPUT_NOTE = "cannot compute — missing consumption or unit cost."
BUDGET_INSUFFICIENT_NOTE = "Budget insufficient for full offset — suggesting partial system."


def round_half_up(value: float, places: int = 0) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def money_round(value: float) -> int:
    """Whole currency units."""
    return int(round_half_up(value))


def budget_amount(budget: Any) -> float | None:
    """Budget as a positive float; zero, negative or non-numeric means no budget."""
    value = safe_num(budget)
    if value is None or value <= 0:
        return None
    return value


def split_install_cost(
    hardware_cost: float,
    weights: tuple[float, float, float],
) -> CostBreakdown:
    """Each component is rounded on its own, so the sum may drift from hardware_cost by up to 3."""
    panels_w, inverter_w, install_w = weights
    return CostBreakdown(
        panels=money_round(hardware_cost * panels_w),
        inverter_and_balance=money_round(hardware_cost * inverter_w),
        installation=money_round(hardware_cost * install_w),
    )


def size_system(required_kw: float, budget: float | None, cost_per_kw: float) -> tuple[float, bool]:
    """Return (final_kw, budget_limited). A limiting budget never sizes below MIN_SYSTEM_KW."""
    if budget is None:
        return required_kw, False
    max_kw_by_budget = budget / cost_per_kw
    if max_kw_by_budget < required_kw:
        return max(MIN_SYSTEM_KW, max_kw_by_budget), True
    return required_kw, False


def compute_recommendation(
    bill: CanonicalBill,
    budget: Any = None,
    market: MarketDefaults | None = None,
) -> Recommendation:
    market = market or MarketDefaults()
    units_kwh = bill.units_kwh
    cost_per_unit = bill.cost_per_unit
    if units_kwh is None or units_kwh <= 0 or cost_per_unit is None or cost_per_unit <= 0:
        logger.info(
            "Skipping recommendation: units_kwh=%s cost_per_unit=%s", units_kwh, cost_per_unit
        )
        return Recommendation(notes=[MISSING_INPUT_NOTE])

    notes: list[str] = []
    prod_per_kw = market.production_for(bill.location)
    required_kw = units_kwh / prod_per_kw
    final_kw, budget_limited = size_system(required_kw, budget_amount(budget), market.cost_per_kw)
    if budget_limited:
        notes.append(BUDGET_INSUFFICIENT_NOTE)

    breakdown = split_install_cost(final_kw * market.cost_per_kw, market.install_cost_split)
    total_install_cost = breakdown.total

    production = final_kw * prod_per_kw
    # no export credit: production beyond consumption saves nothing
    savings = money_round(min(production, units_kwh) * cost_per_unit)

    payback_years = None
    if savings > 0:
        payback_years = round_half_up(total_install_cost / (savings * MONTHS_PER_YEAR), 2)

    co2_tons = round_half_up(
        production * MONTHS_PER_YEAR * market.emission_factor_kg_per_kwh / KG_PER_TON, 3
    )

    return Recommendation(
        suggested_system_kw=round_half_up(final_kw, 2),
        est_monthly_production_kwh=round_half_up(production, 1),
        est_monthly_savings=savings,
        approx_install_cost=total_install_cost,
        cost_breakdown=breakdown,
        payback_years=payback_years,
        co2_reduction_tons_per_year=co2_tons,
        percent_offset=round_half_up(production / units_kwh * 100, 1),
        notes=notes,
    )
