"""
Input normalizer: untrusted, partially-null bill fields -> CanonicalBill.
Never raises; anything unusable becomes None and is left to the calculator.
"""
from __future__ import annotations

import math
from typing import Any

from core.models import BillFields, CanonicalBill


def safe_num(value: Any) -> float | None:
    """Return value as float if it is a real, finite number; otherwise None. bool is not a number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _first_number(*values: Any) -> float | None:
    for value in values:
        number = safe_num(value)
        if number is not None:
            return number
    return None


def _first_text(*values: Any) -> str | None:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def derive_cost_per_unit(total_cost: float | None, units_kwh: float | None) -> float | None:
    """totalCost / unitsKWh when both are present and non-zero; None otherwise."""
    if not total_cost or not units_kwh:
        return None
    cost_per_unit = total_cost / units_kwh
    return cost_per_unit if cost_per_unit >= 0 else None


def normalize_bill(
    parsed: BillFields,
    override: BillFields | None = None,
    city: Any = None,
) -> CanonicalBill:
    """
    Merge parsed (LLM) fields with caller-supplied override fields.

    Precedence per field: parsed value, then override value, then None.
    costPerUnit falls back to totalCost / unitsKWh; negative unit costs are ignored.
    location falls back to the caller's city hint.
    """
    override = override or BillFields()
    units_kwh = _first_number(parsed.units_kwh, override.units_kwh)
    total_cost = _first_number(parsed.total_cost, override.total_cost)

    explicit = [
        n for n in (safe_num(parsed.cost_per_unit), safe_num(override.cost_per_unit))
        if n is not None and n >= 0
    ]
    if explicit:
        cost_per_unit: float | None = explicit[0]
    else:
        cost_per_unit = derive_cost_per_unit(total_cost, units_kwh)

    return CanonicalBill(
        units_kwh=units_kwh,
        total_cost=total_cost,
        cost_per_unit=cost_per_unit,
        location=_first_text(parsed.location, override.location, city),
    )
