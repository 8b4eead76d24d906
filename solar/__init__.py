"""Deterministic recommendation engine: market data, input normalizer, calculator."""

from solar.market import MarketDefaults
from solar.normalizer import normalize_bill, safe_num
from solar.calculator import compute_recommendation

__all__ = [
    "MarketDefaults",
    "normalize_bill",
    "safe_num",
    "compute_recommendation",
]
