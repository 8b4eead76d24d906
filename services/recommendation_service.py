"""
Recommendation service: the one seam joining the input normalizer and the calculator.
No LLM dependency; used by the analysis pipeline and the offline CLI command.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from core.models import BillFields, CanonicalBill
from core.schema import Recommendation
from solar.calculator import compute_recommendation
from solar.market import MarketDefaults
from solar.normalizer import normalize_bill

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationOutcome:
    """Canonical inputs, the recommendation, and the market values it was priced with."""

    canonical: CanonicalBill
    recommendation: Recommendation
    used_defaults: dict[str, float]


class RecommendationService:
    """Normalize untrusted fields and size a system against fixed market data."""

    def __init__(self, market: MarketDefaults) -> None:
        self._market = market

    def recommend(
        self,
        parsed_fields: Mapping[str, Any] | None,
        override_fields: Mapping[str, Any] | None = None,
        budget: Any = None,
        city: Any = None,
    ) -> RecommendationOutcome:
        canonical = normalize_bill(
            BillFields.from_mapping(parsed_fields),
            BillFields.from_mapping(override_fields),
            city=city,
        )
        recommendation = compute_recommendation(canonical, budget=budget, market=self._market)
        logger.debug(
            "Recommendation units_kwh=%s cost_per_unit=%s location=%s kw=%s",
            canonical.units_kwh,
            canonical.cost_per_unit,
            canonical.location,
            recommendation.suggested_system_kw,
        )
        return RecommendationOutcome(
            canonical=canonical,
            recommendation=recommendation,
            used_defaults=self._market.used_defaults(canonical.location),
        )
