"""
Bill analysis pipeline: single public method process(request) -> AnalysisResult.
Does not know which LLM is used; services are injected via the constructor.
Flow: validate input -> LLM parse -> normalize -> calculate -> merge with upstream fields.
"""

from __future__ import annotations

import logging
import time
import uuid

from core.exceptions import InputMissingError, StructuredOutputError
from core.interfaces import IBillParser
from core.models import ParseFailure
from core.schema import AnalysisResult, AnalyzeRequest
from services.recommendation_service import RecommendationService
from utils.logger import log_structured

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Provide bill text or fields"
INVALID_JSON_MESSAGE = "AI returned invalid JSON"
DEGRADED_ASSUMPTION = "Missing unitsKWh or costPerUnit — cannot compute solar recommendation."


class BillAnalysisPipeline:
    """
    Production pipeline: process(request) -> AnalysisResult.
    No global state; market data lives in the injected RecommendationService.
    """

    def __init__(
        self,
        bill_parser: IBillParser,
        recommendation_service: RecommendationService,
    ) -> None:
        self._parser = bill_parser
        self._recommender = recommendation_service

    def process(self, request: AnalyzeRequest, trace_id: str | None = None) -> AnalysisResult:
        """
        Raises InputMissingError when the request has neither text nor fields,
        StructuredOutputError when the LLM reply is not usable JSON.
        A bill without consumption or unit cost is not an error: the recommendation is degraded.
        """
        trace_id = trace_id or str(uuid.uuid4())
        if not request.has_input:
            raise InputMissingError(MISSING_INPUT_MESSAGE, trace_id=trace_id)

        start = time.perf_counter()
        outcome = self._parser.parse(request.text, request.fields, request.budget, trace_id=trace_id)
        if isinstance(outcome, ParseFailure):
            raise StructuredOutputError(
                f"{INVALID_JSON_MESSAGE}: {outcome.reason}",
                raw=outcome.raw,
                trace_id=trace_id,
            )

        rec = self._recommender.recommend(
            outcome.parsed_fields,
            override_fields=request.fields,
            budget=request.budget,
            city=request.city,
        )
        assumptions = list(outcome.assumptions)
        if rec.recommendation.is_degraded:
            assumptions.append(DEGRADED_ASSUMPTION)

        log_structured(
            logger,
            logging.INFO,
            "Bill analysed",
            trace_id=trace_id,
            degraded=rec.recommendation.is_degraded,
            system_kw=rec.recommendation.suggested_system_kw,
            elapsed_sec=round(time.perf_counter() - start, 4),
        )
        return AnalysisResult(
            parsed_fields=outcome.parsed_fields,
            assumptions=assumptions,
            recommendation=rec.recommendation,
            budget_request=outcome.budget_request,
            used_defaults=rec.used_defaults,
        )
