"""Advisor services: bill parsing (LLM), recommendation (deterministic), suggestions (LLM)."""

from services.bill_parser_service import BillParserService
from services.recommendation_service import RecommendationService, RecommendationOutcome
from services.suggestion_service import SuggestionService

__all__ = [
    "BillParserService",
    "RecommendationService",
    "RecommendationOutcome",
    "SuggestionService",
]
