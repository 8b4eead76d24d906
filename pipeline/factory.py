"""Wire services from AppConfig. Used by the API factory and the CLI."""

from __future__ import annotations

from core.interfaces import ILLMProvider
from pipeline.bill_pipeline import BillAnalysisPipeline
from providers.factory import create_provider
from services.bill_parser_service import BillParserService
from services.recommendation_service import RecommendationService
from services.suggestion_service import SuggestionService
from utils.config import AppConfig


def build_pipeline(config: AppConfig, provider: ILLMProvider | None = None) -> BillAnalysisPipeline:
    provider = provider or create_provider(config.llm)
    parser = BillParserService(
        provider,
        model=config.llm.model or None,
        max_retries=config.llm.max_retries,
        retry_delay_sec=config.llm.retry_delay_sec,
    )
    return BillAnalysisPipeline(parser, RecommendationService(config.market))


def build_suggestion_service(config: AppConfig, provider: ILLMProvider | None = None) -> SuggestionService:
    provider = provider or create_provider(config.llm)
    return SuggestionService(
        provider,
        model=config.llm.model or None,
        max_retries=config.llm.max_retries,
        retry_delay_sec=config.llm.retry_delay_sec,
    )
