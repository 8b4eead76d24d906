"""
HTTP adapter: FastAPI app around the analysis pipeline and the suggestion service.
Handlers are sync so blocking LLM calls run in the framework threadpool.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import InputMissingError, StructuredOutputError
from core.interfaces import ISuggestionService
from core.schema import AnalyzeRequest, SuggestionRequest
from pipeline.bill_pipeline import INVALID_JSON_MESSAGE, BillAnalysisPipeline
from pipeline.factory import build_pipeline, build_suggestion_service
from providers.factory import create_provider
from utils.config import AppConfig, load_config

logger = logging.getLogger(__name__)

SERVICE_NAME = "solar-bill-advisor"


def _error(status_code: int, error: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, **extra})


def create_app(
    config: AppConfig | None = None,
    pipeline: BillAnalysisPipeline | None = None,
    suggestion_service: ISuggestionService | None = None,
) -> FastAPI:
    """Build the app. Pass pipeline/suggestion_service to inject fakes (tests)."""
    config = config or load_config()
    if pipeline is None or suggestion_service is None:
        provider = create_provider(config.llm)
        pipeline = pipeline or build_pipeline(config, provider)
        suggestion_service = suggestion_service or build_suggestion_service(config, provider)

    app = FastAPI(title="Solar Bill Advisor API", version="1.0.0")
    app.state.config = config
    app.state.pipeline = pipeline
    app.state.suggestion_service = suggestion_service

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Invalid request body", details=jsonable_encoder(exc.errors()))

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy", "service": SERVICE_NAME}

    @app.post("/api/analyze-bill")
    def analyze_bill(payload: AnalyzeRequest) -> JSONResponse:
        trace_id = str(uuid.uuid4())
        try:
            result = app.state.pipeline.process(payload, trace_id=trace_id)
            return JSONResponse(content=result.to_response())
        except InputMissingError as e:
            return _error(400, str(e))
        except StructuredOutputError as e:
            logger.warning("analyze-bill upstream JSON invalid trace_id=%s: %s", trace_id, e)
            return _error(502, INVALID_JSON_MESSAGE, raw=e.raw)
        except Exception as e:
            logger.exception("analyze-bill error trace_id=%s", trace_id)
            return _error(500, "Server error", message=str(e))

    @app.post("/api/solar-suggestions")
    def solar_suggestions(payload: SuggestionRequest) -> JSONResponse:
        trace_id = str(uuid.uuid4())
        try:
            body = app.state.suggestion_service.suggest(payload, trace_id=trace_id)
            return JSONResponse(content=body)
        except InputMissingError as e:
            return _error(400, str(e))
        except Exception as e:
            logger.exception("solar-suggestions error trace_id=%s", trace_id)
            return _error(500, "Failed to generate suggestions", message=str(e))

    return app
