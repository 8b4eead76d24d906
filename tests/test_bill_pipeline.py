"""
Unit tests for the bill analysis pipeline.
Demonstrates: testing the pipeline with an injected fake parser, no LLM or network.
"""

from __future__ import annotations

from typing import Any, Mapping

import pytest

from core.exceptions import InputMissingError, StructuredOutputError
from core.interfaces import IBillParser
from core.models import ParsedBill, ParseFailure
from core.schema import AnalyzeRequest
from pipeline.bill_pipeline import DEGRADED_ASSUMPTION, BillAnalysisPipeline
from services.recommendation_service import RecommendationService
from solar.calculator import BUDGET_INSUFFICIENT_NOTE, MISSING_INPUT_NOTE
from solar.market import MarketDefaults


# ---------------------------------------------------------------------------
# Fake implementations (test doubles)
# ---------------------------------------------------------------------------


class FakeBillParser(IBillParser):
    """Returns a fixed outcome and records what it was asked."""

    def __init__(self, outcome: ParsedBill | ParseFailure) -> None:
        self.outcome = outcome
        self.calls: list[dict[str, Any]] = []

    def parse(
        self,
        text: str | None,
        fields: Mapping[str, Any] | None,
        budget: Any,
        trace_id: str = "",
    ) -> ParsedBill | ParseFailure:
        self.calls.append({"text": text, "fields": fields, "budget": budget, "trace_id": trace_id})
        return self.outcome


def _parsed(**fields: Any) -> ParsedBill:
    return ParsedBill(parsed_fields=dict(fields), assumptions=["LLM assumption"])


def _pipeline(parser: IBillParser) -> BillAnalysisPipeline:
    return BillAnalysisPipeline(parser, RecommendationService(MarketDefaults()))


# ---------------------------------------------------------------------------
# Pipeline unit tests
# ---------------------------------------------------------------------------


def test_full_analysis_response() -> None:
    parser = FakeBillParser(_parsed(
        unitsKWh=600, totalCost=18000, costPerUnit=None, location="Karachi",
        billingDate="2025-06-01", tariff="A-1", peakDemandKw=None,
    ))
    result = _pipeline(parser).process(AnalyzeRequest(text="bill text"), trace_id="trace-1")
    body = result.to_response()

    assert body["success"] is True
    assert body["parsedFields"]["tariff"] == "A-1"
    assert body["parsedFields"]["costPerUnit"] is None  # upstream fields are passed through untouched
    assert body["assumptions"] == ["LLM assumption"]
    assert body["budgetRequest"] == {"needsBudget": False, "reason": None}
    assert body["recommendation"]["suggestedSystemKw"] == 3.75
    assert body["recommendation"]["paybackYears"] == 3.13
    assert body["meta"] == {
        "usedDefaults": {"costPerKw": 180000.0, "prodPerKwPerMonth": 160.0, "emissionKgPerKwh": 0.45}
    }
    assert parser.calls[0]["trace_id"] == "trace-1"


def test_budget_is_forwarded_and_applied() -> None:
    parser = FakeBillParser(_parsed(unitsKWh=600, totalCost=18000, location="karachi"))
    result = _pipeline(parser).process(AnalyzeRequest(text="bill", budget=300000))
    assert parser.calls[0]["budget"] == 300000
    assert result.recommendation.notes == [BUDGET_INSUFFICIENT_NOTE]
    assert result.recommendation.suggested_system_kw == 1.67


def test_caller_fields_fill_gaps_in_parsed_fields() -> None:
    parser = FakeBillParser(_parsed(unitsKWh=None, totalCost=None, location=None))
    request = AnalyzeRequest(fields={"unitsKWh": 450, "totalCost": 13500}, city="Lahore")
    result = _pipeline(parser).process(request)
    assert parser.calls[0]["text"] is None
    assert result.recommendation.suggested_system_kw == 3.0  # 450 / 150
    assert result.used_defaults["prodPerKwPerMonth"] == 150.0


def test_missing_consumption_degrades() -> None:
    parser = FakeBillParser(_parsed(unitsKWh=None, totalCost=5000))
    result = _pipeline(parser).process(AnalyzeRequest(text="blurry bill"))
    body = result.to_response()
    assert body["success"] is True
    assert body["recommendation"]["suggestedSystemKw"] is None
    assert body["recommendation"]["notes"] == [MISSING_INPUT_NOTE]
    assert body["assumptions"] == ["LLM assumption", DEGRADED_ASSUMPTION]


@pytest.mark.parametrize("request_body", [{}, {"text": ""}, {"budget": 1000, "city": "Karachi"}])
def test_no_text_or_fields_is_rejected_before_llm(request_body: dict) -> None:
    parser = FakeBillParser(_parsed())
    with pytest.raises(InputMissingError):
        _pipeline(parser).process(AnalyzeRequest(**request_body))
    assert parser.calls == []


def test_parse_failure_raises_structured_output_error() -> None:
    parser = FakeBillParser(ParseFailure("no JSON object in response", raw="I am not JSON"))
    with pytest.raises(StructuredOutputError) as exc_info:
        _pipeline(parser).process(AnalyzeRequest(text="bill"), trace_id="t-502")
    assert exc_info.value.raw == "I am not JSON"
    assert exc_info.value.trace_id == "t-502"
