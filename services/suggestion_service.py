"""
Suggestion service: bill summary -> free-text solar advice from the LLM.
No JSON parsing; the model's answer is returned as-is.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

import requests

from core.exceptions import InputMissingError, LLMRequestError
from core.interfaces import ILLMProvider, ISuggestionService
from core.schema import SuggestionRequest
from prompts import load_prompt
from utils.retry import with_retry

logger = logging.getLogger(__name__)

SUGGESTION_MAX_TOKENS = 2048
SUGGESTION_TEMPERATURE = 0.7
SUGGESTION_TOP_P = 1.0
NO_SUGGESTIONS = "No suggestions available"
MISSING_FIELDS_MESSAGE = "Missing required fields: units and cost are required"


def _fmt_number(value: int | float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _utc_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_suggestion_prompt(request: SuggestionRequest, cost_per_unit: float) -> str:
    lines = [
        "I need advice on reducing electricity costs using solar panels "
        "based on the following electric bill information:",
        "",
        f"- Monthly Energy Consumption: {_fmt_number(request.units)} kWh",
        f"- Total Monthly Bill Cost: {_fmt_number(request.cost)} (currency)",
        f"- Cost Per Unit: {cost_per_unit:.4f} (currency per kWh)",
    ]
    if request.billing_date:
        lines.append(f"- Billing Date: {request.billing_date}")
    if request.location:
        lines.append(f"- Location: {request.location}")
    if request.roof_area:
        lines.append(f"- Available Roof Area: {_fmt_number(request.roof_area)} sq ft")
    if request.additional_info:
        lines.append(f"- Additional Information: {request.additional_info}")
    lines.append("")
    lines.append(load_prompt("solar_advice_checklist.txt"))
    return "\n".join(lines)


class SuggestionService(ISuggestionService):
    """Free-text advice via injected provider. Higher temperature than the parser."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        model: str | None = None,
        max_retries: int = 3,
        retry_delay_sec: float = 2.0,
        clock: Callable[[], str] = _utc_timestamp,
    ) -> None:
        self._llm = llm_provider
        self._model = model
        self._max_retries = max_retries
        self._retry_delay_sec = retry_delay_sec
        self._clock = clock

    def suggest(self, request: SuggestionRequest, trace_id: str = "") -> dict[str, Any]:
        if not request.units or not request.cost:
            raise InputMissingError(MISSING_FIELDS_MESSAGE, trace_id=trace_id)
        cost_per_unit = request.cost / request.units
        messages = [
            {"role": "system", "content": load_prompt("system_prompt_solar_advisor.txt")},
            {"role": "user", "content": build_suggestion_prompt(request, cost_per_unit)},
        ]
        try:
            content = with_retry(
                lambda: self._llm.chat(
                    messages,
                    model=self._model,
                    max_tokens=SUGGESTION_MAX_TOKENS,
                    temperature=SUGGESTION_TEMPERATURE,
                    top_p=SUGGESTION_TOP_P,
                ),
                max_attempts=self._max_retries,
                delay_sec=self._retry_delay_sec,
                retry_exceptions=(requests.RequestException,),
            )
        except requests.RequestException as e:
            raise LLMRequestError(f"Suggestion LLM failed: {e}", trace_id=trace_id) from e

        logger.info("Suggestions generated trace_id=%s chars=%s", trace_id, len(content or ""))
        return {
            "success": True,
            "suggestions": content or NO_SUGGESTIONS,
            "metadata": {
                "units": request.units,
                "cost": request.cost,
                "costPerUnit": f"{cost_per_unit:.4f}",
                "billingDate": request.billing_date,
                "timestamp": self._clock(),
            },
        }
