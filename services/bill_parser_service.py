"""
Bill parser service: bill text and/or known fields -> parsedFields via the LLM.
Uses injected ILLMProvider; malformed replies come back as ParseFailure, not exceptions.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import requests

from core.exceptions import LLMRequestError
from core.interfaces import IBillParser, ILLMProvider
from core.models import DEFAULT_BUDGET_REQUEST, ParsedBill, ParseFailure
from prompts import load_prompt
from solar.normalizer import safe_num
from utils.json_utils import parse_json_object
from utils.retry import with_retry

logger = logging.getLogger(__name__)

PARSER_MAX_TOKENS = 2048
PARSER_TEMPERATURE = 0.2
PARSER_TOP_P = 1.0


def build_parser_prompt(
    text: str | None,
    fields: Mapping[str, Any] | None,
    budget: Any,
) -> str:
    """User message: bill text, known fields, budget, then the strict JSON shape."""
    parts: list[str] = []
    if text:
        parts.append("Electric bill text to parse:\n\n" + text)
    if fields is not None:
        parts.append(
            "Known fields (may override parsing): "
            + json.dumps(dict(fields), separators=(",", ":"), default=str)
        )
    if safe_num(budget) is not None:
        parts.append(f"User budget for solar (currency): {budget}")
    parts.append(load_prompt("bill_parser_instructions.txt"))
    return "\n\n".join(parts)


def to_parsed_bill(data: dict[str, Any], raw: str) -> ParsedBill | ParseFailure:
    """Validate the reply shape: parsedFields must be an object; other keys get defaults."""
    parsed_fields = data.get("parsedFields")
    if not isinstance(parsed_fields, dict):
        return ParseFailure("parsedFields missing or not an object", raw=raw)
    assumptions = data.get("assumptions")
    budget_request = data.get("budgetRequest")
    return ParsedBill(
        parsed_fields=parsed_fields,
        assumptions=[str(a) for a in assumptions] if isinstance(assumptions, list) else [],
        budget_request=budget_request if isinstance(budget_request, dict) else dict(DEFAULT_BUDGET_REQUEST),
        raw=raw,
    )


class BillParserService(IBillParser):
    """Bill parsing LLM via injected provider. Low temperature for stable JSON."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        model: str | None = None,
        max_retries: int = 3,
        retry_delay_sec: float = 2.0,
    ) -> None:
        self._llm = llm_provider
        self._model = model
        self._max_retries = max_retries
        self._retry_delay_sec = retry_delay_sec

    def _call_llm(self, messages: list[dict[str, Any]]) -> str:
        return self._llm.chat(
            messages,
            model=self._model,
            max_tokens=PARSER_MAX_TOKENS,
            temperature=PARSER_TEMPERATURE,
            top_p=PARSER_TOP_P,
        )

    def parse(
        self,
        text: str | None,
        fields: Mapping[str, Any] | None,
        budget: Any,
        trace_id: str = "",
    ) -> ParsedBill | ParseFailure:
        messages = [
            {"role": "system", "content": load_prompt("system_prompt_bill_parser.txt")},
            {"role": "user", "content": build_parser_prompt(text, fields, budget)},
        ]
        try:
            raw = with_retry(
                lambda: self._call_llm(messages),
                max_attempts=self._max_retries,
                delay_sec=self._retry_delay_sec,
                retry_exceptions=(requests.RequestException,),
            )
        except requests.RequestException as e:
            raise LLMRequestError(f"Bill parser LLM failed: {e}", trace_id=trace_id) from e

        data = parse_json_object(raw or "")
        if isinstance(data, ParseFailure):
            logger.warning(
                "Bill parser JSON parse failed trace_id=%s reason=%s raw_preview=%s",
                trace_id,
                data.reason,
                (raw or "")[:300],
            )
            return data
        outcome = to_parsed_bill(data, raw)
        if isinstance(outcome, ParseFailure):
            logger.warning("Bill parser reply rejected trace_id=%s reason=%s", trace_id, outcome.reason)
        return outcome
