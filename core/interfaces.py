"""
Abstract interfaces for the advisor pipeline.
Every external dependency is behind an interface; no service depends on a concrete LLM.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from core.models import ParseFailure, ParsedBill
from core.schema import SuggestionRequest


class ILLMProvider(ABC):
    """Abstract LLM provider: chat completions. Used by the bill parser and suggestion services."""

    @abstractmethod
    def chat(self, messages: list[dict[str, Any]], **kwargs: Any) -> str:
        """Chat completion; returns content string."""
        ...


class IBillParser(ABC):
    """Abstract bill parsing: bill text and/or known fields -> parsed JSON fields."""

    @abstractmethod
    def parse(
        self,
        text: str | None,
        fields: Mapping[str, Any] | None,
        budget: Any,
        trace_id: str = "",
    ) -> ParsedBill | ParseFailure:
        """
        Ask the LLM for structured bill fields.
        Returns ParsedBill, or ParseFailure when the reply is not the expected JSON object.
        """
        ...


class ISuggestionService(ABC):
    """Abstract free-text solar advice for a bill summary."""

    @abstractmethod
    def suggest(self, request: SuggestionRequest, trace_id: str = "") -> dict[str, Any]:
        """Return response dict: success, suggestions, metadata."""
        ...
