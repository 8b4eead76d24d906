"""OpenAI (and Azure/OpenAI-compatible) HTTP provider."""

from __future__ import annotations

from providers.base import OpenAICompatibleProvider

DEFAULT_OPENAI_BASE = "https://api.openai.com/v1"


class OpenAIProvider(OpenAICompatibleProvider):
    """OpenAI API and OpenAI-compatible endpoints (Azure, etc.)."""

    DEFAULT_BASE_URL = DEFAULT_OPENAI_BASE
    DEFAULT_MODEL = "gpt-4o-mini"
