"""Groq cloud provider (OpenAI-compatible endpoint). Default for the advisor."""

from __future__ import annotations

from providers.base import OpenAICompatibleProvider

DEFAULT_GROQ_BASE = "https://api.groq.com/openai/v1"


class GroqProvider(OpenAICompatibleProvider):
    """Groq chat completions; same HTTP contract as OpenAI."""

    DEFAULT_BASE_URL = DEFAULT_GROQ_BASE
    DEFAULT_MODEL = "llama-3.3-70b-versatile"
