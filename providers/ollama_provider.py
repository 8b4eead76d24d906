"""Ollama (local) OpenAI-compatible API provider, for running without a cloud key."""

from __future__ import annotations

from providers.base import OpenAICompatibleProvider

DEFAULT_OLLAMA_BASE = "http://localhost:11434/v1"


class OllamaProvider(OpenAICompatibleProvider):
    """Ollama local server; same HTTP contract as OpenAI chat/completions."""

    DEFAULT_BASE_URL = DEFAULT_OLLAMA_BASE
    DEFAULT_MODEL = "llama3.2"
