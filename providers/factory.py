"""Factory for creating LLM providers from config."""

from __future__ import annotations

from core.exceptions import ConfigError
from core.interfaces import ILLMProvider
from providers.base import OpenAICompatibleProvider
from providers.groq_provider import GroqProvider
from providers.ollama_provider import OllamaProvider
from providers.openai_provider import OpenAIProvider
from utils.config import LLMConfig

PROVIDERS: dict[str, type[OpenAICompatibleProvider]] = {
    "groq": GroqProvider,
    "openai": OpenAIProvider,
    "ollama": OllamaProvider,
}


def create_provider(config: LLMConfig) -> ILLMProvider:
    """Create an LLM provider by name. Empty base_url/model fall back to the provider's defaults."""
    name = (config.provider or "groq").strip().lower()
    cls = PROVIDERS.get(name)
    if cls is None:
        raise ConfigError(
            f"Unknown LLM provider: {config.provider}. Use one of: {', '.join(sorted(PROVIDERS))}."
        )
    return cls(
        base_url=config.base_url or None,
        api_key=config.api_key,
        model=config.model or None,
        timeout_sec=config.timeout_sec,
    )
