"""LLM providers: abstract base and concrete implementations."""

from providers.base import BaseLLMProvider, OpenAICompatibleProvider
from providers.openai_provider import OpenAIProvider
from providers.groq_provider import GroqProvider
from providers.ollama_provider import OllamaProvider
from providers.factory import create_provider

__all__ = [
    "BaseLLMProvider",
    "OpenAICompatibleProvider",
    "OpenAIProvider",
    "GroqProvider",
    "OllamaProvider",
    "create_provider",
]
