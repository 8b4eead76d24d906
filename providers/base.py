"""
Base classes for LLM providers.
Pipeline depends only on ILLMProvider; no concrete provider imports in services.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any

import requests

from core.interfaces import ILLMProvider

logger = logging.getLogger(__name__)

# Sampling options forwarded to /chat/completions when given
_OPTIONAL_PARAMS = ("temperature", "top_p", "response_format")


class BaseLLMProvider(ILLMProvider, ABC):
    """Abstract LLM provider. Implement chat()."""


class OpenAICompatibleProvider(BaseLLMProvider):
    """
    Any server speaking the OpenAI chat/completions contract (OpenAI, Groq, Ollama).
    Subclasses only set DEFAULT_BASE_URL and DEFAULT_MODEL.
    """

    DEFAULT_BASE_URL = "https://api.openai.com/v1"
    DEFAULT_MODEL = "gpt-4o-mini"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str = "",
        model: str | None = None,
        timeout_sec: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._api_key = api_key or ""
        self._model = model or self.DEFAULT_MODEL
        self._timeout = timeout_sec
        self._session = session or requests.Session()

    @property
    def model(self) -> str:
        return self._model

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {"Content-Type": "application/json"}
        if self._api_key:
            h["Authorization"] = f"Bearer {self._api_key}"
        return h

    def _completion(self, messages: list[dict[str, Any]], **kwargs: Any) -> dict[str, Any]:
        url = f"{self._base_url}/chat/completions"
        payload: dict[str, Any] = {
            "model": kwargs.get("model") or self._model,
            "messages": messages,
            "max_tokens": kwargs.get("max_tokens", 2048),
            "stream": False,
        }
        for key in _OPTIONAL_PARAMS:
            if kwargs.get(key) is not None:
                payload[key] = kwargs[key]
        logger.debug("POST %s model=%s messages=%s", url, payload["model"], len(messages))
        resp = self._session.post(url, json=payload, headers=self._headers(), timeout=self._timeout)
        resp.raise_for_status()
        return resp.json()

    def chat(self, messages: list[dict[str, Any]], **kwargs: Any) -> str:
        data = self._completion(messages, **kwargs)
        choice = (data.get("choices") or [{}])[0]
        return ((choice.get("message") or {}).get("content") or "").strip()
