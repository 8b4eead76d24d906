"""Custom exceptions for the solar bill advisor. No generic Exception usage."""

from __future__ import annotations


class SolarAdvisorError(Exception):
    """Base exception for advisor failures."""

    def __init__(self, message: str, trace_id: str | None = None) -> None:
        self.trace_id = trace_id or ""
        super().__init__(message)


class ConfigError(SolarAdvisorError):
    """Invalid or missing configuration (including the market table)."""

    pass


class InputMissingError(SolarAdvisorError):
    """Request carried neither bill text nor fields to work from."""

    pass


class LLMRequestError(SolarAdvisorError):
    """LLM call failed after retries."""

    pass


class StructuredOutputError(SolarAdvisorError):
    """LLM output could not be parsed as the expected JSON object."""

    def __init__(self, message: str, raw: str = "", trace_id: str | None = None) -> None:
        self.raw = raw
        super().__init__(message, trace_id=trace_id)
