"""Core layer: interfaces, models, schemas, exceptions."""

from core.interfaces import (
    ILLMProvider,
    IBillParser,
    ISuggestionService,
)
from core.models import (
    BillFields,
    CanonicalBill,
    ParsedBill,
    ParseFailure,
)
from core.schema import (
    AnalyzeRequest,
    AnalysisResult,
    CostBreakdown,
    Recommendation,
    SuggestionRequest,
)
from core.exceptions import (
    SolarAdvisorError,
    ConfigError,
    InputMissingError,
    LLMRequestError,
    StructuredOutputError,
)

__all__ = [
    "ILLMProvider",
    "IBillParser",
    "ISuggestionService",
    "BillFields",
    "CanonicalBill",
    "ParsedBill",
    "ParseFailure",
    "AnalyzeRequest",
    "AnalysisResult",
    "CostBreakdown",
    "Recommendation",
    "SuggestionRequest",
    "SolarAdvisorError",
    "ConfigError",
    "InputMissingError",
    "LLMRequestError",
    "StructuredOutputError",
]
