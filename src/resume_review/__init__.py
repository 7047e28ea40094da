"""Resume parsing, analysis and job matching through pluggable LLM providers."""

from .analyzer import ResumeAnalyzer
from .exceptions import (
    AnalysisError,
    ErrorKind,
    MalformedResponseError,
    ProviderAuthenticationError,
    ProviderError,
    ProviderTransportError,
    UnsupportedProviderError,
)
from .llm import LLMService, check_connection, create_llm_service
from .pipeline import clean_text, review_resume
from .schemas import AnalysisResult, ParsedResume, ProviderConfig, ProviderName, Suggestion, SuggestionType

__all__ = [
    "ResumeAnalyzer",
    "LLMService",
    "create_llm_service",
    "check_connection",
    "review_resume",
    "clean_text",
    "ParsedResume",
    "AnalysisResult",
    "Suggestion",
    "SuggestionType",
    "ProviderConfig",
    "ProviderName",
    "ErrorKind",
    "ProviderError",
    "UnsupportedProviderError",
    "ProviderTransportError",
    "ProviderAuthenticationError",
    "MalformedResponseError",
    "AnalysisError",
]
