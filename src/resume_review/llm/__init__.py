"""LLM services for resume parsing and analysis."""

from .providers import (
    ClaudeService,
    GeminiService,
    LLMService,
    OllamaService,
    OpenAIService,
    check_connection,
    create_llm_service,
    parse_json_response,
)

__all__ = [
    "LLMService",
    "OpenAIService",
    "ClaudeService",
    "GeminiService",
    "OllamaService",
    "create_llm_service",
    "check_connection",
    "parse_json_response",
]
