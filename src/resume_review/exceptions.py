"""Errors raised by LLM providers and the resume analyzer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a provider failure."""

    AUTHENTICATION = "authentication"
    TRANSPORT = "transport"
    MALFORMED_RESPONSE = "malformed_response"
    UNSUPPORTED_PROVIDER = "unsupported_provider"


class ProviderError(RuntimeError):
    """Raised when the underlying LLM provider fails"""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class UnsupportedProviderError(ProviderError):
    """Raised when a provider config names a backend we do not support"""

    kind = ErrorKind.UNSUPPORTED_PROVIDER


class ProviderTransportError(ProviderError):
    """Raised on network, HTTP status or SDK failures talking to the backend"""

    kind = ErrorKind.TRANSPORT


class ProviderAuthenticationError(ProviderTransportError):
    """Raised when credentials are missing or rejected by the backend"""

    kind = ErrorKind.AUTHENTICATION


class MalformedResponseError(ProviderError):
    """Raised when the backend returns empty, non-JSON or off-schema content"""

    kind = ErrorKind.MALFORMED_RESPONSE


class AnalysisError(RuntimeError):
    """Raised by ResumeAnalyzer when an analysis step fails.

    ``step`` is ``"analysis"`` or ``"job_match"``; the underlying exception is
    chained as ``__cause__``.
    """

    def __init__(self, step: str, message: str):
        super().__init__(message)
        self.step = step
