"""End-to-end resume review: clean text, parse, analyze, optionally match a job."""

import logging
import re

from .analyzer import ResumeAnalyzer
from .config import settings
from .llm import create_llm_service
from .schemas import ProviderConfig, ProviderName, ResumeReview

logger = logging.getLogger(__name__)

_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n\r\t]")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Normalize extracted resume text before it is sent to an LLM.

    Drops characters outside printable ASCII (tabs and newlines aside),
    collapses whitespace runs to a single space and strips the ends.
    """
    text = _NON_PRINTABLE.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def provider_config_from_settings(provider: str | None = None, model: str | None = None) -> ProviderConfig:
    """Build a provider config from environment settings.

    Explicit ``provider``/``model`` arguments take precedence over
    ``LLM_PROVIDER``/``LLM_MODEL``.
    """
    provider = provider or settings.LLM_PROVIDER
    config = {}
    if model or settings.LLM_MODEL:
        config["model"] = model or settings.LLM_MODEL
    if settings.LLM_API_KEY:
        config["api_key"] = settings.LLM_API_KEY
    if provider.strip().lower() == ProviderName.OLLAMA.value:
        config["url"] = settings.OLLAMA_URL

    return ProviderConfig(provider=provider, config=config)


def review_resume(
    text: str,
    provider_config: ProviderConfig,
    job_description: str | None = None,
) -> ResumeReview:
    """Parse and analyze a resume, and match it against a job when one is given.

    Each step gets a fresh LLM service built from ``provider_config``.

    Raises:
        ProviderError: If the configuration is invalid or parsing fails.
        AnalysisError: If an analysis step fails.
    """
    cleaned = clean_text(text)
    logger.info(f"Reviewing resume ({len(cleaned)} chars) with provider {provider_config.provider}")

    parsed = create_llm_service(provider_config).parse_resume(cleaned)
    analysis = ResumeAnalyzer(create_llm_service(provider_config)).analyze_resume(parsed)

    job_match = None
    if job_description and job_description.strip():
        job_match = ResumeAnalyzer(create_llm_service(provider_config)).analyze_job_match(parsed, job_description)

    return ResumeReview(parsed=parsed, analysis=analysis, job_match=job_match)
