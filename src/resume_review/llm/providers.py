"""LLM services for resume parsing and analysis - one implementation per backend."""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import TypeVar

import requests
from pydantic import BaseModel, ValidationError

from ..config import DEFAULT_MODELS, settings
from ..exceptions import (
    MalformedResponseError,
    ProviderAuthenticationError,
    ProviderTransportError,
    UnsupportedProviderError,
)
from ..schemas import AnalysisResult, ParsedResume, ProviderConfig, ProviderName
from .prompts import (
    ANALYZE_RESUME_SYSTEM_PROMPT,
    ANALYZE_RESUME_USER_TEMPLATE,
    JOB_MATCH_SYSTEM_PROMPT,
    JOB_MATCH_USER_TEMPLATE,
    PARSE_RESUME_SYSTEM_PROMPT,
    PARSE_RESUME_USER_TEMPLATE,
    SAMPLE_RESUME_TEXT,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

AUTH_STATUS_CODES = {401, 403}

_CODE_BLOCK = re.compile(r"^```(?:json)?\s*([\s\S]*?)\s*```$")


def parse_json_response(response_text: str | None, provider: str) -> dict:
    """Decode an LLM reply into a JSON object.

    A reply wrapped in a single markdown code block is unwrapped first.
    Nothing else is repaired: empty text, invalid JSON or a JSON value that
    is not an object raise MalformedResponseError.
    """
    if response_text is None or not response_text.strip():
        logger.error(f"{provider} returned an empty response")
        raise MalformedResponseError(f"{provider} returned an empty response", provider=provider)

    json_text = response_text.strip()
    match = _CODE_BLOCK.match(json_text)
    if match:
        json_text = match.group(1)

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse JSON from {provider}. First 500 chars: {json_text[:500]}")
        raise MalformedResponseError(f"Invalid JSON from {provider}: {e}", provider=provider) from e

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Expected a JSON object from {provider}, got {type(data).__name__}",
            provider=provider,
        )
    return data


class LLMService(ABC):
    """Parse and analyze resumes through one LLM backend.

    Subclasses only implement ``generate``. Prompts and the decoding of the
    JSON reply are shared so every backend is held to the same schema.
    """

    provider: ProviderName
    model: str

    @abstractmethod
    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        """Send prompts to the backend and return the raw reply text.

        Raises:
            ProviderAuthenticationError: If the backend rejects the credentials.
            ProviderTransportError: If the call fails for any other reason.
        """

    def parse_resume(self, text: str) -> ParsedResume:
        """Extract structured data from cleaned resume text."""
        logger.info(f"Parsing {len(text)} chars of resume text with {self.provider.value}/{self.model}")
        user_prompt = PARSE_RESUME_USER_TEMPLATE.format(resume_text=text)
        return self._request(PARSE_RESUME_SYSTEM_PROMPT, user_prompt, ParsedResume)

    def analyze_resume(self, parsed: ParsedResume) -> AnalysisResult:
        """Score the resume and suggest improvements."""
        logger.info(f"Analyzing resume with {self.provider.value}/{self.model}")
        user_prompt = ANALYZE_RESUME_USER_TEMPLATE.format(resume_json=parsed.as_json())
        return self._request(ANALYZE_RESUME_SYSTEM_PROMPT, user_prompt, AnalysisResult)

    def analyze_job_match(self, parsed: ParsedResume, job_description: str) -> AnalysisResult:
        """Score how well the resume matches a job description."""
        logger.info(f"Matching resume against {len(job_description)} chars of job description")
        user_prompt = JOB_MATCH_USER_TEMPLATE.format(
            resume_json=parsed.as_json(),
            job_description=job_description,
        )
        return self._request(JOB_MATCH_SYSTEM_PROMPT, user_prompt, AnalysisResult)

    def _request(self, system_prompt: str, user_prompt: str, schema: type[ModelT]) -> ModelT:
        response_text = self.generate(system_prompt, user_prompt)
        logger.debug(f"{self.provider.value} response: {(response_text or '')[:500]}...")

        data = parse_json_response(response_text, self.provider.value)
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            logger.error(f"{self.provider.value} response does not match {schema.__name__}: {e}")
            raise MalformedResponseError(
                f"{self.provider.value} response does not match {schema.__name__}: {e}",
                provider=self.provider.value,
            ) from e


class OpenAIService(LLMService):
    """OpenAI chat completions in JSON mode."""

    provider = ProviderName.OPENAI

    def __init__(self, config: dict[str, str]):
        from openai import OpenAI

        # Use provided values or fall back to settings
        api_key = config.get("api_key") or settings.OPENAI_API_KEY
        if not api_key:
            raise ProviderAuthenticationError("An API key is required for OpenAI", provider=self.provider.value)

        self.client = OpenAI(
            api_key=api_key,
            organization=config.get("organization_id") or None,
        )
        self.model = config.get("model") or DEFAULT_MODELS[self.provider]

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        import openai

        logger.info(f"=== LLM CALL (OpenAI) === model={self.model}")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                response_format={"type": "json_object"},
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            logger.error(f"OpenAI authentication error: {e}")
            raise ProviderAuthenticationError(
                f"OpenAI - Authentication failed: {e}", provider=self.provider.value
            ) from e
        except Exception as e:
            logger.error(f"OpenAI error: {e}")
            raise ProviderTransportError(
                f"OpenAI - Error generating response: {e}", provider=self.provider.value
            ) from e

        if not response.choices:
            raise MalformedResponseError("OpenAI returned no choices", provider=self.provider.value)
        return response.choices[0].message.content


class ClaudeService(LLMService):
    """Anthropic messages API with the instructions in the system field."""

    provider = ProviderName.CLAUDE

    def __init__(self, config: dict[str, str]):
        from anthropic import Anthropic

        api_key = config.get("api_key") or settings.ANTHROPIC_API_KEY
        if not api_key:
            raise ProviderAuthenticationError("An API key is required for Anthropic", provider=self.provider.value)

        self.client = Anthropic(api_key=api_key)
        self.model = config.get("model") or DEFAULT_MODELS[self.provider]

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        import anthropic

        logger.info(f"=== LLM CALL (Anthropic) === model={self.model}")
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=settings.LLM_MAX_TOKENS,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
            logger.error(f"Anthropic authentication error: {e}")
            raise ProviderAuthenticationError(
                f"Anthropic - Authentication failed: {e}", provider=self.provider.value
            ) from e
        except Exception as e:
            logger.error(f"Anthropic error: {e}")
            raise ProviderTransportError(
                f"Anthropic - Error generating response: {e}", provider=self.provider.value
            ) from e

        return "".join(block.text for block in response.content if block.type == "text")


class GeminiService(LLMService):
    """Google Gemini with a system instruction and a forced JSON response type."""

    provider = ProviderName.GEMINI

    def __init__(self, config: dict[str, str]):
        from google import genai

        api_key = config.get("api_key") or settings.GEMINI_API_KEY
        if not api_key:
            raise ProviderAuthenticationError("An API key is required for Gemini", provider=self.provider.value)

        self.client = genai.Client(api_key=api_key)
        self.model = config.get("model") or DEFAULT_MODELS[self.provider]

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        from google.genai import errors, types

        logger.info(f"=== LLM CALL (Gemini) === model={self.model}")
        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    response_mime_type="application/json",
                ),
            )
        except errors.APIError as e:
            logger.error(f"Gemini API error: status={e.code}, message={e}")
            if e.code in AUTH_STATUS_CODES:
                raise ProviderAuthenticationError(
                    f"Gemini - Authentication failed: {e}", provider=self.provider.value
                ) from e
            raise ProviderTransportError(
                f"Gemini - Error generating response: {e}", provider=self.provider.value
            ) from e
        except Exception as e:
            logger.error(f"Gemini error: {e}")
            raise ProviderTransportError(
                f"Gemini - Error generating response: {e}", provider=self.provider.value
            ) from e

        return response.text


class OllamaService(LLMService):
    """Self-hosted Ollama server over its native /api/generate endpoint.

    Ollama wraps the generated text in a JSON envelope; the ``response``
    string returned here is itself JSON and gets decoded a second time by
    the shared parsing step.
    """

    provider = ProviderName.OLLAMA

    def __init__(self, config: dict[str, str]):
        self.base_url = (config.get("url") or settings.OLLAMA_URL).rstrip("/")
        self.model = config.get("model") or DEFAULT_MODELS[self.provider]

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        url = f"{self.base_url}/api/generate"
        payload = {
            "model": self.model,
            "prompt": user_prompt,
            "system": system_prompt,
            "stream": False,
            "format": "json",
        }

        logger.info(f"=== LLM CALL (Ollama) === endpoint={url}, model={self.model}")
        try:
            response = requests.post(url, json=payload, timeout=settings.LLM_REQUEST_TIMEOUT)
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error(f"Ollama request failed: status={status}, message={e}")
            if status in AUTH_STATUS_CODES:
                raise ProviderAuthenticationError(
                    f"Ollama - Authentication failed: {e}", provider=self.provider.value
                ) from e
            raise ProviderTransportError(f"Ollama request failed: {e}", provider=self.provider.value) from e
        except requests.RequestException as e:
            logger.error(f"Ollama connection error: {e}")
            raise ProviderTransportError(f"Ollama request failed: {e}", provider=self.provider.value) from e

        try:
            envelope = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Ollama returned a non-JSON envelope: {e}", provider=self.provider.value
            ) from e

        generated = envelope.get("response") if isinstance(envelope, dict) else None
        if not isinstance(generated, str):
            raise MalformedResponseError("Ollama envelope has no 'response' string", provider=self.provider.value)
        return generated


_SERVICES: dict[ProviderName, type[LLMService]] = {
    ProviderName.OPENAI: OpenAIService,
    ProviderName.CLAUDE: ClaudeService,
    ProviderName.GEMINI: GeminiService,
    ProviderName.OLLAMA: OllamaService,
}


def create_llm_service(config: ProviderConfig) -> LLMService:
    """Factory function to create the LLM service for a provider config.

    A fresh service is built on every call; services hold no state shared
    between requests.

    Raises:
        UnsupportedProviderError: If ``config.provider`` is not one of the
            supported backends.
        ProviderAuthenticationError: If a hosted backend has no API key.
    """
    try:
        provider = ProviderName(config.provider.strip().lower())
    except ValueError as e:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {config.provider}", provider=config.provider
        ) from e

    return _SERVICES[provider](config.config)


def check_connection(config: ProviderConfig) -> ParsedResume:
    """Parse a small sample resume to check that a provider config works.

    Errors propagate unchanged so the caller can report them.
    """
    service = create_llm_service(config)
    parsed = service.parse_resume(SAMPLE_RESUME_TEXT)
    logger.info(f"LLM connection successful: {service.provider.value}/{service.model}")
    return parsed
