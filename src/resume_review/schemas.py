"""Pydantic schemas for parsed resumes, analysis results and provider configuration."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_snake

SCORE_MIN = 0
SCORE_MAX = 100


def clamp_score(value: float) -> int:
    """Round a score and clamp it to the 0-100 range."""
    return max(SCORE_MIN, min(SCORE_MAX, int(round(value))))


class ResumeModel(BaseModel):
    """Base model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class ProviderName(str, Enum):
    """AI backends a provider config can select."""

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"
    OLLAMA = "ollama"


class SuggestionType(str, Enum):
    """Severity of an analysis suggestion."""

    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


# =============================================================================
# Parsed resume
# =============================================================================


class PersonalDetails(ResumeModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    summary: str | None = None


class Experience(ResumeModel):
    title: str | None = None
    company: str | None = None
    duration: str | None = None
    description: str | None = None
    achievements: list[str] | None = None


class Education(ResumeModel):
    degree: str | None = None
    institution: str | None = None
    year: str | None = None
    gpa: str | None = None


class Skills(ResumeModel):
    technical: list[str] | None = None
    soft: list[str] | None = None
    languages: list[str] | None = None


class Project(ResumeModel):
    name: str | None = None
    description: str | None = None
    technologies: list[str] | None = None


class ParsedResume(ResumeModel):
    """Structured resume extracted by an LLM.

    Every section is optional. ``None`` means the section is absent, which is
    not the same thing as an empty string or an empty list.
    """

    personal_details: PersonalDetails | None = None
    experience: list[Experience] | None = None
    education: list[Education] | None = None
    skills: Skills | None = None
    projects: list[Project] | None = None

    def as_json(self, indent: int | None = 2) -> str:
        """Serialize with camelCase keys, leaving absent fields out."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)


# =============================================================================
# Analysis
# =============================================================================


class Suggestion(ResumeModel):
    """A single piece of feedback about the resume."""

    type: SuggestionType
    title: str
    description: str
    section: str | None = None


class AnalysisResult(ResumeModel):
    """Scored feedback about a resume, optionally relative to a job description."""

    score: int
    suggestions: list[Suggestion] = Field(default_factory=list)
    keywords: list[str] | None = None
    ats_compatibility: int | None = None

    @field_validator("suggestions", mode="before")
    @classmethod
    def _null_suggestions(cls, value):
        return [] if value is None else value

    @field_validator("score", "ats_compatibility", mode="before")
    @classmethod
    def _clamp_scores(cls, value):
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("score must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"score must be a number, got {value!r}") from e
        if not math.isfinite(number):
            raise ValueError(f"score must be finite, got {value!r}")
        return clamp_score(number)


# =============================================================================
# Provider configuration
# =============================================================================


class ProviderConfig(BaseModel):
    """Active provider and its settings (api_key, organization_id, model, url).

    ``provider`` is kept as a free string so an unknown name reaches the
    factory and fails there with UnsupportedProviderError.
    """

    model_config = ConfigDict(frozen=True)

    provider: str
    config: dict[str, str] = Field(default_factory=dict)

    @field_validator("config", mode="before")
    @classmethod
    def _snake_case_keys(cls, value):
        # Stored configs use apiKey/organizationId
        if isinstance(value, dict):
            return {to_snake(key): item for key, item in value.items()}
        return value


class ResumeReview(ResumeModel):
    """Output of the full review pipeline."""

    parsed: ParsedResume
    analysis: AnalysisResult
    job_match: AnalysisResult | None = None
