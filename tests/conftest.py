import json
from unittest.mock import MagicMock

import pytest

from resume_review.config import settings
from resume_review.llm import LLMService
from resume_review.schemas import (
    Education,
    Experience,
    ParsedResume,
    PersonalDetails,
    ProviderName,
    Skills,
)


class FakeLLMService(LLMService):
    """LLMService returning canned replies, recording every prompt it receives."""

    provider = ProviderName.OLLAMA
    model = "fake-model"

    def __init__(self, *responses: str | None):
        self.responses = list(responses)
        self.calls: list[tuple[str, str]] = []

    def generate(self, system_prompt: str, user_prompt: str) -> str | None:
        self.calls.append((system_prompt, user_prompt))
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep tests independent of API keys or provider settings in the environment."""
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")
    monkeypatch.setattr(settings, "ANTHROPIC_API_KEY", "")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
    monkeypatch.setattr(settings, "LLM_API_KEY", "")
    monkeypatch.setattr(settings, "LLM_MODEL", "")
    monkeypatch.setattr(settings, "LLM_PROVIDER", "openai")
    monkeypatch.setattr(settings, "OLLAMA_URL", "http://localhost:11434")
    monkeypatch.setattr(settings, "LLM_REQUEST_TIMEOUT", None)


@pytest.fixture
def fake_sdk_clients(monkeypatch):
    """Replace the OpenAI, Anthropic and Gemini client classes with mocks."""
    import anthropic
    import openai
    from google import genai

    clients = {
        ProviderName.OPENAI: MagicMock(name="OpenAI"),
        ProviderName.CLAUDE: MagicMock(name="Anthropic"),
        ProviderName.GEMINI: MagicMock(name="genai.Client"),
    }
    monkeypatch.setattr(openai, "OpenAI", clients[ProviderName.OPENAI])
    monkeypatch.setattr(anthropic, "Anthropic", clients[ProviderName.CLAUDE])
    monkeypatch.setattr(genai, "Client", clients[ProviderName.GEMINI])
    return clients


@pytest.fixture
def complete_resume():
    """A resume that passes every rule-based check."""
    return ParsedResume(
        personal_details=PersonalDetails(
            name="Jane Doe",
            email="jane@example.com",
            phone="+1 555 0100",
            location="Berlin",
        ),
        experience=[
            Experience(
                title="Backend Engineer",
                company="Acme",
                duration="2019 - 2024",
                description="Led the payments backend team and increased revenue by 25% through an API redesign.",
            )
        ],
        education=[Education(degree="BSc Computer Science", institution="TU Berlin", year="2018")],
        skills=Skills(technical=["Python", "PostgreSQL"], soft=["Mentoring"]),
    )


@pytest.fixture
def empty_resume():
    return ParsedResume()


@pytest.fixture
def parsed_resume_json():
    return json.dumps(
        {
            "personalDetails": {"name": "Jane Doe", "email": "jane@example.com"},
            "experience": [
                {
                    "title": "Backend Engineer",
                    "company": "Acme",
                    "duration": "5 years",
                    "description": "Built services",
                    "achievements": ["Cut latency by 40%"],
                }
            ],
            "education": [{"degree": "BSc", "institution": "TU Berlin", "year": 2018}],
            "skills": {"technical": ["Python"], "soft": [], "languages": ["English"]},
        }
    )


@pytest.fixture
def analysis_json():
    return json.dumps(
        {
            "score": 82,
            "suggestions": [
                {
                    "type": "success",
                    "title": "Clear Structure",
                    "description": "Sections are easy to scan",
                    "section": "experience",
                }
            ],
            "keywords": ["Python", "APIs"],
            "atsCompatibility": 77,
        }
    )
