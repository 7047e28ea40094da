"""Configuration settings for resume-review."""

from pydantic_settings import BaseSettings

from .schemas import ProviderName


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service
    SERVICE_NAME: str = "resume-review"
    DEBUG: bool = False

    # Default provider, used when no provider config is passed explicitly
    LLM_PROVIDER: str = "openai"  # openai, claude, gemini, ollama
    LLM_MODEL: str = ""  # Empty = provider default from DEFAULT_MODELS
    LLM_API_KEY: str = ""

    # Fallback credentials per hosted provider
    OPENAI_API_KEY: str = ""
    ANTHROPIC_API_KEY: str = ""
    GEMINI_API_KEY: str = ""

    # Self-hosted endpoint
    OLLAMA_URL: str = "http://localhost:11434"

    LLM_MAX_TOKENS: int = 2048  # Max tokens for Claude responses
    LLM_REQUEST_TIMEOUT: float | None = None  # Seconds, for the self-hosted HTTP call; None = no timeout

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()

# Single place to bump a provider's default model.
DEFAULT_MODELS: dict[ProviderName, str] = {
    ProviderName.OPENAI: "gpt-4o",
    ProviderName.CLAUDE: "claude-sonnet-4-20250514",
    ProviderName.GEMINI: "gemini-2.5-flash",
    ProviderName.OLLAMA: "llama2",
}
