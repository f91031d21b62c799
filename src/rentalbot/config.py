"""Runtime configuration.

All settings come from environment variables (optionally loaded from a
``.env`` file). Hides where configuration lives from the rest of the package.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MODELS = {
    "groq": "llama-3.3-70b-versatile",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-sonnet-4-20250514",
}


class Settings(BaseModel):
    """Settings shared by the chatbot backend, the chat client and the CLI."""

    model_config = ConfigDict(frozen=True)

    rental_api_url: str = Field(default="http://localhost:3000", description="Base URL of the rental platform API")
    rental_api_token: str | None = Field(default=None, description="Value sent in the Authorization header")
    http_timeout: float = Field(default=30.0, gt=0)

    llm_provider: str = Field(default="groq", description="groq, openai or anthropic")
    llm_api_key: str | None = Field(default=None, repr=False)
    llm_model: str = DEFAULT_MODELS["groq"]
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=800, gt=0)
    history_limit: int = Field(default=10, ge=0)

    server_host: str = "0.0.0.0"
    server_port: int = 5000
    log_level: str = "INFO"


def _api_key_for(provider: str) -> str | None:
    env_names = {
        "groq": "GROQ_API_KEY",
        "openai": "OPENAI_API_KEY",
        "anthropic": "ANTHROPIC_API_KEY",
        "claude": "ANTHROPIC_API_KEY",
    }
    env_name = env_names.get(provider)
    return os.getenv(env_name) if env_name else None


def _model_for(provider: str) -> str:
    env_names = {
        "groq": "GROQ_MODEL",
        "openai": "OPENAI_CHAT_MODEL",
        "anthropic": "ANTHROPIC_MODEL",
        "claude": "ANTHROPIC_MODEL",
    }
    default = DEFAULT_MODELS.get("anthropic" if provider == "claude" else provider, DEFAULT_MODELS["groq"])
    env_name = env_names.get(provider)
    return os.getenv(env_name, default) if env_name else default


def load_settings(load_env_file: bool = True) -> Settings:
    """Build settings from environment variables.

    Environment variables:
        RENTAL_API_URL: Rental platform base URL (default: http://localhost:3000)
        RENTAL_API_TOKEN: Token forwarded in the Authorization header
        HTTP_TIMEOUT: Timeout in seconds for platform requests (default: 30)
        LLM_PROVIDER: groq, openai or anthropic (default: groq)
        GROQ_API_KEY / OPENAI_API_KEY / ANTHROPIC_API_KEY: Provider API key
        GROQ_MODEL / OPENAI_CHAT_MODEL / ANTHROPIC_MODEL: Provider model
        CHATBOT_TEMPERATURE: Sampling temperature (default: 0.7)
        CHATBOT_MAX_TOKENS: Completion token cap (default: 800)
        CHATBOT_HISTORY_LIMIT: History messages forwarded to the model (default: 10)
        SERVER_HOST / SERVER_PORT: Chatbot backend bind address (default: 0.0.0.0:5000)
        LOG_LEVEL: Logging level (default: INFO)

    Raises:
        pydantic.ValidationError: If a value is out of range or not a number
    """
    if load_env_file:
        load_dotenv()

    provider = os.getenv("LLM_PROVIDER", "groq").lower()

    return Settings(
        rental_api_url=os.getenv("RENTAL_API_URL", "http://localhost:3000"),
        rental_api_token=os.getenv("RENTAL_API_TOKEN") or None,
        http_timeout=os.getenv("HTTP_TIMEOUT", "30"),
        llm_provider=provider,
        llm_api_key=_api_key_for(provider),
        llm_model=_model_for(provider),
        temperature=os.getenv("CHATBOT_TEMPERATURE", "0.7"),
        max_tokens=os.getenv("CHATBOT_MAX_TOKENS", "800"),
        history_limit=os.getenv("CHATBOT_HISTORY_LIMIT", "10"),
        server_host=os.getenv("SERVER_HOST", "0.0.0.0"),
        server_port=os.getenv("SERVER_PORT", "5000"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
