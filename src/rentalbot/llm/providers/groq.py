from typing import Any

from .openai import OpenAIProvider

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class GroqProvider(OpenAIProvider):
    """Groq provider using its OpenAI-compatible API.

    Hidden design decisions:
    - Groq endpoint location (served through the OpenAI SDK)
    - Default model selection
    """

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.3-70b-versatile",
        base_url: str = GROQ_BASE_URL,
        **client_kwargs: Any
    ):
        """Initialize Groq provider.

        Args:
            api_key: Groq API key
            model: Default model to use (default: llama-3.3-70b-versatile)
            base_url: Groq API base URL
            **client_kwargs: Additional kwargs for AsyncOpenAI client
        """
        super().__init__(api_key=api_key, model=model, base_url=base_url, **client_kwargs)
