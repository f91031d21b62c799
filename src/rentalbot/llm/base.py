from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse

PROBE_MESSAGE = ChatMessage(role="user", content="test")


class LLMProvider(ABC):
    """A hosted chat model behind a provider-independent interface.

    Hides which vendor answers the chatbot. Each implementation owns:
    - SDK client construction and the API key
    - Conversion of ``ChatMessage`` lists into the vendor's request shape
    - Translation of SDK exceptions into ``rentalbot.llm.errors``

    Providers hold an HTTP connection pool; release it with ``close()`` or
    by using the provider as an async context manager:
        async with create_llm_provider("groq", api_key=key) as llm:
            reply = await llm.chat_completion(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model used when a call does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Ask the model to continue a conversation.

        Args:
            messages: System, user and assistant turns in order
            model: Overrides ``self.model`` for this call
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Completion length cap (None leaves it to the provider)
            **kwargs: Passed through to the vendor SDK

        Raises:
            LLMRateLimitError: The provider is throttling us
            LLMAuthenticationError: The API key was rejected
            LLMConnectionError: The provider could not be reached
            LLMError: Any other provider failure
        """

    async def probe(self) -> LLMResponse:
        """Cheapest possible completion, used as a liveness check."""
        return await self.chat_completion([PROBE_MESSAGE], max_tokens=5)

    @abstractmethod
    async def close(self) -> None:
        """Release the SDK client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may race the loop shutdown: https://github.com/encode/httpx/issues/914
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
