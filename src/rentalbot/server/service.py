"""Chatbot backend logic, independent of the web framework.

Builds the prompt (system instruction, capped history, current message),
calls the configured LLM provider and classifies failures.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..llm.base import LLMProvider
from ..llm.errors import LLMAuthenticationError, LLMConnectionError, LLMRateLimitError
from ..llm.models import ChatMessage, LLMResponse

logger = logging.getLogger(__name__)

EMPTY_COMPLETION = "I'm sorry, I couldn't generate a response. Please try again."


@dataclass(frozen=True)
class ProxyFailure:
    """HTTP status and user-facing copy for one class of upstream failure."""

    status_code: int
    message: str
    fallback: str


RATE_LIMITED = ProxyFailure(
    429,
    "⚠️ Too many requests. Please wait a moment and try again.",
    "You can use the quick action buttons below for instant answers!",
)
UPSTREAM_AUTH_FAILED = ProxyFailure(
    500,
    "❌ Service temporarily unavailable. Please use the quick action buttons.",
    "Our team has been notified and will fix this soon.",
)
UPSTREAM_UNREACHABLE = ProxyFailure(
    503,
    "🔌 Connection issue. Please check your internet and try again.",
    "You can still use the quick action buttons for specific tasks!",
)
UNEXPECTED = ProxyFailure(
    500,
    "⚠️ Something went wrong. Please try again or use the quick action buttons.",
    "Browse Cars, Check Availability, or view Help & Support options below.",
)


def classify_failure(error: Exception) -> ProxyFailure:
    """Pick the response for an exception raised by the provider."""
    if isinstance(error, LLMRateLimitError):
        return RATE_LIMITED
    if isinstance(error, LLMAuthenticationError):
        return UPSTREAM_AUTH_FAILED
    if isinstance(error, LLMConnectionError):
        return UPSTREAM_UNREACHABLE
    return UNEXPECTED


class ChatbotService:
    """Relays one user message to the hosted model."""

    def __init__(
        self,
        provider: LLMProvider,
        system_prompt: str,
        history_limit: int = 10,
        temperature: float = 0.7,
        max_tokens: int = 800,
    ) -> None:
        self._provider = provider
        self._system_prompt = system_prompt
        self._history_limit = history_limit
        self._temperature = temperature
        self._max_tokens = max_tokens

    @property
    def model(self) -> str:
        return self._provider.model

    def build_messages(self, message: str, history: Sequence[ChatMessage]) -> list[ChatMessage]:
        """System prompt, then at most ``history_limit`` recent messages, then the new message."""
        recent = list(history)[-self._history_limit:] if self._history_limit > 0 else []
        return [
            ChatMessage(role="system", content=self._system_prompt),
            *recent,
            ChatMessage(role="user", content=message),
        ]

    async def reply(self, message: str, history: Sequence[ChatMessage] = ()) -> LLMResponse:
        """Ask the model for a reply.

        Raises:
            LLMError: Any provider failure, for ``classify_failure`` to map
        """
        response = await self._provider.chat_completion(
            self.build_messages(message, history),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        if not response.content.strip():
            logger.warning("Model %s returned an empty completion", response.model)
            return response.model_copy(update={"content": EMPTY_COMPLETION})
        return response

    async def probe(self) -> None:
        """Minimal completion used as a liveness check."""
        await self._provider.probe()
