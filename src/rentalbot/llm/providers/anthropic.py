"""Claude through the Anthropic Messages API."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import anthropic
from anthropic import AsyncAnthropic
from anthropic.types import Message

from ..base import LLMProvider
from ..errors import LLMAuthenticationError, LLMConnectionError, LLMError, LLMRateLimitError
from ..models import ChatMessage, LLMResponse

# The Messages API rejects requests without a token cap
DEFAULT_MAX_TOKENS = 1024


def translate_anthropic_error(error: anthropic.APIError) -> LLMError:
    """Map an Anthropic SDK exception onto the provider-independent hierarchy."""
    status_code = getattr(error, "status_code", None)
    if isinstance(error, anthropic.RateLimitError):
        return LLMRateLimitError(str(error), status_code=status_code)
    if isinstance(error, anthropic.AuthenticationError):
        return LLMAuthenticationError(str(error), status_code=status_code)
    if isinstance(error, anthropic.APIConnectionError):
        return LLMConnectionError(str(error))
    return LLMError(str(error), status_code=status_code)


@contextmanager
def _anthropic_errors() -> Iterator[None]:
    try:
        yield
    except anthropic.APIError as e:
        raise translate_anthropic_error(e) from e


def _to_response(message: Message) -> LLMResponse:
    usage = None
    if message.usage:
        usage = {
            "prompt_tokens": message.usage.input_tokens,
            "completion_tokens": message.usage.output_tokens,
            "total_tokens": message.usage.input_tokens + message.usage.output_tokens,
        }
    text = "".join(block.text for block in message.content if block.type == "text")
    return LLMResponse(content=text, model=message.model, usage=usage)


class AnthropicProvider(LLMProvider):
    """Hidden design decisions:
    - Where system instructions go (a separate ``system`` parameter)
    - The mandatory token cap
    - Error translation
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        base_url: str | None = None,
        **client_kwargs: Any
    ):
        self._model = model
        self._client = AsyncAnthropic(api_key=api_key, base_url=base_url, **client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        system = "\n\n".join(msg.content for msg in messages if msg.role == "system")
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [msg.model_dump() for msg in messages if msg.role != "system"],
            "temperature": temperature,
            "max_tokens": max_tokens or DEFAULT_MAX_TOKENS,
            **kwargs
        }
        if system:
            params["system"] = system

        with _anthropic_errors():
            message = await self._client.messages.create(**params)
        return _to_response(message)

    async def close(self) -> None:
        await self._client.close()
