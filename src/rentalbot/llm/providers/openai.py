"""OpenAI chat completions, also used for OpenAI-compatible hosts such as Groq."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import openai
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletion

from ..base import LLMProvider
from ..errors import LLMAuthenticationError, LLMConnectionError, LLMError, LLMRateLimitError
from ..models import ChatMessage, LLMResponse


def translate_openai_error(error: openai.APIError) -> LLMError:
    """Map an OpenAI SDK exception onto the provider-independent hierarchy."""
    status_code = getattr(error, "status_code", None)
    if isinstance(error, openai.RateLimitError):
        return LLMRateLimitError(str(error), status_code=status_code)
    if isinstance(error, openai.AuthenticationError):
        return LLMAuthenticationError(str(error), status_code=status_code)
    # APITimeoutError is a subclass of APIConnectionError
    if isinstance(error, openai.APIConnectionError):
        return LLMConnectionError(str(error))
    return LLMError(str(error), status_code=status_code)


@contextmanager
def _openai_errors() -> Iterator[None]:
    try:
        yield
    except openai.APIError as e:
        raise translate_openai_error(e) from e


def _to_response(completion: ChatCompletion) -> LLMResponse:
    usage = None
    if completion.usage:
        usage = {
            "prompt_tokens": completion.usage.prompt_tokens,
            "completion_tokens": completion.usage.completion_tokens,
            "total_tokens": completion.usage.total_tokens,
        }
    content = completion.choices[0].message.content if completion.choices else None
    return LLMResponse(content=content or "", model=completion.model, usage=usage)


class OpenAIProvider(LLMProvider):
    """Chat completions through ``AsyncOpenAI``.

    Hidden design decisions:
    - Endpoint and credentials of the OpenAI-compatible host
    - Request shape (non-streaming, optional token cap)
    - Error translation
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """
        Args:
            api_key: Key for the host at ``base_url``
            model: Model used when a call does not name one
            base_url: API root (None means api.openai.com)
            organization: Optional OpenAI organization ID
            **client_kwargs: Passed to ``AsyncOpenAI`` (timeouts, retries)
        """
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

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
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [msg.model_dump() for msg in messages],
            "temperature": temperature,
            "stream": False,
            **kwargs
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        with _openai_errors():
            completion = await self._client.chat.completions.create(**params)
        return _to_response(completion)

    async def close(self) -> None:
        await self._client.close()
