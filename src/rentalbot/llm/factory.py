from typing import Any

from .base import LLMProvider
from .providers import AnthropicProvider, GroqProvider, OpenAIProvider

_PROVIDERS: dict[str, type[LLMProvider]] = {
    "groq": GroqProvider,
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "claude": AnthropicProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Build the provider named by ``LLM_PROVIDER``.

    Args:
        provider: 'groq', 'openai' or 'anthropic' ('claude' is an alias),
            case-insensitive
        **config: Constructor arguments. Every provider needs ``api_key``;
            ``model`` and ``base_url`` are optional

    Raises:
        ValueError: Unknown provider name
        TypeError: ``api_key`` missing or empty

    Example:
        >>> llm = create_llm_provider("groq", api_key="gsk_...", model="llama-3.3-70b-versatile")
    """
    provider_class = _PROVIDERS.get(provider.lower())
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: 'groq', 'openai', 'anthropic'"
        )

    if not config.get("api_key"):
        raise TypeError(f"{provider_class.__name__} requires 'api_key' in config")

    return provider_class(**config)
