from .base import LLMProvider
from .errors import LLMAuthenticationError, LLMConnectionError, LLMError, LLMRateLimitError
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import AnthropicProvider, GroqProvider, OpenAIProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthenticationError",
    "LLMConnectionError",
    "AnthropicProvider",
    "GroqProvider",
    "OpenAIProvider",
]
