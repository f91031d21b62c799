"""Provider-independent LLM errors.

Each provider translates its SDK's exceptions into this hierarchy so the
chatbot backend can map failures to HTTP responses without knowing which
SDK produced them.
"""


class LLMError(Exception):
    """Base class for failures while talking to a hosted model."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LLMRateLimitError(LLMError):
    """The provider rejected the request because of rate limiting."""


class LLMAuthenticationError(LLMError):
    """The provider rejected our credentials."""


class LLMConnectionError(LLMError):
    """The provider could not be reached (refused, reset or timed out)."""
