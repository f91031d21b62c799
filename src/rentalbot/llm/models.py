from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """One conversation turn as sent to the model and over the chatbot API."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class LLMResponse(BaseModel):
    """A completed (non-streaming) model answer."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Assistant text, empty if the model produced none")
    model: str = Field(description="Model that actually answered")
    usage: dict[str, int] | None = Field(
        default=None,
        description="prompt_tokens, completion_tokens and total_tokens when reported"
    )
