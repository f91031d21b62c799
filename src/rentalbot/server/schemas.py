"""Request and response bodies of the chatbot endpoints."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..llm.models import ChatMessage


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str | None = None
    conversation_history: list[ChatMessage] = Field(default_factory=list, alias="conversationHistory")

    @field_validator("conversation_history")
    @classmethod
    def reject_system_messages(cls, history: list[ChatMessage]) -> list[ChatMessage]:
        if any(msg.role == "system" for msg in history):
            raise ValueError("conversationHistory may only contain 'user' and 'assistant' messages")
        return history


class ChatSuccess(BaseModel):
    success: bool = True
    response: str
    usage: dict[str, int] | None = None


class ChatFailure(BaseModel):
    success: bool = False
    message: str
    fallback: str | None = None


class HealthResponse(BaseModel):
    success: bool
    message: str
    model: str | None = None
    error: str | None = None
