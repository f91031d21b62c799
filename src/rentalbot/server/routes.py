import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .schemas import ChatFailure, ChatRequest, ChatSuccess, HealthResponse
from .service import UNEXPECTED, ChatbotService, classify_failure

router = APIRouter(prefix="/api/chatbot", tags=["chatbot"])
logger = logging.getLogger(__name__)


def get_chatbot_service(request: Request) -> ChatbotService:
    return request.app.state.chatbot_service


def _failure_response(status_code: int, body: ChatFailure | HealthResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/message",
    response_model=ChatSuccess,
    response_model_exclude_none=True,
    responses={400: {"model": ChatFailure}, 429: {"model": ChatFailure},
               500: {"model": ChatFailure}, 503: {"model": ChatFailure}},
)
async def chat_completion(
    body: ChatRequest,
    service: ChatbotService = Depends(get_chatbot_service),
):
    """Send a message to the chatbot."""
    if not body.message or not body.message.strip():
        return _failure_response(400, ChatFailure(message="Message is required"))

    try:
        response = await service.reply(body.message, body.conversation_history)
    except Exception as e:
        failure = classify_failure(e)
        if failure is UNEXPECTED:
            logger.exception("Chat completion failed")
        else:
            logger.warning("Chat completion failed with HTTP %s: %s", failure.status_code, e)
        return _failure_response(
            failure.status_code,
            ChatFailure(message=failure.message, fallback=failure.fallback),
        )

    return ChatSuccess(response=response.content, usage=response.usage)


@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={500: {"model": HealthResponse}},
)
async def health_check(service: ChatbotService = Depends(get_chatbot_service)):
    """Check that the hosted model answers."""
    try:
        await service.probe()
    except Exception as e:
        logger.warning("Health probe failed: %s", e)
        return _failure_response(
            500,
            HealthResponse(success=False, message="Chatbot service unavailable", error=str(e)),
        )
    return HealthResponse(success=True, message="Chatbot service is running", model=service.model)
