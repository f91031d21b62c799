"""FastAPI application for the chatbot backend."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..config import Settings, load_settings
from ..llm import LLMProvider, create_llm_provider
from ..prompts import get_system_prompt
from .routes import router
from .service import ChatbotService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, provider: LLMProvider | None = None) -> FastAPI:
    """Build the chatbot backend.

    Args:
        settings: Runtime settings (default: read from the environment)
        provider: LLM provider to use instead of building one from settings.
            An injected provider is not closed on shutdown.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = provider is None
        llm = provider or create_llm_provider(
            settings.llm_provider,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
        )
        app.state.chatbot_service = ChatbotService(
            llm,
            system_prompt=get_system_prompt(),
            history_limit=settings.history_limit,
            temperature=settings.temperature,
            max_tokens=settings.max_tokens,
        )
        logger.info("Chatbot backend ready (provider=%s, model=%s)", settings.llm_provider, llm.model)
        try:
            yield
        finally:
            if owned:
                await llm.close()

    app = FastAPI(title="rentalbot chatbot", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    return app
