"""Chatbot backend: forwards user messages to a hosted LLM."""

from .app import create_app
from .service import ChatbotService, ProxyFailure, classify_failure

__all__ = ["ChatbotService", "ProxyFailure", "classify_failure", "create_app"]
