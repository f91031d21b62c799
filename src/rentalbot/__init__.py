"""
rentalbot: chat assistant for a peer-to-peer car rental platform.

Quick actions answer deterministic questions (cars, availability, bookings,
pricing, support) from the platform's REST API; free text is relayed to a
hosted LLM through the chatbot backend.
"""

__version__ = "0.1.0"

from .chat import (
    QUICK_ACTIONS,
    ActionId,
    ActionResolver,
    ChatOrchestrator,
    ChatState,
    ConversationLog,
    MessageEntry,
    QuickAction,
    Sender,
)
from .client import RentalApiClient
from .config import Settings, load_settings

__all__ = [
    "QUICK_ACTIONS",
    "ActionId",
    "ActionResolver",
    "ChatOrchestrator",
    "ChatState",
    "ConversationLog",
    "MessageEntry",
    "QuickAction",
    "RentalApiClient",
    "Settings",
    "Sender",
    "load_settings",
]
