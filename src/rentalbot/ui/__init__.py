"""Terminal UI module for rentalbot.

Provides a Textual-based chat window for the car rental assistant.

Module structure (each module hides a design decision):
- widgets.py: Message bubbles, scrolling history, quick-action buttons
- styles.py: CSS styling (layout decisions)
- app.py: Wiring between widgets and the chat orchestrator
"""

from .app import RentalChatApp, run_chat_tui
from .widgets import ChatHistoryWidget, MessageBubble, QuickActionBar

__all__ = [
    "ChatHistoryWidget",
    "MessageBubble",
    "QuickActionBar",
    "RentalChatApp",
    "run_chat_tui",
]
