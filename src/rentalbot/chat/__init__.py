"""Quick-action chat orchestration.

Module structure (each module hides a design decision):
- models.py: Message, state and quick-action types
- conversation.py: The observable conversation log
- formatters.py: How fetched records read as chat text
- actions.py: Which backend query answers which quick action
- orchestrator.py: Session state machine and failure handling
"""

from .actions import ActionResolver, FetchAction, StaticReply
from .conversation import ChangeKind, ConversationError, ConversationLog, LogChange
from .models import QUICK_ACTIONS, ActionId, ChatState, MessageEntry, QuickAction, Sender, find_quick_action
from .orchestrator import ChatOrchestrator

__all__ = [
    "QUICK_ACTIONS",
    "ActionId",
    "ActionResolver",
    "ChangeKind",
    "ChatOrchestrator",
    "ChatState",
    "ConversationError",
    "ConversationLog",
    "FetchAction",
    "LogChange",
    "MessageEntry",
    "QuickAction",
    "Sender",
    "StaticReply",
    "find_quick_action",
]
