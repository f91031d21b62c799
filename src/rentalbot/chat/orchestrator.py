"""Chat orchestration.

Drives one chat session: accepts quick-action selections and free-text
submissions, runs the matching backend work, and records every outcome in
the conversation log.

The orchestrator is the only writer of the log and the input buffer. It has
two states. ``IDLE`` accepts input; ``AWAITING_RESPONSE`` rejects it. The
state check happens before the first ``await`` of each handler, so on a
single event loop a second handler can never start while one is pending.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from ..client.errors import ApiStatusError, RentalApiError
from ..client.models import ChatbotReply
from ..llm.models import ChatMessage
from .actions import ActionResolver, FetchAction
from .config import HISTORY_LIMIT
from .conversation import ConversationLog
from .models import ChatState, QuickAction, Sender

logger = logging.getLogger(__name__)

RATE_LIMITED_REPLY = (
    "⚠️ Too many requests. Please wait a moment and try again.\n\n"
    "You can use the quick action buttons below for instant answers!"
)
UNAVAILABLE_REPLY = (
    "🔌 Connection issue. Please check your internet and try again.\n\n"
    "You can still use the quick action buttons!"
)
UNREACHABLE_REPLY = (
    "⚠️ I'm having trouble connecting right now.\n\n"
    "Please use the quick action buttons below:\n"
    "• Browse Cars\n"
    "• Check Availability\n"
    "• My Bookings\n"
    "• Help & Support"
)
GENERIC_APOLOGY = "Sorry, something went wrong. Please try again or use the quick action buttons."

# Local copy shown for chatbot backend failures, keyed by HTTP status
_STATUS_REPLIES = {
    429: RATE_LIMITED_REPLY,
    503: UNAVAILABLE_REPLY,
}

StateListener = Callable[[ChatState], None]


class ChatbotBackend(Protocol):
    """The slice of ``RentalApiClient`` used for free-text messages."""

    async def send_chat_message(self, message: str, history: Sequence[ChatMessage] = ()) -> ChatbotReply: ...


class ChatOrchestrator:
    """State machine for a single chat session."""

    def __init__(
        self,
        resolver: ActionResolver,
        backend: ChatbotBackend,
        log: ConversationLog | None = None,
        history_limit: int = HISTORY_LIMIT,
    ) -> None:
        self._resolver = resolver
        self._backend = backend
        self._log = log if log is not None else ConversationLog.with_greeting()
        self._history_limit = history_limit
        self._state = ChatState.IDLE
        self._input_text = ""
        self._state_listeners: list[StateListener] = []

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def state(self) -> ChatState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state is ChatState.AWAITING_RESPONSE

    @property
    def input_text(self) -> str:
        return self._input_text

    def set_input(self, text: str) -> None:
        """Update the input buffer (typing does not require ``IDLE``)."""
        self._input_text = text

    def on_state_change(self, listener: StateListener) -> Callable[[], None]:
        """Register a state listener.

        Returns:
            A callable that removes the listener
        """
        self._state_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._state_listeners:
                self._state_listeners.remove(listener)

        return unsubscribe

    async def select_action(self, action: QuickAction) -> bool:
        """Handle a quick-action button.

        Returns:
            False if the action was rejected because a response is pending
        """
        if self.is_busy:
            logger.debug("Ignoring %s while awaiting a response", action.action_id.value)
            return False

        resolved = self._resolver.resolve(action)
        self._log.append(action.label, Sender.USER)
        self._set_state(ChatState.AWAITING_RESPONSE)
        try:
            if isinstance(resolved, FetchAction):
                self._log.append(resolved.loading_text, Sender.BOT, show_options=False)
                text = await self._guarded(resolved.run, GENERIC_APOLOGY)
                self._log.replace_last(text, show_options=True)
            else:
                await asyncio.sleep(resolved.delay)
                self._log.append(resolved.text, Sender.BOT, show_options=True)
        finally:
            self._set_state(ChatState.IDLE)
        return True

    async def submit(self) -> bool:
        """Send the input buffer to the chatbot backend.

        Whitespace-only input is ignored and leaves the buffer untouched.

        Returns:
            False if nothing was sent
        """
        text = self._input_text
        if self.is_busy or not text.strip():
            return False

        history = self._log.history(self._history_limit)
        self._log.append(text, Sender.USER)
        self._input_text = ""
        self._set_state(ChatState.AWAITING_RESPONSE)
        try:
            reply = await self._guarded(lambda: self._ask_backend(text.strip(), history), UNREACHABLE_REPLY)
            self._log.append(reply, Sender.BOT, show_options=True)
        finally:
            self._set_state(ChatState.IDLE)
        return True

    async def send(self, text: str) -> bool:
        """Convenience for ``set_input`` followed by ``submit``."""
        if self.is_busy:
            return False
        self.set_input(text)
        return await self.submit()

    async def _ask_backend(self, message: str, history: list[ChatMessage]) -> str:
        try:
            reply = await self._backend.send_chat_message(message, history)
        except ApiStatusError as e:
            logger.warning("Chatbot backend answered HTTP %s", e.status_code)
            return _STATUS_REPLIES.get(e.status_code, UNREACHABLE_REPLY)
        except RentalApiError as e:
            logger.warning("Chatbot backend unreachable: %s", e)
            return UNREACHABLE_REPLY
        return reply.display_text()

    async def _guarded(self, work: Callable[[], Awaitable[str]], fallback: str) -> str:
        try:
            return await work()
        except Exception:
            logger.exception("Unexpected failure while preparing a reply")
            return fallback

    def _set_state(self, state: ChatState) -> None:
        if state is self._state:
            return
        self._state = state
        for listener in list(self._state_listeners):
            listener(state)
