"""Observable conversation log.

The log is an ordered, append-only sequence of ``MessageEntry``. The single
permitted mutation is ``replace_last``, which swaps the most recent bot entry
(used to resolve a "loading" placeholder). Presentation layers subscribe to
changes instead of inspecting the list.
"""

import itertools
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

from ..llm.models import ChatMessage
from .config import GREETING, HISTORY_LIMIT
from .models import MessageEntry, Sender


class ConversationError(Exception):
    """An operation would break the log's ordering or mutation rules."""


class ChangeKind(str, Enum):
    APPENDED = "appended"
    REPLACED = "replaced"


@dataclass(frozen=True)
class LogChange:
    kind: ChangeKind
    entry: MessageEntry


LogListener = Callable[[LogChange], None]


class ConversationLog:
    """In-memory conversation log for one chat session."""

    def __init__(self) -> None:
        self._entries: list[MessageEntry] = []
        self._ids = itertools.count(1)
        self._listeners: list[LogListener] = []

    @classmethod
    def with_greeting(cls, greeting: str = GREETING) -> "ConversationLog":
        """Create a log opened by the bot's welcome message."""
        log = cls()
        log.append(greeting, Sender.BOT, show_options=True)
        return log

    @property
    def entries(self) -> tuple[MessageEntry, ...]:
        return tuple(self._entries)

    @property
    def last(self) -> MessageEntry | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MessageEntry]:
        return iter(tuple(self._entries))

    def subscribe(self, listener: LogListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def append(self, text: str, sender: Sender, show_options: bool = False) -> MessageEntry:
        """Add an entry at the end of the log."""
        entry = MessageEntry(id=next(self._ids), text=text, sender=sender, show_options=show_options)
        self._entries.append(entry)
        self._notify(LogChange(ChangeKind.APPENDED, entry))
        return entry

    def replace_last(self, text: str, show_options: bool = True) -> MessageEntry:
        """Replace the most recent entry, which must be a bot entry.

        The replacement gets a fresh id so ids stay strictly increasing.

        Raises:
            ConversationError: If the log is empty or the last entry is a user entry
        """
        if not self._entries:
            raise ConversationError("Cannot replace the last entry of an empty log")
        if self._entries[-1].sender is not Sender.BOT:
            raise ConversationError("Only a bot entry can be replaced")

        entry = MessageEntry(id=next(self._ids), text=text, sender=Sender.BOT, show_options=show_options)
        self._entries[-1] = entry
        self._notify(LogChange(ChangeKind.REPLACED, entry))
        return entry

    def history(self, limit: int = HISTORY_LIMIT) -> list[ChatMessage]:
        """Project the most recent entries into role-tagged chat messages.

        This is a read-only view; the log itself is never trimmed.
        """
        if limit <= 0:
            return []
        return [
            ChatMessage(
                role="user" if entry.sender is Sender.USER else "assistant",
                content=entry.text,
            )
            for entry in self._entries[-limit:]
        ]

    def _notify(self, change: LogChange) -> None:
        for listener in list(self._listeners):
            listener(change)
