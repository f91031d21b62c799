"""Custom Textual widgets for the chat TUI.

Hides widget implementation details:
- Chat message rendering and scroll-follow
- Quick-action button layout and enablement
"""

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Static

from ..chat.models import QUICK_ACTIONS, MessageEntry, QuickAction, Sender


class MessageBubble(Vertical):
    """A single conversation entry."""

    def __init__(self, entry: MessageEntry) -> None:
        sender_class = "user-message" if entry.sender is Sender.USER else "bot-message"
        super().__init__(classes=f"chat-message {sender_class}")
        self.entry = entry
        # Markup off: prices and apology texts may contain brackets
        self._content = Static(entry.text, classes="message-content", markup=False)

    def compose(self):
        yield Static("You" if self.entry.sender is Sender.USER else "Assistant", classes="message-header")
        yield self._content

    def show(self, entry: MessageEntry) -> None:
        """Display a replacement entry in place."""
        self.entry = entry
        self._content.update(entry.text)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable conversation view that follows the newest entry."""

    BORDER_TITLE = "Car Rental Assistant"

    def add_entry(self, entry: MessageEntry) -> None:
        self.mount(MessageBubble(entry))
        self._after_change()

    def replace_last(self, entry: MessageEntry) -> None:
        bubbles = self.query(MessageBubble)
        if bubbles:
            bubbles.last().show(entry)
        else:
            self.mount(MessageBubble(entry))
        self._after_change()

    def _after_change(self) -> None:
        self.border_subtitle = f"{len(self.query(MessageBubble))} messages"
        self.call_after_refresh(self.scroll_end, animate=False)


class QuickActionBar(Horizontal):
    """Row of quick-action buttons."""

    class Selected(Message):
        """Posted when the user picks a quick action."""

        def __init__(self, action: QuickAction) -> None:
            super().__init__()
            self.action = action

    def compose(self):
        for action in QUICK_ACTIONS:
            yield Button(action.label, id=f"action-{action.action_id.value}", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        for action in QUICK_ACTIONS:
            if event.button.id == f"action-{action.action_id.value}":
                self.post_message(self.Selected(action))
                return

    def set_enabled(self, enabled: bool) -> None:
        for button in self.query(Button):
            button.disabled = not enabled
