"""Main Textual TUI application.

Renders the orchestrator's conversation log and forwards user input to it.
Widgets only react to log and state changes; they never edit the log.
"""

import asyncio
from collections.abc import Callable

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Button, Footer, Header, Input, Static

from ..chat import ActionResolver, ChangeKind, ChatOrchestrator, ChatState, LogChange, QuickAction
from ..client import RentalApiClient
from ..config import Settings
from .styles import APP_CSS
from .widgets import ChatHistoryWidget, QuickActionBar


class RentalChatApp(App):
    """Textual TUI for the car rental assistant."""

    CSS = APP_CSS
    TITLE = "Car Rental Assistant"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, orchestrator: ChatOrchestrator, subtitle: str = "") -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._unsubscribers: list[Callable[[], None]] = []
        self.sub_title = subtitle

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield QuickActionBar(id="quick-actions")
        yield Static("", id="status-line")
        with Horizontal(id="input-bar"):
            yield Input(placeholder="Type your message...", id="chat-input")
            yield Button("Send", id="send-btn", variant="success")
        yield Footer()

    def on_mount(self) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        for entry in self._orchestrator.log:
            chat.add_entry(entry)
        self._unsubscribers = [
            self._orchestrator.log.subscribe(self._on_log_change),
            self._orchestrator.on_state_change(self._on_state_change),
        ]
        self._refresh_controls()
        self.query_one("#chat-input", Input).focus()

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_log_change(self, change: LogChange) -> None:
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        if change.kind is ChangeKind.REPLACED:
            chat.replace_last(change.entry)
        else:
            chat.add_entry(change.entry)
        self._refresh_controls()

    def _on_state_change(self, state: ChatState) -> None:
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        busy = self._orchestrator.is_busy
        last = self._orchestrator.log.last
        actions = self.query_one("#quick-actions", QuickActionBar)
        actions.set_class(last is None or not last.show_options, "-hidden")
        actions.set_enabled(not busy)
        self.query_one("#chat-input", Input).disabled = busy
        self.query_one("#send-btn", Button).disabled = busy
        self.query_one("#status-line", Static).update("Typing..." if busy else "")

    def on_quick_action_bar_selected(self, event: QuickActionBar.Selected) -> None:
        self._run_action(event.action)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._send_input()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            self._send_input()

    def _send_input(self) -> None:
        field = self.query_one("#chat-input", Input)
        text = field.value
        if self._orchestrator.is_busy or not text.strip():
            return
        field.value = ""
        self._send(text)

    @work(group="chat")
    async def _run_action(self, action: QuickAction) -> None:
        await self._orchestrator.select_action(action)

    @work(group="chat")
    async def _send(self, text: str) -> None:
        if not await self._orchestrator.send(text):
            # Another request won the race; give the text back
            self.query_one("#chat-input", Input).value = text


async def run_chat_tui(settings: Settings) -> None:
    """Run the chat TUI against the rental platform configured in ``settings``."""
    client = RentalApiClient(
        settings.rental_api_url,
        token=settings.rental_api_token,
        timeout=settings.http_timeout,
    )
    orchestrator = ChatOrchestrator(
        ActionResolver(client),
        client,
        history_limit=settings.history_limit,
    )
    app = RentalChatApp(orchestrator, subtitle=settings.rental_api_url)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await client.close()
