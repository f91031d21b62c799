"""CSS styles for the chat TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $accent;
    margin-left: 8;
}

.bot-message {
    border-left: thick $primary;
    margin-right: 8;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
}

#quick-actions {
    height: auto;
    padding: 0 1;

    Button {
        margin: 0 1 0 0;
        min-width: 10;
    }

    &.-hidden {
        display: none;
    }
}

#status-line {
    height: 1;
    padding: 0 1;
    color: $text-muted;
}

#input-bar {
    height: auto;
    padding: 0 1;

    Input {
        width: 1fr;
    }

    Button {
        margin-left: 1;
    }
}
"""
