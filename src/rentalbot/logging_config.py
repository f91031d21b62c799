"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; this module decides
where the records go. Console output is rendered by Rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "openai", "anthropic")


def configure_logging(level: str | int = "INFO", console: Console | None = None) -> None:
    """Route all package logging to a Rich console handler.

    Safe to call more than once; the previous handler is replaced.

    Args:
        level: Root level name ("DEBUG", "INFO", ...) or numeric level
        console: Console to write to (default: stderr)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level if isinstance(level, int) else level.upper())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
