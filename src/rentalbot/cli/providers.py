"""Factory functions for CLI commands.

Centralizes creation of settings, API clients and chat sessions so the
commands stay free of configuration details.
"""

from pydantic import ValidationError
from rich.console import Console

from ..chat import ActionResolver, ChatOrchestrator
from ..client import RentalApiClient
from ..config import Settings, load_settings
from ..logging_config import configure_logging

_console = Console()


def get_settings(console: Console | None = None, log_level: str | None = None) -> Settings:
    """Load settings and configure logging.

    Raises:
        SystemExit: If an environment variable holds an invalid value
    """
    import typer

    con = console or _console
    try:
        settings = load_settings()
    except ValidationError as e:
        con.print(f"[red]Error: invalid configuration[/red]\n{e}")
        raise typer.Exit(code=1) from e

    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    configure_logging(settings.log_level)
    return settings


def require_llm_key(settings: Settings, console: Console | None = None) -> None:
    """Stop early when the selected provider has no API key.

    Raises:
        SystemExit: If the key is missing
    """
    import typer

    con = console or _console
    if not settings.llm_api_key:
        con.print(
            f"[red]Error: no API key configured for LLM provider '{settings.llm_provider}'[/red]"
        )
        raise typer.Exit(code=1)


def get_client(settings: Settings, api_url: str | None = None) -> RentalApiClient:
    return RentalApiClient(
        api_url or settings.rental_api_url,
        token=settings.rental_api_token,
        timeout=settings.http_timeout,
    )


def get_orchestrator(client: RentalApiClient, settings: Settings, instant: bool = False) -> ChatOrchestrator:
    """Build a chat session on top of ``client``.

    Args:
        instant: Skip the cosmetic reply delays (non-interactive use)
    """
    if instant:
        resolver = ActionResolver(client, help_delay=0.0, fallback_delay=0.0)
    else:
        resolver = ActionResolver(client)
    return ChatOrchestrator(resolver, client, history_limit=settings.history_limit)
