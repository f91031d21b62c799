"""Main CLI application using Typer."""
import asyncio

import typer
from rich.console import Console
from rich.panel import Panel

from ..chat import ActionId, find_quick_action
from ..client import ApiStatusError, RentalApiError
from .providers import get_client, get_orchestrator, get_settings, require_llm_key

app = typer.Typer(
    name="rentalbot",
    help="Car rental chat assistant: chatbot backend and terminal client",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default: SERVER_HOST)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default: SERVER_PORT)"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="debug, info, warning or error"),
):
    """Run the chatbot backend (POST /api/chatbot/message, GET /api/chatbot/health)."""
    import uvicorn

    from ..server import create_app

    settings = get_settings(console, log_level)
    require_llm_key(settings, console)

    bind_host = host or settings.server_host
    bind_port = port or settings.server_port
    console.print(
        f"[dim]Serving chatbot on {bind_host}:{bind_port} "
        f"with {settings.llm_provider} ({settings.llm_model})[/dim]"
    )
    uvicorn.run(
        create_app(settings),
        host=bind_host,
        port=bind_port,
        log_config=None,
    )


@app.command()
def chat(
    api_url: str | None = typer.Option(None, "--api-url", "-u", help="Rental platform URL (default: RENTAL_API_URL)"),
    log_level: str | None = typer.Option("warning", "--log-level", "-l", help="debug, info, warning or error"),
):
    """Open the interactive chat window."""
    from ..ui import run_chat_tui

    settings = get_settings(console, log_level)
    if api_url:
        settings = settings.model_copy(update={"rental_api_url": api_url})
    asyncio.run(run_chat_tui(settings))


@app.command()
def ask(
    action: ActionId = typer.Argument(..., help="Quick action to run"),
    api_url: str | None = typer.Option(None, "--api-url", "-u", help="Rental platform URL (default: RENTAL_API_URL)"),
):
    """Run a single quick action and print the assistant's answer."""
    async def _ask():
        settings = get_settings(console, "warning")
        client = get_client(settings, api_url)
        try:
            orchestrator = get_orchestrator(client, settings, instant=True)
            quick_action = find_quick_action(action)
            await orchestrator.select_action(quick_action)
            reply = orchestrator.log.last
            console.print(Panel(reply.text if reply else "", title=quick_action.label, border_style="cyan"))
        finally:
            await client.close()

    asyncio.run(_ask())


@app.command()
def health(
    api_url: str | None = typer.Option(None, "--api-url", "-u", help="Chatbot backend URL (default: RENTAL_API_URL)"),
):
    """Probe the chatbot backend's health endpoint."""
    async def _health():
        settings = get_settings(console, "warning")
        client = get_client(settings, api_url)
        try:
            status = await client.chatbot_health()
            console.print(f"[green]{status.message}[/green] [dim]model: {status.model}[/dim]")
        except ApiStatusError as e:
            detail = e.payload.get("error") if isinstance(e.payload, dict) else None
            console.print(f"[red]Chatbot unavailable (HTTP {e.status_code})[/red]")
            if detail:
                console.print(f"[dim]{detail}[/dim]")
            raise typer.Exit(code=1)
        except RentalApiError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await client.close()

    asyncio.run(_health())


if __name__ == "__main__":
    app()
