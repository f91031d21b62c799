"""Tests for the command-line interface."""
from typer.testing import CliRunner

from rentalbot.chat import ActionResolver, ChatOrchestrator
from rentalbot.cli.app import app
from rentalbot.cli.providers import get_client, get_orchestrator
from rentalbot.config import Settings

runner = CliRunner()


class TestCommands:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("serve", "chat", "ask", "health"):
            assert command in result.output

    def test_ask_rejects_unknown_action(self):
        result = runner.invoke(app, ["ask", "teleport"])
        assert result.exit_code != 0

    def test_serve_requires_api_key(self, monkeypatch):
        for name in ("LLM_PROVIDER", "GROQ_API_KEY"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("rentalbot.config.load_dotenv", lambda: None)

        result = runner.invoke(app, ["serve"])

        assert result.exit_code == 1
        assert "no API key" in result.output


class TestFactories:
    def test_orchestrator_uses_settings(self):
        settings = Settings(rental_api_url="http://rental.test", history_limit=4)
        client = get_client(settings)
        orchestrator = get_orchestrator(client, settings, instant=True)

        assert isinstance(orchestrator, ChatOrchestrator)
        assert orchestrator._history_limit == 4
        assert isinstance(orchestrator._resolver, ActionResolver)
        assert orchestrator._resolver._help_delay == 0.0
