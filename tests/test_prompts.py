"""Tests for prompt loading."""
import pytest

from rentalbot.prompts import OFF_TOPIC_REFUSAL, clear_cache, get_system_prompt, load_prompt


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_cache()
    yield
    clear_cache()


class TestSystemPrompt:
    def test_packaged_prompt(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        prompt = get_system_prompt()
        assert prompt.startswith("You are an expert car rental assistant")
        assert "PLATFORM FEATURES" in prompt

    def test_contains_refusal_template(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert OFF_TOPIC_REFUSAL in get_system_prompt()

    def test_local_override(self, tmp_path, monkeypatch):
        """Test that ./prompts/system.txt in the working directory wins."""
        (tmp_path / "prompts").mkdir()
        (tmp_path / "prompts" / "system.txt").write_text("Only talk about vans.", encoding="utf-8")
        monkeypatch.chdir(tmp_path)

        assert get_system_prompt() == "Only talk about vans."

    def test_missing_prompt(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(FileNotFoundError, match="not_a_prompt"):
            load_prompt("not_a_prompt")
