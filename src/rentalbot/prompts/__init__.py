"""System prompt for the chatbot backend.

The prompt (platform knowledge, topic scoping and the off-topic refusal)
ships as ``system.txt`` beside this module. A deployment can replace it by
placing ``./prompts/system.txt`` in the working directory.
"""

from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

_PACKAGE_DIR = Path(__file__).parent

OFF_TOPIC_REFUSAL = (
    "I'm specifically designed to assist with car rentals and automotive questions. "
    "For other topics, please use a general-purpose assistant or contact our "
    "customer support at info@example.com"
)


def _candidates(name: str) -> Iterator[Path]:
    # Working directory first so deployments can override the packaged text
    yield Path.cwd() / "prompts" / f"{name}.txt"
    yield _PACKAGE_DIR / f"{name}.txt"


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Read prompt ``name`` from the first location that has it.

    Raises:
        FileNotFoundError: If no candidate file exists
    """
    searched = []
    for path in _candidates(name):
        if path.is_file():
            return path.read_text(encoding="utf-8")
        searched.append(str(path))
    raise FileNotFoundError(f"Prompt '{name}' not found in: {', '.join(searched)}")


def get_system_prompt() -> str:
    return load_prompt("system")


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "OFF_TOPIC_REFUSAL",
    "clear_cache",
    "get_system_prompt",
    "load_prompt",
]
