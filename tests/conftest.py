import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable, Dict, Generator, List

import pytest
from loguru import logger

from translation_patcher.models.config import (
    RetryConfig,
    TranslationConfig,
    get_translation_config,
    set_translation_config,
)


@pytest.fixture(autouse=True)
def restore_translation_config() -> Generator[None, None, None]:
    """Keep tests from leaking changes to the global configuration."""
    original = get_translation_config()
    yield
    set_translation_config(original)


@pytest.fixture
def log_messages() -> Generator[List[str], None, None]:
    """Collect loguru output as 'LEVEL: message' strings."""
    messages: List[str] = []
    handler_id = logger.add(
        lambda message: messages.append(
            f"{message.record['level'].name}: {message.record['message']}"
        ),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def fast_config() -> TranslationConfig:
    """Config with a single attempt per request so failures surface immediately."""
    return TranslationConfig(retry_config=RetryConfig(max_retries=1))


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


def make_completion(content: Any) -> SimpleNamespace:
    """Build an object shaped like an OpenAI chat completion response."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def echo_translation(prefix: str) -> Callable[..., Any]:
    """Fake chat.completions.create that prefixes every input line's text."""

    async def _create(**kwargs: Any) -> SimpleNamespace:
        user_prompt = kwargs["messages"][-1]["content"]
        result: Dict[str, str] = {}
        for line in user_prompt.splitlines():
            index, _, text = line.partition("] ")
            result[index.lstrip("[")] = f"{prefix}{text.strip(chr(34))}"
        return make_completion(json.dumps(result))

    return _create


@pytest.fixture
def completion_factory() -> Callable[[Any], SimpleNamespace]:
    return make_completion


@pytest.fixture
def echo_factory() -> Callable[[str], Callable[..., Any]]:
    return echo_translation
