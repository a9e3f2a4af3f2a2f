from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from finalizable.config import get_settings
from finalizable.logging_utils import disable_logging


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in ("FINALIZABLE_LOG_LEVEL", "FINALIZABLE_LOG_PROFILE", "FINALIZABLE_LOG_DIAGNOSE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    disable_logging()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    logger.enable("finalizable")
    yield messages
    logger.remove(handler_id)
    logger.disable("finalizable")
