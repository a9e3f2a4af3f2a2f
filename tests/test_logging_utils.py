from __future__ import annotations

import pytest
from loguru import logger

from finalizable import finalized, pipeline, working
from finalizable.errors import ConfigurationError
from finalizable.logging_utils import configure_logging, disable_logging


def _seal(value: int):
    return finalized(value)


def test_package_is_silent_by_default(capsys: pytest.CaptureFixture[str]) -> None:
    handler_id = logger.add(lambda message: print(message, end=""), level="DEBUG")
    try:
        pipeline(_seal).run(1)
    finally:
        logger.remove(handler_id)

    assert capsys.readouterr().out == ""


def test_configure_logging_enables_output(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    pipeline(_seal, name="audit").run(working(1))

    err = capsys.readouterr().err
    assert "pipeline.done pipeline=audit finalized=True finalized_by=_seal" in err


def test_configure_logging_replaces_its_own_sink() -> None:
    first = configure_logging("INFO")
    second = configure_logging("DEBUG")

    assert first != second
    with pytest.raises(ValueError):
        logger.remove(first)


def test_configure_logging_reads_settings(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("FINALIZABLE_LOG_LEVEL", "WARNING")
    configure_logging()
    pipeline(_seal).run(1)

    assert capsys.readouterr().err == ""


def test_rich_profile() -> None:
    handler_id = configure_logging("DEBUG", profile="rich")
    assert isinstance(handler_id, int)


def test_unknown_level_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="NOPE"):
        configure_logging("nope")


def test_unknown_profile_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        configure_logging("INFO", profile="json")  # type: ignore[arg-type]


def test_disable_logging(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    disable_logging()
    pipeline(_seal).run(1)

    assert capsys.readouterr().err == ""


def test_configure_logging_keeps_host_sinks() -> None:
    received: list[str] = []
    host_id = logger.add(lambda message: received.append(message.record["message"]), level="INFO")
    try:
        configure_logging("INFO")
        logger.info("host app message")
    finally:
        logger.remove(host_id)

    assert received == ["host app message"]
