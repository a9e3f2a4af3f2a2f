from __future__ import annotations

from pathlib import Path

import pytest

from finalizable.config import Settings, get_settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.log_level == "INFO"
    assert settings.log_profile == "default"
    assert settings.log_diagnose is False


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINALIZABLE_LOG_LEVEL", "debug")
    monkeypatch.setenv("FINALIZABLE_LOG_PROFILE", "rich")

    settings = get_settings()

    assert settings.log_level == "debug"
    assert settings.log_profile == "rich"


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("FINALIZABLE_LOG_LEVEL", "ERROR")
    assert get_settings() is first

    get_settings.cache_clear()
    assert get_settings().log_level == "ERROR"


def test_env_file_is_read(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("FINALIZABLE_LOG_DIAGNOSE=true\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert Settings().log_diagnose is True


def test_invalid_profile_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINALIZABLE_LOG_PROFILE", "json")
    with pytest.raises(ValueError):
        Settings()
