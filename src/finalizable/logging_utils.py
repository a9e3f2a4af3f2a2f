"""Runtime logging helpers."""

from __future__ import annotations

import sys
from logging import Handler

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

from finalizable.config import LogProfile, get_settings
from finalizable.errors import ConfigurationError

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_handler_id: int | None = None
_DEFAULT_SINK_REMOVED = False


def _build_rich_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def configure_logging(level: str | None = None, *, profile: LogProfile | None = None) -> int:
    """Enable finalizable log output and (re)install its sink.

    Falls back to ``Settings`` for anything not passed explicitly. The
    first call drops loguru's pre-installed stderr sink; later calls only
    replace the sink installed here. Returns the loguru handler id.
    """
    global _handler_id, _DEFAULT_SINK_REMOVED

    settings = get_settings()
    level = (level or settings.log_level).upper()
    profile = profile or settings.log_profile
    try:
        logger.level(level)
    except ValueError as error:
        raise ConfigurationError(f"Unknown log level: {level}") from error
    if profile not in ("default", "rich"):
        raise ConfigurationError(f"Unknown log profile: {profile}")

    if not _DEFAULT_SINK_REMOVED:
        try:
            logger.remove(0)
        except ValueError:
            logger.debug("logging.default_sink_already_removed")
        _DEFAULT_SINK_REMOVED = True
    if _handler_id is not None:
        logger.remove(_handler_id)
    _handler_id = None

    if profile == "rich":
        _handler_id = logger.add(
            _build_rich_handler(),
            level=level,
            format="{message}",
            backtrace=False,
            diagnose=settings.log_diagnose,
            filter="finalizable",
        )
    else:
        _handler_id = logger.add(
            sys.stderr,
            level=level,
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=settings.log_diagnose,
            filter="finalizable",
        )

    logger.enable("finalizable")
    return _handler_id


def disable_logging() -> None:
    """Remove the installed sink and silence finalizable again."""
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None
    logger.disable("finalizable")
