"""File logging for plinth clients.

Records go to ``<PLINTH_HOME>/logs/plinth.log`` through a single non-propagating
handler; transport events are rendered as ``name key=value ...`` lines.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from plinth.config import LogLevel
from plinth.paths import get_plinth_home

LOGGER_NAME = "plinth"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def log_path(base_dir: Path | None = None) -> Path:
    directory = base_dir if base_dir is not None else get_plinth_home() / "logs"
    return directory / "plinth.log"


def configure_logger(
    *,
    log_level: LogLevel | str = LogLevel.INFO,
    base_dir: Path | None = None,
    name: str = LOGGER_NAME,
) -> logging.Logger:
    """Return the named file logger at ``log_level``.

    Repeated calls update the level but never attach a second handler.
    """

    level = _to_logging_level(log_level)
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False

    handler = next((h for h in logger.handlers if isinstance(h, logging.FileHandler)), None)
    if handler is None:
        path = log_path(base_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    handler.setLevel(level)
    return logger


def event_logger(logger: logging.Logger, level: int = logging.INFO) -> Callable[[str, dict[str, object]], None]:
    """Adapt ``logger`` to the transport event callback signature."""

    def _emit(name: str, fields: dict[str, object]) -> None:
        if not logger.isEnabledFor(level):
            return
        rendered = " ".join(f"{key}={value}" for key, value in fields.items())
        logger.log(level, "%s %s", name, rendered)

    return _emit


def _to_logging_level(value: LogLevel | str) -> int:
    if isinstance(value, LogLevel):
        return _LEVELS[value]
    if isinstance(value, str):
        try:
            return _LEVELS[LogLevel(value.lower())]
        except ValueError:
            return logging.WARNING
    return logging.WARNING


__all__ = [
    "LOGGER_NAME",
    "configure_logger",
    "event_logger",
    "log_path",
]
