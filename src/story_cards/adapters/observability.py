"""Process logging setup for the API server and CLI commands."""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_PATH = "work/logs/story_cards.log"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_CONFIGURED = False


def _int_env(name: str, default: int, *, minimum: int, maximum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, min(maximum, value))


def _level_env(name: str, default: int) -> int:
    level_name = os.environ.get(name, "").strip().upper()
    if not level_name:
        return default
    level = logging.getLevelName(level_name)
    return level if isinstance(level, int) else default


def resolve_log_path() -> Path | None:
    """Log file from `STORY_CARDS_LOG_PATH`; `-` disables file logging."""
    raw = os.environ.get("STORY_CARDS_LOG_PATH", "").strip() or DEFAULT_LOG_PATH
    if raw == "-":
        return None
    return Path(raw)


def configure_runtime_logging(*, level: str | None = None, force: bool = False) -> None:
    """Install console and rotating-file handlers on the root logger once."""
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    root_level = _level_env("STORY_CARDS_LOG_LEVEL", logging.INFO)
    if level:
        root_level = logging.getLevelName(level.strip().upper())
        if not isinstance(root_level, int):
            root_level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_path = resolve_log_path()
    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=log_path,
                maxBytes=_int_env(
                    "STORY_CARDS_LOG_MAX_BYTES",
                    2 * 1024 * 1024,
                    minimum=64 * 1024,
                    maximum=50 * 1024 * 1024,
                ),
                backupCount=_int_env("STORY_CARDS_LOG_BACKUP_COUNT", 5, minimum=1, maximum=60),
                encoding="utf-8",
            )
        )

    root = logging.getLogger()
    root.setLevel(root_level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(
        _level_env("STORY_CARDS_ACCESS_LOG_LEVEL", logging.WARNING)
    )
    _CONFIGURED = True
