# src/config/logging_config.py

"""Logging for giftcard_monitor: one log file per run plus a Rich console.

The file handler captures every ``giftcard_monitor.*`` record at DEBUG
(strategy fallthroughs, skipped packages, per-product detail failures).
The console handler renders through Rich on stderr so stdout stays free
for JSON output; its level comes from ``GIFTCARD_LOG_LEVEL`` or the
CLI's ``-v`` flag.
"""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from src.config.settings import Settings

ROOT_LOGGER_NAME = "giftcard_monitor"

_FILE_FORMAT = (
    "%(asctime)s %(levelname)-8s [%(name)s] %(message)s "
    "(%(filename)s:%(lineno)d)"
)


def resolve_level(level: int | str | None) -> int:
    """Map a level name or number to a logging level.

    ``None`` falls back to ``Settings.LOG_LEVEL``; unknown names mean
    WARNING.
    """
    if level is None:
        level = Settings.LOG_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def _run_log_path() -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Settings.LOGS_DIR / f"{Settings.LOG_FILE_PREFIX}_{stamp}.log"


def _current_log_file(logger: logging.Logger) -> Path | None:
    """Path of the run file a previous setup attached, if any."""
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(console_level: int | str | None = None) -> Path:
    """Attach the run-file and console handlers and return the run file.

    Calling it again keeps the existing run file and only adjusts the
    console level.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    root.propagate = False
    level = resolve_level(console_level)

    existing = _current_log_file(root)
    if existing is not None:
        for handler in root.handlers:
            if isinstance(handler, RichHandler):
                handler.setLevel(level)
        return existing

    Settings.LOGS_DIR.mkdir(parents=True, exist_ok=True)
    log_file = _run_log_path()

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler.setLevel(level)

    root.addHandler(file_handler)
    root.addHandler(console_handler)
    root.debug(
        "Logging to %s (console level %s)",
        log_file,
        logging.getLevelName(level),
    )
    return log_file
