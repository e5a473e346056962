"""Logging utilities for audit runs.

Log records go to stderr. Progress lines and the report go to stdout
through ``print_line``.
"""

from __future__ import annotations

import atexit
import logging
import logging.handlers
from pathlib import Path
import queue
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text


console = Console()
log_console = Console(stderr=True)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger("execaudit")
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(rich_tracebacks=True, console=log_console)
        formatter = logging.Formatter("%(message)s", datefmt="[%X]")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.propagate = False
    return logger


logger = setup_logging()

# Active (queue handler, listener) pair while a log file is open.
_file_logging: tuple[logging.Handler, logging.handlers.QueueListener] | None = None


def set_level(level: str | int) -> None:
    """Set the audit logger level from a name such as ``"DEBUG"``."""

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            log_warning(f"Unknown log level {level!r}; keeping {logging.getLevelName(logger.level)}")
            return
        level = resolved
    logger.setLevel(level)


def enable_file_logging(log_path: Path) -> None:
    """Also write every record to ``log_path`` through a background queue."""

    global _file_logging

    disable_file_logging()
    log_path = log_path.expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    log_queue: queue.SimpleQueue[logging.LogRecord] = queue.SimpleQueue()
    queue_handler = logging.handlers.QueueHandler(log_queue)
    listener = logging.handlers.QueueListener(log_queue, file_handler)
    listener.start()
    logger.addHandler(queue_handler)
    _file_logging = (queue_handler, listener)


def disable_file_logging() -> None:
    """Flush and close the log file, if one is open."""

    global _file_logging

    if _file_logging is None:
        return
    queue_handler, listener = _file_logging
    _file_logging = None
    logger.removeHandler(queue_handler)
    listener.stop()
    for handler in listener.handlers:
        handler.close()


atexit.register(disable_file_logging)


def _format_text(message: str, style: str) -> Any:
    return Text(message, style=style)


def log_error(message: str) -> None:
    logger.error(_format_text(message, style="bold red"))


def log_info(message: str, style: str = "bold white") -> None:
    logger.info(_format_text(message, style=style))


def log_warning(message: str) -> None:
    logger.warning(_format_text(message, style="bold yellow"))


def print_line(line: str, style: str | None = None) -> None:
    """Write one plain output line to stdout, without markup parsing."""

    console.print(line, style=style, markup=False, highlight=False, emoji=False, soft_wrap=True)
