"""Logging utilities for iconbundle commands."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Iterable

_LOGGER_NAME = "iconbundle"
_CONSOLE_FORMAT = "[iconbundle] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the iconbundle hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def format_command(args: Iterable[str]) -> str:
    """Render an external command the way it would be typed in a shell."""
    return f"$ {shlex.join(str(arg) for arg in args)}"


def log_command(logger: logging.Logger, args: Iterable[str]) -> None:
    """Echo an external command before it runs."""
    logger.info("%s", format_command(args))


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Attach a console handler and, when ``log_file`` is given, a file sink.

    Handlers are replaced on every call so repeated CLI invocations within one
    process do not print each record twice.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "format_command", "get_logger", "log_command"]
