"""Logging set-up shared by the CLI and the HTTP service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

ROOT_LOGGER = "repodocs"
CONSOLE_FORMAT = "[repodocs] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``repodocs`` or the ``repodocs.<name>`` child logger."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _swap_handlers(logger: logging.Logger, handlers: Iterable[logging.Handler]) -> None:
    # Replaced handlers are closed so an earlier log file is released.
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route ``repodocs.*`` records to stderr and, when given, to ``log_file``.

    Calling this again replaces the previous handlers, so the CLI and the
    service can both configure logging without doubling output. The log
    file's parent directory is created when missing and the file is appended to.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handlers = [_handler(logging.StreamHandler(), level, CONSOLE_FORMAT)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_handler(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT))

    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False
    _swap_handlers(logger, handlers)
    return logger


__all__ = ["configure_logging", "get_logger"]
