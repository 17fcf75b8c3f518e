"""Logging setup for the quiz and career matching pipeline.

Every module logs through a child of the ``career_match`` logger
(``get_logger("quiz.scorer")`` -> ``career_match.quiz.scorer``). The CLI
calls ``configure_logging`` once at startup; library use without it leaves
records to the host application's handlers.
"""

import logging
import sys
from typing import TextIO

LOGGER_NAME = "career_match"
CONSOLE_HANDLER_NAME = "career_match.console"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: str | int | None) -> int | str:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    return logging.getLevelName(name) if name else logging.INFO


def _console_handler(logger: logging.Logger) -> logging.Handler | None:
    for handler in logger.handlers:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            return handler
    return None


def configure_logging(
    level: str | int | None = None,
    *,
    stream: TextIO | None = None,
    format_string: str = LOG_FORMAT,
    date_format: str = DATE_FORMAT,
) -> logging.Logger:
    """Attach a console handler to the application logger and set its level.

    Calling it again only changes the level; the handler is created once.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL) or number.
            Defaults to INFO.
        stream: Output stream for a newly created handler (defaults to stderr).
        format_string: Format string for log records.
        date_format: Format string for timestamps.

    Returns:
        The ``career_match`` logger.
    """
    log_level = _resolve_level(level)
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)

    handler = _console_handler(logger)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(CONSOLE_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(format_string, datefmt=date_format))
        logger.addHandler(handler)
        logger.propagate = False
    handler.setLevel(log_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child of the application logger.

    ``name`` may be relative (``"store.service"``) or already qualified
    (``"career_match.store.service"``).
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def reset_logging() -> None:
    """Remove the console handler and restore default propagation (for tests)."""
    logger = logging.getLogger(LOGGER_NAME)
    handler = _console_handler(logger)
    if handler is not None:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
