"""
Logging utilities for checkbox-prompt.

All package loggers live under the ``checkbox_prompt`` root logger.  Nothing
is emitted until :func:`setup_logging` installs a handler, so embedding the
prompt in another application never writes log lines over the rendered frame.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("checkbox_prompt")
_root_logger.addHandler(logging.NullHandler())

_level_before_disable: int | None = None


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the prompt package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from checkbox_prompt.logging import setup_logging

        # Keep the terminal clean, log transitions to a file
        setup_logging("DEBUG", file="prompt.log", stream=open(os.devnull, "w"))
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(formatter)
    stream_handler.setLevel(level)
    _root_logger.addHandler(stream_handler)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "prompt", "choices")

    Returns:
        Logger instance
    """
    if name.startswith("checkbox_prompt."):
        return logging.getLogger(name)
    return logging.getLogger(f"checkbox_prompt.{name}")


def set_level(level: str | int) -> None:
    """Set the log level for the prompt package."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    _root_logger.setLevel(level)


def disable() -> None:
    """Disable all logging for the prompt package, child loggers included."""
    global _level_before_disable
    if _level_before_disable is None:
        _level_before_disable = _root_logger.level
    _root_logger.setLevel(logging.CRITICAL + 1)


def enable() -> None:
    """Re-enable logging at the level in effect before :func:`disable`."""
    global _level_before_disable
    if _level_before_disable is not None:
        _root_logger.setLevel(_level_before_disable)
        _level_before_disable = None
