"""
Logging for the package provider.

Every module logs through a child of the ``pkg_provider`` logger, so the
level set here governs pkg_add/pkg_info tracing across the package.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Above CRITICAL: child loggers inherit it and drop every record
_SILENT = logging.CRITICAL + 1

_root_logger = logging.getLogger("pkg_provider")
_level_before_disable: int | None = None


def _coerce_level(level: str | int) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Route package logs to *stream* (stderr by default) and optionally *file*.

    Calling it again replaces the previous handlers.

    Example:
        from pkg_provider.logging import setup_logging

        # Trace every pkg_add / pkg_info invocation
        setup_logging("DEBUG")

        # Keep a record of installs
        setup_logging("INFO", file="pkgprov.log")
    """
    global _level_before_disable

    level = _coerce_level(level)
    _level_before_disable = None
    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    formatter = logging.Formatter(format or DEFAULT_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if file:
        handlers.append(logging.FileHandler(file))

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Child logger for a submodule, e.g. ``get_logger("provider")``."""
    if name.startswith("pkg_provider."):
        return logging.getLogger(name)
    return logging.getLogger(f"pkg_provider.{name}")


def set_level(level: str | int) -> None:
    """Change the package log level. While disabled, applies on ``enable()``."""
    global _level_before_disable

    level = _coerce_level(level)
    if _level_before_disable is not None:
        _level_before_disable = level
        return
    _root_logger.setLevel(level)


def is_disabled() -> bool:
    return _level_before_disable is not None


def disable() -> None:
    """Silence the package logger and all of its children."""
    global _level_before_disable

    if _level_before_disable is None:
        _level_before_disable = _root_logger.level
    _root_logger.setLevel(_SILENT)


def enable() -> None:
    """Undo ``disable()``, restoring the level in effect before it."""
    global _level_before_disable

    if _level_before_disable is None:
        return
    _root_logger.setLevel(_level_before_disable)
    _level_before_disable = None
