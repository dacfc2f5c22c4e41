"""Logging setup for mathdsl.

All package loggers are children of the ``mathdsl`` logger so a host can
silence or redirect them in one place. Library code only calls
``get_logger``; attaching handlers is left to ``setup_logging`` which the
host calls once.
"""

from __future__ import annotations

import logging

from .config import LOG_LEVEL

ROOT_LOGGER_NAME = "mathdsl"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the package logger for a dotted submodule name.

    Args:
        name: Submodule name such as "solver.dispatch"

    Returns:
        Logger named "mathdsl.<name>"
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(level: str | int | None = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Calling this more than once does not stack handlers.

    Args:
        level: Logging level name or number (default: MATHDSL_LOG_LEVEL)

    Returns:
        The configured root package logger
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if level is None:
        level = LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    root.setLevel(level)
    if not any(getattr(h, "_mathdsl_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._mathdsl_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root
