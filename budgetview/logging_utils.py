"""Mini README: Application-wide logging helpers for Budget View.

Structure:
    * get_logger - factory returning module loggers with baseline setup.
    * configure_root_logger - attach the shared handler and set the level.
    * level_for_environment - map the configured environment to a level.

Usage:
    Modules import ``get_logger`` and log fetches, reconciliations and
    remote failures through it. The handler is attached exactly once so
    reloading modules in development does not stack duplicates, while the
    level can still be raised or lowered later by entry points.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False
_NOISY_LOGGERS = ("httpx", "httpcore")


def level_for_environment(environment: str) -> int:
    """Development environments log at DEBUG, everything else at INFO."""

    return logging.DEBUG if environment.strip().lower() in {"development", "dev", "local"} else logging.INFO


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach a timestamped stream handler once and apply ``level``."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Per-request lines from the HTTP stack duplicate the client's own logs.
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring a handler exists."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
