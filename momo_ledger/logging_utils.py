"""Mini README: Application-wide logging helpers for Momo Ledger.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - attach the shared handler and adjust the level.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. Entry
    points (the CLI and the web factory) call ``configure_root_logger`` with
    the configured level. Configuration happens once per process so reloads
    in development do not stack duplicate handlers.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Accept numeric levels or names such as ``"debug"``."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if isinstance(resolved, int):
        return resolved
    raise ValueError(f"Unknown log level: {level}")


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger once; later calls only adjust the level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        root_logger.setLevel(_resolve_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(_resolve_level(level))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
