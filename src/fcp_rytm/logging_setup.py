"""Logging configuration helpers for fcp-rytm.

Logs go to stderr: stdout carries the MCP stdio transport.
"""

from __future__ import annotations

import logging
import os
import sys

from fcp_rytm.errors import ConfigError

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names accepted by the ``loglevel`` verb.
LEVEL_NAMES: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

PACKAGE_LOGGER = "fcp_rytm"


def parse_level(name: str) -> int:
    level = LEVEL_NAMES.get(name.strip().lower())
    if level is None:
        raise ConfigError(
            f"Invalid log level '{name}'. Use one of: error, warn, info, debug, trace."
        )
    return level


def configure_logging(default_level: str = "WARNING") -> int:
    """Configure process-wide logging and return resolved log level.

    The level is read from ``LOG_LEVEL``. If unset, ``default_level`` is used.
    """
    level_name = os.environ.get("LOG_LEVEL", default_level)
    try:
        level = parse_level(level_name)
        invalid_level = None
    except ConfigError:
        level = parse_level(default_level)
        invalid_level = level_name

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )

    if invalid_level is not None:
        logging.getLogger(__name__).warning(
            "Invalid LOG_LEVEL '%s'; using %s", invalid_level, logging.getLevelName(level)
        )

    return level


def set_log_level(name: str) -> int:
    """Change the package log level at runtime (``loglevel`` verb)."""
    level = parse_level(name)
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    logging.getLogger().setLevel(level)
    return level
