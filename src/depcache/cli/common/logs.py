"""Logging setup for the CLI."""

from __future__ import annotations

import logging

NOISY_LOGGERS = ("databricks.sdk", "urllib3")


def configure_logging(level: str) -> None:
    """Send log records to stderr and set the `depcache` logger level."""
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(name)s: %(message)s")
    logging.getLogger("depcache").setLevel(resolved)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
