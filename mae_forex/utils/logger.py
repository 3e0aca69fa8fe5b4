"""Logging setup shared by the batch jobs."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False


def get_logger(name: str = "mae_forex") -> logging.Logger:
    """Return ``name``'s logger, installing the console format on first use."""
    global _configured
    if not _configured:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        _configured = True
    return logging.getLogger(name)


def set_debug(enabled: bool) -> None:
    """Toggle DEBUG output on the root logger."""

    logging.getLogger().setLevel(logging.DEBUG if enabled else logging.INFO)
