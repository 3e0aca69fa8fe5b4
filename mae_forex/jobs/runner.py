"""Banner and exit-status handling shared by the job entry points."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError

from mae_forex.config import ConfigurationError
from mae_forex.utils.logger import get_logger

LOGGER = get_logger(__name__)

BANNER = "-" * 45


def _now() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def run_job(name: str, job: Callable[[], object]) -> int:
    """Run ``job`` between start/end banners and map fatal errors to exit status 1.

    Per-row failures are handled inside the job and never change the status.
    """

    LOGGER.info(BANNER)
    LOGGER.info("Starting %s at %s", name, _now())
    status = 0
    try:
        job()
    except ConfigurationError as exc:
        LOGGER.error("Configuration error: %s", exc)
        status = 1
    except SQLAlchemyError as exc:
        LOGGER.error("Database error: %s", exc)
        status = 1
    LOGGER.info("%s finished at %s", name, _now())
    LOGGER.info(BANNER)
    return status


__all__ = ["BANNER", "run_job"]
