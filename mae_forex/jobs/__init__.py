"""Batch jobs for :mod:`mae_forex`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

__all__ = [
    "run_scrape_forex",
    "run_scrape_legacy",
    "run_historico_forex",
    "run_sync_forex",
]

if TYPE_CHECKING:  # pragma: no cover - import only for static analyzers
    from mae_forex.jobs.historico_forex import run_historico_forex as run_historico_forex
    from mae_forex.jobs.scrape_forex import run_scrape_forex as run_scrape_forex
    from mae_forex.jobs.scrape_legacy import run_scrape_legacy as run_scrape_legacy
    from mae_forex.jobs.sync_forex import run_sync_forex as run_sync_forex


def __getattr__(name: str) -> Any:
    """Lazily expose the job runners to avoid import-time side effects."""

    if name == "run_scrape_forex":
        from mae_forex.jobs.scrape_forex import run_scrape_forex as _run

        return _run
    if name == "run_scrape_legacy":
        from mae_forex.jobs.scrape_legacy import run_scrape_legacy as _run

        return _run
    if name == "run_historico_forex":
        from mae_forex.jobs.historico_forex import run_historico_forex as _run

        return _run
    if name == "run_sync_forex":
        from mae_forex.jobs.sync_forex import run_sync_forex as _run

        return _run
    raise AttributeError(f"module 'mae_forex.jobs' has no attribute {name}")
