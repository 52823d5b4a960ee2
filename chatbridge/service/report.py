"""Usage analytics assembled from persisted metrics and chat logs."""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.metrics import all_counters
from ..persistence.interfaces.repos import IUnitOfWork
from ..persistence.sqlite import get_uow


def usage_report(uow: Optional[IUnitOfWork] = None, *, include_process: bool = False) -> Dict[str, Any]:
    """Return totals, per-provider and per-model stats, token sums and chat counts.

    Parameters
    ----------
    uow:
        Unit of Work to read from; defaults to the configured database.
    include_process:
        Also include in-memory dispatch counters of the current process.
    """
    owned = uow is None
    uow = uow if uow is not None else get_uow()
    try:
        with uow:
            summary = uow.metrics.summary()
            chats_by_model = uow.chats.count_by_model()
            recent_errors = [
                {
                    "provider": e.provider,
                    "model": e.model,
                    "error_code": e.error_code,
                    "created_at": e.created_at.isoformat(),
                }
                for e in uow.metrics.recent_errors(limit=10)
            ]
    finally:
        if owned:
            uow.close()
    report: Dict[str, Any] = {
        **summary,
        "chats_by_model": chats_by_model,
        "recent_errors": recent_errors,
    }
    if include_process:
        report["process"] = {name: c.as_dict() for name, c in sorted(all_counters().items())}
    return report


__all__ = ["usage_report"]
