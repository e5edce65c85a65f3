from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gastracker.config import Settings, get_settings
from gastracker.errors import (
    ConfigurationError,
    FetchError,
    GasTrackerError,
    NotifyError,
    StoreError,
)
from gastracker.jobs.cycle import run_cycle
from gastracker.notifiers.base import Notifier
from gastracker.notifiers.loader import get_notifier
from gastracker.providers.base import PriceSource
from gastracker.providers.loader import get_price_source
from gastracker.stats.engine import compute_statistics
from gastracker.storage.base import Store
from gastracker.storage.loader import get_store

router = APIRouter()


def iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def _http_error(e: GasTrackerError) -> HTTPException:
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=500, detail=f"configuration error: {e}")
    if isinstance(e, (FetchError, StoreError, NotifyError)):
        return HTTPException(status_code=502, detail=str(e))
    return HTTPException(status_code=500, detail=str(e))


# -------------------------
# Dependencies (collaborators are built per request from settings)
# -------------------------
def settings_dep() -> Settings:
    try:
        return get_settings()
    except ConfigurationError as e:
        raise _http_error(e) from e


def store_dep(settings: Settings = Depends(settings_dep)) -> Store:
    try:
        return get_store(settings)
    except ConfigurationError as e:
        raise _http_error(e) from e


def notifier_dep(
    settings: Settings = Depends(settings_dep),
    notifier: str = Query("", description="Override NOTIFIER for this run, e.g. LOG"),
) -> Notifier:
    try:
        return get_notifier(settings, override=notifier)
    except ConfigurationError as e:
        raise _http_error(e) from e


def price_source_dep(settings: Settings = Depends(settings_dep)) -> Iterator[PriceSource]:
    source = get_price_source(settings)
    try:
        yield source
    finally:
        source.close()


@router.get("/history")
def history(store: Store = Depends(store_dep)):
    """
    History snapshot:
    - window size and capacity
    - most recent sample (the current known band)
    - statistics the next cycle would classify against (null when empty)
    """
    try:
        window = store.load()
    except GasTrackerError as e:
        raise _http_error(e) from e

    latest = window.most_recent()
    stats = compute_statistics(window) if not window.is_empty() else None

    return {
        "size": len(window),
        "capacity": window.capacity,
        "latest": latest.to_record() if latest else None,
        "oldest_timestamp": iso(window.oldest().ts) if latest else None,
        "statistics": (
            {
                "mean": stats.mean,
                "stddev": stats.stddev,
                "low_below": stats.mean - stats.stddev,
                "high_above": stats.mean + stats.stddev,
            }
            if stats
            else None
        ),
    }


@router.post("/dev/run_cycle")
def dev_run_cycle(
    price_source: PriceSource = Depends(price_source_dep),
    store: Store = Depends(store_dep),
    notifier: Notifier = Depends(notifier_dep),
):
    """
    Dev-only helper:
    Runs ONE tracker cycle inside the API process and returns its report.
    A failed notification still records the sample; the report is returned
    with notify_error set.
    """
    try:
        report = run_cycle(price_source, store, notifier)
    except NotifyError as e:
        if e.report is None:
            raise _http_error(e) from e
        report = e.report
    except GasTrackerError as e:
        raise _http_error(e) from e

    return {"ok": report.notify_error is None, "report": report.model_dump()}
