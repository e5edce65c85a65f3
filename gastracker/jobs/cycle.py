from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from gastracker.classify.engine import categorize
from gastracker.classify.transitions import detect_transition
from gastracker.config import Settings
from gastracker.errors import NotifyError
from gastracker.models.prices import Category, PriceStatistics, Sample
from gastracker.models.report import CycleReport
from gastracker.notifiers.base import Notifier
from gastracker.notifiers.loader import get_notifier
from gastracker.providers.base import PriceSource
from gastracker.providers.loader import get_price_source
from gastracker.stats.engine import compute_statistics
from gastracker.storage.base import Store
from gastracker.storage.loader import get_store

log = logging.getLogger("gastracker.cycle")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def run_cycle(
    price_source: PriceSource,
    store: Store,
    notifier: Notifier,
    now: Callable[[], datetime] = utcnow,
) -> CycleReport:
    """
    One tracker cycle:
      fetch price -> load window -> statistics -> categorize
      -> notify on transition -> append (evicting the oldest) -> save

    The window is a value threaded through each step; nothing is shared
    between cycles except what the store persists.

    Fetch, load and save failures propagate unchanged and end the cycle.
    A NotifyError does not stop the sample being recorded: it is re-raised
    after the save, carrying the report.
    """
    audit: list[str] = []

    price = price_source.fetch_current_price()
    log.info("medium gas is %d", price)

    window = store.load()
    log.info("loaded %d gas price records (capacity %d)", len(window), window.capacity)

    previous = window.most_recent()
    previous_category: Optional[Category] = previous.category if previous else None

    stats: Optional[PriceStatistics] = None
    if previous is None:
        # Bootstrap: nothing to compare against yet.
        category = Category.AVERAGE
        audit.append("bootstrap: empty history, recording as Average")
    else:
        stats = compute_statistics(window)
        log.info("mean price = %s, stddev = %s", stats.mean, stats.stddev)
        category = categorize(price, stats)
        audit.append(
            f"band: [{stats.mean - stats.stddev:.4f}, {stats.mean + stats.stddev:.4f}] "
            f"over {stats.count} samples"
        )
    log.info("the price now is %s", category)
    audit.append(f"category: {category} (previous={previous_category})")

    notified = False
    notify_failure: Optional[NotifyError] = None
    transition = detect_transition(category, previous_category, price)
    if transition is None:
        audit.append("notify: skipped")
    else:
        try:
            notifier.send(transition.new, transition.previous, transition.price)
        except NotifyError as e:
            log.error("failed to notify of price category change: %s", e)
            audit.append(f"notify: failed ({e})")
            notify_failure = e
        else:
            notified = True
            log.info("sent notification of price category change")
            audit.append(f"notify: sent {transition.previous} -> {transition.new}")

    sample = Sample(price=price, ts=now(), category=category)
    window, evicted = window.append(sample)
    if evicted is not None:
        log.info("evicted oldest gas price with timestamp %s", evicted.ts.isoformat())
        audit.append(f"evicted: {evicted.ts.isoformat()}")

    store.save(window)
    log.info("saved %d gas price records", len(window))

    report = CycleReport(
        price=price,
        timestamp=sample.ts.isoformat(),
        category=category.value,
        previous_category=previous_category.value if previous_category else None,
        bootstrap=previous is None,
        mean=stats.mean if stats else None,
        stddev=stats.stddev if stats else None,
        notified=notified,
        notify_error=str(notify_failure) if notify_failure else None,
        evicted_timestamp=evicted.ts.isoformat() if evicted else None,
        window_size=len(window),
        audit=audit,
    )

    if notify_failure is not None:
        raise NotifyError(
            f"while notifying of price category change: {notify_failure}", report=report
        ) from notify_failure

    return report


def run_cycle_from_settings(settings: Settings, notifier_override: str = "") -> CycleReport:
    """Build the collaborators from settings and run one cycle."""
    # Build everything first so configuration errors surface before any I/O.
    notifier = get_notifier(settings, override=notifier_override)
    store = get_store(settings)
    price_source = get_price_source(settings)
    try:
        return run_cycle(price_source, store, notifier)
    finally:
        price_source.close()
