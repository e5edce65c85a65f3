from __future__ import annotations

import asyncio
import logging

from gastracker.config import Settings
from gastracker.errors import GasTrackerError, NotifyError
from gastracker.jobs.cycle import run_cycle_from_settings


async def cycle_loop(settings: Settings) -> None:
    """
    Background loop:
    run one tracker cycle every CYCLE_INTERVAL_SECONDS.

    Cycles never overlap: the next one starts only after the previous one
    finished and the interval elapsed. Failures are logged and the loop
    keeps its schedule; there is no retry inside a cycle.
    """
    log = logging.getLogger("gastracker.scheduler")

    while True:
        try:
            report = await asyncio.to_thread(run_cycle_from_settings, settings)
            log.info(
                "cycle finished price=%d category=%s notified=%s window=%d",
                report.price,
                report.category,
                report.notified,
                report.window_size,
            )
        except NotifyError as e:
            # The sample was still recorded.
            log.error("cycle recorded the sample but notification failed: %s", e)
        except GasTrackerError as e:
            log.error("cycle failed: %s", e)
        except Exception:
            # Keep the schedule alive on unexpected errors, but keep the traceback.
            log.exception("cycle crashed")

        await asyncio.sleep(settings.cycle_interval_seconds)
