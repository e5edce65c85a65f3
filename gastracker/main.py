import asyncio
import logging

from fastapi import FastAPI

from gastracker.api.routes import router as api_router
from gastracker.config import get_settings
from gastracker.errors import ConfigurationError
from gastracker.jobs.scheduler import cycle_loop
from gastracker.logs import configure_logging

app = FastAPI(title="Gas Tracker API", version="0.1.0")
app.include_router(api_router)

log = logging.getLogger("gastracker.app")
_tasks: list[asyncio.Task] = []


@app.on_event("startup")
async def _startup():
    settings = get_settings()
    configure_logging(settings.log_level)

    # Periodic tracker cycle (one at a time, hourly by default).
    _tasks.append(asyncio.create_task(cycle_loop(settings)))
    log.info(
        "started cycle loop every %ds store=%s notifier=%s",
        settings.cycle_interval_seconds,
        settings.store,
        settings.notifier,
    )


@app.on_event("shutdown")
async def _shutdown():
    for task in _tasks:
        task.cancel()
    _tasks.clear()


@app.get("/health")
def health():
    try:
        settings = get_settings()
    except ConfigurationError as e:
        return {"status": "misconfigured", "error": str(e)}

    return {
        "status": "ok",
        "app_env": settings.app_env,
        "store": settings.store,
        "notifier": settings.notifier,
        "history_capacity": settings.history_capacity,
    }
