"""
FastAPI main application for the Changelog Monitor.
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

import structlog
from fastapi import BackgroundTasks, FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse

from api.config import config as api_config
from api.models import ErrorResponse, HealthResponse, StatusResponse
from monitor.checker import run_check
from storage.checkpoint_store import CheckpointStore, create_checkpoint_store
from utilities.config import load_config

logger = structlog.get_logger(__name__)

CHECK_COMPLETED_MESSAGE = "Changelog check completed"
SCHEDULED_CRON = "*/15 * * * *"

# Global checkpoint store
checkpoint_store: Optional[CheckpointStore] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Changelog Monitor API")

    global checkpoint_store
    try:
        store = create_checkpoint_store(load_config())
        await store.connect()
        checkpoint_store = store
        logger.info("Checkpoint store connected", store=type(store).__name__)
    except Exception as e:
        logger.error("Failed to connect checkpoint store", error=str(e))
        raise

    yield

    logger.info("Shutting down Changelog Monitor API")
    if checkpoint_store:
        await checkpoint_store.disconnect()
        checkpoint_store = None


app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    lifespan=lifespan
)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error("Unhandled exception", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if api_config.debug else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).model_dump()
    )


async def run_check_safely(trigger: str) -> None:
    """Run one check round, logging instead of raising on failure."""
    if checkpoint_store is None:
        logger.error("Checkpoint store not available, skipping check", trigger=trigger)
        return

    try:
        result = await run_check(checkpoint_store)
        logger.info(
            "Changelog check finished",
            trigger=trigger,
            outcome=result.outcome.value,
            notified_versions=result.notified_versions,
            checkpoint_updated=result.checkpoint_updated
        )
    except Exception as e:
        logger.error("Changelog check failed", trigger=trigger, error=str(e))


@app.get("/", response_class=PlainTextResponse, tags=["Info"])
async def index(request: Request):
    """Usage information."""
    scheduled_url = request.url.replace(path="/__scheduled", query=urlencode({"cron": SCHEDULED_CRON}))
    check_url = request.url.replace(path="/check", query="")
    return (
        f"{api_config.api_title}\n\n"
        f"To test the scheduled handler, run:\ncurl \"{scheduled_url}\"\n\n"
        f"Or trigger a manual check:\ncurl \"{check_url}\""
    )


@app.get("/check", response_class=PlainTextResponse, tags=["Checks"])
async def manual_check():
    """Run one check round and wait for it to finish."""
    await run_check_safely(trigger="manual")
    return CHECK_COMPLETED_MESSAGE


@app.get("/__scheduled", response_class=PlainTextResponse, tags=["Checks"])
async def scheduled_check(background_tasks: BackgroundTasks, cron: str = SCHEDULED_CRON):
    """Start one check round in the background for an external timer."""
    logger.info("Scheduled trigger fired", cron=cron)
    background_tasks.add_task(run_check_safely, "scheduled")
    return "Scheduled check started"


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    store_status = "unavailable"
    if checkpoint_store is not None:
        store_status = await checkpoint_store.health_check()

    return HealthResponse(
        status="healthy" if store_status == "healthy" else "degraded",
        timestamp=datetime.utcnow(),
        version=api_config.api_version,
        store_status=store_status
    )


@app.get("/status", response_model=StatusResponse, tags=["Health"])
async def checkpoint_status():
    """Current checkpoint and configured platforms."""
    monitor_config = load_config()

    last_seen_version = None
    if checkpoint_store is not None:
        last_seen_version = await checkpoint_store.get(monitor_config.checkpoint_key)

    return StatusResponse(
        changelog_url=monitor_config.changelog_url,
        last_seen_version=last_seen_version,
        platforms=monitor_config.notifier_settings().enabled_platforms(),
        timestamp=datetime.utcnow()
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=api_config.host,
        port=api_config.port,
        reload=True,
        log_level="info"
    )
