"""Record Store API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map RecordStoreError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Exactly one RecordStore per process: built on startup from the snapshot
      file, kept on app.state, flushed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Store owned by the app instance instead of a module global, so tests can
      swap it through dependency overrides
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recordstore.api.error_handlers import register_error_handlers
from recordstore.api.routes import auth, health
from recordstore.api.routes.records import build_records_router
from recordstore.config import get_settings
from recordstore.core.domain_types import EntityKind
from recordstore.infrastructure.observability import setup_logging
from recordstore.infrastructure.record_store import RecordStore
from recordstore.infrastructure.snapshot_file import SnapshotFile
from recordstore.schemas.records import Service, Task

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.record_store = RecordStore.open(
        SnapshotFile(settings.snapshot_path),
        bcrypt_rounds=settings.bcrypt_rounds,
        strict_updates=settings.strict_updates,
    )
    logger.info(
        "Record Store API started",
        extra={"snapshot_path": str(settings.snapshot_path)},
    )
    yield
    store: RecordStore = app.state.record_store
    if store.corrupted:
        logger.critical("Shutting down with a corrupted store; final flush skipped")
    else:
        store.flush()
    logger.info("Record Store API shutting down")


app = FastAPI(
    title="Record Store API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.cors_origin_regex,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Accept", "Content-Type"],
    max_age=settings.cors_max_age,
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(build_records_router(EntityKind.TASK, Task, "Task"))
app.include_router(build_records_router(EntityKind.SERVICE, Service, "Service"))
app.include_router(auth.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point — serve the app with uvicorn."""
    uvicorn.run(app, host=settings.host, port=settings.port)
