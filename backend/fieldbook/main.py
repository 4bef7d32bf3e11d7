"""Main FastAPI application entry point"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fieldbook import __version__
from fieldbook.api.documents import router as documents_router
from fieldbook.api.errors import PROBLEM_RESPONSES, register_exception_handlers
from fieldbook.api.health import router as health_router
from fieldbook.api.materials import router as materials_router
from fieldbook.api.photos import router as photos_router
from fieldbook.api.projects import router as projects_router
from fieldbook.api.schedule import router as schedule_router
from fieldbook.config import Settings, settings as default_settings
from fieldbook.database import build_engine, build_session_factory, create_tables
from fieldbook.services.blob_store import BlobStore, build_blob_store
from fieldbook.services.clock import Clock, SystemClock, resolve_timezone
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.materials_service import MaterialsService
from fieldbook.services.media_service import MediaService
from fieldbook.services.project_service import ProjectService
from fieldbook.services.sample_data import seed_sample_data
from fieldbook.services.schedule_service import ScheduleService
from fieldbook.services.stats_service import StatsService

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    blob_store: Optional[BlobStore] = None,
) -> FastAPI:
    """
    Build an application with its own entity store and services.

    Args:
        settings: Configuration; defaults to the environment settings
        clock: Time source; defaults to the system clock
        blob_store: File storage; defaults to the configured backend
    """
    settings = settings or default_settings
    clock = clock or SystemClock()
    tz = resolve_timezone(settings.timezone)

    engine = build_engine(settings.database_url)
    create_tables(engine)
    store = EntityStore(build_session_factory(engine), clock)
    blob_store = blob_store or build_blob_store(settings)

    if settings.seed_sample_data:
        seed_sample_data(store)

    app = FastAPI(
        title="Fieldbook API",
        description="Construction project records: photos, documents, material tests, reminders and calendar",
        version=__version__,
    )

    app.state.settings = settings
    app.state.store = store
    app.state.blob_store = blob_store
    app.state.project_service = ProjectService(store, blob_store, tz)
    app.state.media_service = MediaService(store, blob_store, settings.max_upload_bytes)
    app.state.materials_service = MaterialsService(store)
    app.state.schedule_service = ScheduleService(store, tz)
    app.state.stats_service = StatsService(store)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
        max_age=3600,
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(projects_router, responses=PROBLEM_RESPONSES)
    app.include_router(photos_router, responses=PROBLEM_RESPONSES)
    app.include_router(documents_router, responses=PROBLEM_RESPONSES)
    app.include_router(materials_router, responses=PROBLEM_RESPONSES)
    app.include_router(schedule_router, responses=PROBLEM_RESPONSES)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "Fieldbook API",
            "version": __version__,
            "status": "running",
        }

    logger.info(f"Fieldbook API ready ({settings.environment}, database {engine.url.drivername})")
    return app


# Configure logging
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app()
