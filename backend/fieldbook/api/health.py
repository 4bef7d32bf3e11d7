"""Health check and dashboard stats endpoints"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from fieldbook import __version__
from fieldbook.api.dependencies import get_blob_store, get_stats_service, get_store
from fieldbook.schemas.project import ProjectStats
from fieldbook.services.blob_store import BlobStore
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint

    Returns simple health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/api/health", status_code=status.HTTP_200_OK)
def detailed_health_check(
    store: EntityStore = Depends(get_store),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """
    Detailed health check with dependency status

    Checks the database behind the entity store and the blob store
    """
    services = {}
    overall_status = "healthy"

    try:
        with store.transaction() as session:
            session.execute(text("SELECT 1")).scalar_one()
        services["database"] = "connected"
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        services["database"] = f"disconnected: {e}"
        overall_status = "degraded"

    services["blob_store"] = blob_store.check()
    if services["blob_store"] not in ("available", "connected"):
        overall_status = "degraded"

    return {
        "status": overall_status,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": services,
    }


@router.get("/api/stats", response_model=ProjectStats, status_code=status.HTTP_200_OK)
def get_stats(service: StatsService = Depends(get_stats_service)):
    """Active projects, photo total, pending inspections and document total"""
    return service.get_stats()
