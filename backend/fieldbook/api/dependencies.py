"""API dependencies resolving the services owned by the running app"""

from fastapi import Request

from fieldbook.services.blob_store import BlobStore
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.materials_service import MaterialsService
from fieldbook.services.media_service import MediaService
from fieldbook.services.project_service import ProjectService
from fieldbook.services.schedule_service import ScheduleService
from fieldbook.services.stats_service import StatsService


def get_store(request: Request) -> EntityStore:
    return request.app.state.store


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.project_service


def get_media_service(request: Request) -> MediaService:
    return request.app.state.media_service


def get_materials_service(request: Request) -> MaterialsService:
    return request.app.state.materials_service


def get_schedule_service(request: Request) -> ScheduleService:
    return request.app.state.schedule_service


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service
