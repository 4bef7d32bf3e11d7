"""Pytest configuration and shared fixtures"""

from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fieldbook.config import Settings
from fieldbook.database import build_engine, build_session_factory, create_tables
from fieldbook.main import create_app
from fieldbook.schemas import MaterialTestCreate, ProjectCreate
from fieldbook.services.blob_store import LocalBlobStore
from fieldbook.services.entity_store import EntityStore
from fieldbook.services.materials_service import MaterialsService
from fieldbook.services.media_service import MediaService
from fieldbook.services.project_service import ProjectService
from fieldbook.services.schedule_service import ScheduleService
from fieldbook.services.stats_service import StatsService

# Monday morning, well clear of any day boundary
REFERENCE_TIME = datetime(2024, 11, 4, 10, 0, 0)


class FrozenClock:
    """Clock that only moves when a test advances it"""

    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


@pytest.fixture
def clock():
    """Controllable clock fixture"""
    return FrozenClock(REFERENCE_TIME)


@pytest.fixture
def store(clock):
    """Fresh in-memory entity store per test"""
    engine = build_engine("sqlite://")
    create_tables(engine)
    yield EntityStore(build_session_factory(engine), clock)
    engine.dispose()


@pytest.fixture
def blob_store(tmp_path):
    """Local blob store in a temporary directory"""
    return LocalBlobStore(str(tmp_path / "uploads"))


@pytest.fixture
def project_service(store, blob_store):
    return ProjectService(store, blob_store)


@pytest.fixture
def media_service(store, blob_store):
    return MediaService(store, blob_store, max_upload_bytes=1024 * 1024)


@pytest.fixture
def materials_service(store):
    return MaterialsService(store)


@pytest.fixture
def schedule_service(store):
    return ScheduleService(store)


@pytest.fixture
def stats_service(store):
    return StatsService(store)


@pytest.fixture
def sample_project(project_service):
    """Create a sample project for testing"""
    return project_service.create_project(
        ProjectCreate(
            name="Test Project",
            description="A test project",
            location="Downtown",
            type="building",
        )
    )


@pytest.fixture
def other_project(project_service):
    return project_service.create_project(
        ProjectCreate(name="Bridge Retrofit", type="infrastructure", status="review")
    )


@pytest.fixture
def sample_material_test(materials_service):
    """Create a sample material test for testing"""
    return materials_service.create_material_test(
        MaterialTestCreate(
            name="Compressive Strength",
            category="concrete",
            specification="Min 4000 PSI @ 28 days",
        )
    )


@pytest.fixture
def app(clock, blob_store):
    """Application with its own in-memory store"""
    return create_app(Settings(database_url="sqlite://"), clock=clock, blob_store=blob_store)


@pytest_asyncio.fixture
async def async_client(app):
    """Async HTTP client bound to the app"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
