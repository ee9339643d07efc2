import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("LOG_DIR", "logs")

import uuid
import pytest
from fastapi.testclient import TestClient

from extrovertidos.core.backend import BackendClient
from extrovertidos.core.cache import TTLCache
from extrovertidos.core.constants import PublicationStatusEnum, RoleEnum
from extrovertidos.core.database import Base, SessionLocal, engine, init_db
from extrovertidos.models.business import Business
from extrovertidos.models.event import Event
from extrovertidos.models.profile import Profile
from extrovertidos.utils import deps as deps_utils
from tests.helpers.fakes import FakeClock

@pytest.fixture(scope="session", autouse=True)
def _test_database_file():
    yield
    engine.dispose()
    if engine.url.drivername.startswith("sqlite") and os.path.exists("./test.db"):
        os.remove("./test.db")

@pytest.fixture(scope="function")
def database():
    Base.metadata.drop_all(bind=engine)
    init_db(bind=engine)
    yield engine

@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def cache(clock):
    return TTLCache.from_settings(clock=clock)

@pytest.fixture
def backend(database):
    return BackendClient(SessionLocal)

@pytest.fixture(scope="function")
def client(backend, cache):
    import main
    main.app.dependency_overrides[deps_utils.get_backend] = lambda: backend
    main.app.dependency_overrides[deps_utils.get_cache] = lambda: cache
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()

def _persist(obj):
    db = SessionLocal()
    try:
        db.add(obj)
        db.commit()
        db.refresh(obj)
        return obj
    finally:
        db.close()

@pytest.fixture
def profile_factory(database):
    def _profile_factory(role: RoleEnum = RoleEnum.USER, **kwargs):
        suffix = uuid.uuid4().hex[:8]
        kwargs.setdefault("name", f"User {suffix}")
        kwargs.setdefault("email", f"user-{suffix}@test.com")
        return _persist(Profile(role=getattr(role, "value", role), **kwargs))
    return _profile_factory

@pytest.fixture
def event_factory(database):
    def _event_factory(owner: Profile, status: PublicationStatusEnum = PublicationStatusEnum.PENDING, **kwargs):
        kwargs.setdefault("title", f"Panorama {uuid.uuid4().hex[:6]}")
        kwargs.setdefault("city", "Valparaíso")
        return _persist(Event(user_id=owner.id, status=getattr(status, "value", status), **kwargs))
    return _event_factory

@pytest.fixture
def business_factory(database):
    def _business_factory(owner: Profile, status: PublicationStatusEnum = PublicationStatusEnum.PENDING, **kwargs):
        kwargs.setdefault("name", f"Negocio {uuid.uuid4().hex[:6]}")
        return _persist(Business(user_id=owner.id, status=getattr(status, "value", status), **kwargs))
    return _business_factory

@pytest.fixture
def admin(profile_factory):
    return profile_factory(RoleEnum.ADMIN, name="Admin")

@pytest.fixture
def moderator(profile_factory):
    return profile_factory(RoleEnum.MODERATOR, name="Moderator")

@pytest.fixture
def regular_user(profile_factory):
    return profile_factory(RoleEnum.USER, name="Regular")
