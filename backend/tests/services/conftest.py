"""Service test fixtures — async DB, fake geocoder, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager singleton patched to a manager bound to the test engine,
      so route dependencies and services share the test database
    - get_geocoder overridden with FakeGeocoder: no network in tests

Design Decisions:
    - SQLite in-memory with StaticPool: one shared connection, fast, no external dependency
      (FOR UPDATE is a no-op on SQLite; User.version still guards stale writes)
    - Manager built with __new__: skips pool arguments SQLite does not accept
"""

import pytest
from uuid import UUID, uuid4
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from yourplaces.api.deps import get_geocoder
from yourplaces.config import get_settings
from yourplaces.core.credentials import hash_password
from yourplaces.core.domain_types import Coordinates
from yourplaces.core.errors import UnprocessableAddressError
from yourplaces.core.referential_integrity import find_integrity_violations
from yourplaces.db.base import Base
from yourplaces.infrastructure.database import DatabaseSessionManager
from yourplaces.infrastructure.tokens import issue_access_token
from yourplaces.models.place import Place
from yourplaces.models.user import User
from yourplaces.services.place_coordinator import PlaceCoordinator
from yourplaces.services.user_store import UserStore
import yourplaces.infrastructure.database as db_module
from yourplaces.main import app

EMPIRE_STATE = Coordinates(lat=40.7484474, lng=-73.9871516)


class FakeGeocoder:
    """GeocodingResolver stand-in: fixed coordinates, configurable failures."""

    def __init__(self, coordinates: Coordinates = EMPIRE_STATE):
        self.coordinates = coordinates
        self.unresolvable: set[str] = set()
        self.calls: list[str] = []

    async def resolve(self, address: str) -> Coordinates:
        self.calls.append(address)
        if address in self.unresolvable:
            raise UnprocessableAddressError()
        return self.coordinates


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
def db_manager(test_engine, test_session_factory, monkeypatch):
    """DatabaseSessionManager bound to the test engine, installed as the singleton."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    monkeypatch.setattr(db_module, "db_manager", manager)
    return manager


@pytest.fixture
def geocoder():
    return FakeGeocoder()


@pytest.fixture
def coordinator(db_manager, geocoder):
    return PlaceCoordinator(db_manager, geocoder, max_attempts=2)


@pytest.fixture
async def client(db_manager, geocoder):
    """FastAPI test client wired to the test DB and the fake geocoder."""
    app.dependency_overrides[get_geocoder] = lambda: geocoder

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_manager):
    """Insert a user through the store; returns the committed User."""
    async def _make(
        name: str = "Max", email: str | None = None, password: str = "secret123",
    ) -> User:
        async with db_manager.transaction() as db:
            return await UserStore(db).create(
                name,
                email or f"{uuid4().hex[:10]}@example.com",
                hash_password(password, get_settings().password_hash_method),
            )
    return _make


@pytest.fixture
def auth_header():
    """Authorization header for a user id (the user need not exist)."""
    def _header(user_id: UUID, email: str = "caller@example.com") -> dict:
        settings = get_settings()
        token = issue_access_token(
            user_id, email,
            secret=settings.jwt_secret, algorithm=settings.jwt_algorithm,
        )
        return {"Authorization": f"Bearer {token}"}
    return _header


@pytest.fixture
def reload_user(test_session_factory):
    async def _reload(user_id: UUID) -> User | None:
        async with test_session_factory() as db:
            result = await db.execute(select(User).where(User.id == user_id))
            return result.scalar_one_or_none()
    return _reload


@pytest.fixture
def reload_place(test_session_factory):
    async def _reload(place_id: UUID) -> Place | None:
        async with test_session_factory() as db:
            result = await db.execute(select(Place).where(Place.id == place_id))
            return result.scalar_one_or_none()
    return _reload


@pytest.fixture
def count_places(test_session_factory):
    async def _count() -> int:
        async with test_session_factory() as db:
            result = await db.execute(select(Place.id))
            return len(result.all())
    return _count


@pytest.fixture
def integrity_violations(test_session_factory):
    """Audit the whole database against the User.places ↔ Place.creator invariant."""
    async def _audit() -> list[str]:
        async with test_session_factory() as db:
            users = (await db.execute(select(User.id, User.places))).all()
            places = (await db.execute(select(Place.id, Place.creator_id))).all()
        return find_integrity_violations(
            {uid: refs for uid, refs in users},
            {pid: cid for pid, cid in places},
        )
    return _audit
