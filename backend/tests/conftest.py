"""Shared test configuration and fixtures.

Each test gets a fresh database (in-memory SQLite by default, or the async
URL in ``TEST_DATABASE_URL``) and a session wrapped in a transaction that
rolls back after the test. Uploaded files go to a per-test temp directory.
"""

import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  (registers every table on Base.metadata)
from app.auth.jwt import create_access_token
from app.database import Base, get_db
from app.main import app
from app.models.user import User
from app.uploads import FileStorage, get_file_storage

# ---------------------------------------------------------------------------
# Test database engine
# ---------------------------------------------------------------------------

_test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _make_engine() -> AsyncEngine:
    if _test_db_url.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        return create_async_engine(
            _test_db_url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(_test_db_url, pool_pre_ping=True)


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create all tables for one test and drop them afterwards."""
    engine = _make_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


# ---------------------------------------------------------------------------
# Per-test: transactional rollback for isolation
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back."""
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


@pytest.fixture
def file_storage(tmp_path) -> FileStorage:
    return FileStorage(tmp_path / "uploads", "/uploads")


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, file_storage: FileStorage) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB session and temp file storage."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: file_storage

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: users and bearer headers
# ---------------------------------------------------------------------------


def _bearer_headers(user_id: str) -> dict[str, str]:
    """Return Authorization headers carrying an access token for ``user_id``."""
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


async def _create_user(db_session: AsyncSession, prefix: str, is_admin: bool) -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        id=f"{prefix}-{unique}",
        email=f"{prefix}-{unique}@test.com",
        first_name=prefix.title(),
        last_name="Tester",
        is_admin=is_admin,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A regular, non-admin user."""
    return await _create_user(db_session, "user", is_admin=False)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin", is_admin=True)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Return Authorization headers for the regular test user."""
    return _bearer_headers(test_user.id)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict[str, str]:
    """Return Authorization headers for the admin user."""
    return _bearer_headers(admin_user.id)


# ---------------------------------------------------------------------------
# Convenience fixtures: property helpers
# ---------------------------------------------------------------------------


def _property_form(**overrides: str) -> dict[str, str]:
    """Multipart form fields for a valid property; every value is a string."""
    form = {
        "title": "Villa A",
        "description": "A family villa with a garden.",
        "type": "sale",
        "propertyType": "house",
        "price": "5000000",
        "surface": "200",
        "rooms": "5",
        "address": "Rue X",
        "city": "Nouakchott",
        "postalCode": "000",
    }
    form.update(overrides)
    return form


@pytest.fixture
def create_property(client: AsyncClient, admin_headers: dict):
    """Factory creating a property through the API and returning its JSON."""

    async def _create(**overrides: str) -> dict:
        response = await client.post("/api/properties", data=_property_form(**overrides), headers=admin_headers)
        assert response.status_code == 201, f"Failed to create test property: {response.text}"
        return response.json()

    return _create


@pytest_asyncio.fixture
async def test_property(create_property) -> dict:
    """Create and return a test property via the API."""
    return await create_property()


@pytest.fixture
def property_form():
    """Expose the valid-form builder to tests that post forms themselves."""
    return _property_form


@pytest.fixture
def headers_for():
    """Expose the bearer header builder for tests that mint their own users."""
    return _bearer_headers
