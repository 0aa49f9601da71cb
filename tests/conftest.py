"""
Pytest configuration and fixtures.
Provides an in-memory database, seeded users with tokens and an HTTP
client whose requests run against the test database.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db import session as db_session
from app.db.base import Base
from app.db.session import get_db
from app.models.user import User, UserRole, UserStatus
from app.schemas.client import ClientCreate
from app.schemas.quote import QuoteCreate, QuoteItemCreate
from app.services.auth_service import AuthService
from app.services.client_service import ClientService
from app.services.quote_service import QuoteService


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_session_maker(monkeypatch):
    """
    Fresh in-memory database per test.
    The module-level engine and sessionmaker point at it for code that
    opens its own sessions (health checks).
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    monkeypatch.setattr(db_session, "engine", test_engine)
    monkeypatch.setattr(db_session, "async_session_maker", session_maker)

    yield session_maker

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_db_session(test_session_maker):
    """Session for calling services directly."""
    async with test_session_maker() as session:
        yield session


async def _add_user(session: AsyncSession, email: str, name: str, role: UserRole, status=UserStatus.ACTIVE) -> User:
    user = User(email=email, name=name, role=role, status=status)
    session.add(user)
    await session.commit()
    return user


@pytest.fixture
async def admin_user(test_db_session) -> User:
    return await _add_user(test_db_session, "admin@example.com", "Admin", UserRole.ADMIN)


@pytest.fixture
async def regular_user(test_db_session) -> User:
    return await _add_user(test_db_session, "sales@example.com", "Sales", UserRole.USER)


@pytest.fixture
async def inactive_user(test_db_session) -> User:
    return await _add_user(test_db_session, "gone@example.com", "Gone", UserRole.USER, UserStatus.INACTIVE)


@pytest.fixture
def auth_headers(regular_user) -> dict:
    return {"Authorization": f"Bearer {AuthService.issue_token(regular_user)}"}


@pytest.fixture
def admin_headers(admin_user) -> dict:
    return {"Authorization": f"Bearer {AuthService.issue_token(admin_user)}"}


@pytest.fixture(scope="function")
async def test_client(test_session_maker):
    """
    HTTP client against the app with get_db bound to the test database.
    """
    async def override_get_db():
        async with test_session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def acme_client(test_db_session, regular_user):
    """A client (customer) record."""
    return await ClientService(test_db_session).create_client(
        ClientCreate(name="Acme Corp", email="billing@acme.example", contact_person="Jane Roe"),
        created_by=regular_user.id,
    )


@pytest.fixture
def make_quote(test_db_session, regular_user, acme_client):
    """Factory creating a quote for the acme client; items are (quantity, unit_price) pairs."""
    async def _make_quote(items=((2, "100.00"), (1, "50.00")), **fields):
        data = QuoteCreate(
            client_id=fields.pop("client_id", acme_client.id),
            items=[
                QuoteItemCreate(description=f"Item {index + 1}", quantity=qty, unit_price=Decimal(price))
                for index, (qty, price) in enumerate(items)
            ],
            **fields,
        )
        return await QuoteService(test_db_session).create_quote(data, created_by=regular_user.id)

    return _make_quote
