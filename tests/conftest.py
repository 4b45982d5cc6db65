"""Shared test configuration and fixtures.

Uses a transactional rollback strategy per test for full isolation:
- Each test gets its own connection-level transaction that rolls back after the test.
- ``TEST_DATABASE_URL`` defaults to in-memory SQLite; point it at a PostgreSQL
  database to run the suite against the production dialect.
"""

import uuid
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from lodgedesk import models  # noqa: F401
from lodgedesk.auth.jwt import create_token_pair
from lodgedesk.auth.passwords import hash_password
from lodgedesk.config import settings
from lodgedesk.database import Base, get_db
from lodgedesk.main import app
from lodgedesk.models.lodge_settings import LodgeSettings
from lodgedesk.models.room import Room
from lodgedesk.models.user import User
from lodgedesk.notifications.dependencies import get_dispatcher
from lodgedesk.notifications.dispatcher import NotificationDispatcher
from lodgedesk.notifications.rate_limit import SlidingWindowRateLimiter
from lodgedesk.notifications.senders import SMSMessage, SMSResult
from lodgedesk.services.locks import RoomLockRegistry

# ---------------------------------------------------------------------------
# Test database engine
# ---------------------------------------------------------------------------

_test_db_url = settings.test_database_url


def _make_engine():
    if _test_db_url.startswith("sqlite"):
        # One shared connection so the in-memory database survives across sessions
        return create_async_engine(
            _test_db_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(_test_db_url, echo=False, pool_pre_ping=True)


@pytest_asyncio.fixture
async def test_engine():
    """Engine with a freshly created schema, dropped again after the test."""
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
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Yield an async session wrapped in a transaction that always rolls back.

    Commits issued by the workflows end the session's own transaction only;
    the outer connection transaction is rolled back at teardown.
    """
    async with test_engine.connect() as connection:
        transaction = await connection.begin()
        session = AsyncSession(bind=connection, expire_on_commit=False)

        try:
            yield session
        finally:
            await session.close()
            await transaction.rollback()


# ---------------------------------------------------------------------------
# Notifications: recording channel and a dispatcher bound to the test session
# ---------------------------------------------------------------------------


class RecordingSender:
    """SMS channel double that keeps every message it is asked to send."""

    name = "recording"

    def __init__(self) -> None:
        self.sent: list[SMSMessage] = []
        self.fail_with: str | None = None
        self.raise_with: Exception | None = None

    async def send(self, message: SMSMessage) -> SMSResult:
        if self.raise_with is not None:
            raise self.raise_with
        self.sent.append(message)
        if self.fail_with is not None:
            return SMSResult(success=False, error=self.fail_with)
        return SMSResult(success=True, message_id=f"msg-{len(self.sent)}")


@pytest.fixture
def sms_sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def room_lock_registry() -> RoomLockRegistry:
    return RoomLockRegistry()


@pytest_asyncio.fixture
async def dispatcher(db_session: AsyncSession, sms_sender: RecordingSender) -> NotificationDispatcher:
    @asynccontextmanager
    async def session_factory() -> AsyncIterator[AsyncSession]:
        yield db_session

    return NotificationDispatcher(
        sender=sms_sender,
        session_factory=session_factory,
        rate_limiter=SlidingWindowRateLimiter(max_events=5, window_seconds=60.0),
        country_code="91",
    )


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    dispatcher: NotificationDispatcher,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to the test DB session and dispatcher."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: authenticated staff user
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create and return a staff user directly in the DB."""
    user = User(
        username=f"staff-{uuid.uuid4().hex[:8]}",
        hashed_password=hash_password("testpass123"),
        is_active=True,
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Return Authorization headers for the test user."""
    tokens = create_token_pair(str(test_user.id), test_user.username)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


# ---------------------------------------------------------------------------
# Convenience fixtures: rooms and lodge settings
# ---------------------------------------------------------------------------


@pytest.fixture
def make_room(db_session: AsyncSession):
    """Factory inserting a room directly in the DB."""

    async def _make_room(
        room_number: str,
        base_price: str = "1000.00",
        status: str = "available",
        room_type: str = "double",
    ) -> Room:
        room = Room(room_number=room_number, room_type=room_type, base_price=Decimal(base_price), status=status)
        db_session.add(room)
        await db_session.flush()
        await db_session.refresh(room)
        return room

    return _make_room


@pytest_asyncio.fixture
async def room_101(make_room) -> Room:
    """Room 101 at Rs.1000 per day."""
    return await make_room("101", "1000.00")


@pytest_asyncio.fixture
async def lodge_settings(db_session: AsyncSession) -> LodgeSettings:
    lodge = LodgeSettings(
        name="Test Lodge",
        address="1 Station Road",
        contact_number="+919000000000",
        discount_rate=Decimal("0.00"),
    )
    db_session.add(lodge)
    await db_session.flush()
    await db_session.refresh(lodge)
    return lodge
