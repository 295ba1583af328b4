"""Shared fixtures: in-memory SQLite database, app client, recording mailer."""

import os

# Set env before importing app components
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from intradesk.database import Base, get_db
from intradesk.main import app
from intradesk.services.mailer import Mailer, NotificationResult, get_mailer
from intradesk.services.settings_service import SettingsService, get_settings_service


class RecordingMailer(Mailer):
    """Mailer that records notifications instead of talking to SMTP."""

    def __init__(self):
        super().__init__()
        self.sent: list[tuple[list[str], str, str]] = []
        self.fail = False

    async def notify(self, recipients, subject, body):
        recipients = [r for r in recipients if r]
        if not recipients:
            return NotificationResult(sent=False)
        if self.fail:
            return NotificationResult(sent=False, warning="Notification e-mail could not be delivered")
        self.sent.append((recipients, subject, body))
        return NotificationResult(sent=True)


@pytest.fixture
async def engine():
    """Fresh in-memory database per test."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    """Session for seeding data directly."""
    async with session_maker() as session:
        yield session


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def settings_service():
    return SettingsService()


@pytest.fixture
async def client(session_maker, mailer, settings_service):
    """AsyncClient wired to the test database, a fresh settings cache and the recording mailer."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings_service] = lambda: settings_service
    app.dependency_overrides[get_mailer] = lambda: mailer
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def score_sheet():
    """Factory for a valid score sheet: every item 3 except potential 6 (total 33)."""

    def _make(**overrides):
        scores = {
            "accuracy": 3,
            "discipline": 3,
            "cooperation": 3,
            "proactiveness": 3,
            "agility": 3,
            "judgment": 3,
            "expression": 3,
            "comprehension": 3,
            "interpersonal": 3,
            "potential": 6,
        }
        scores.update(overrides)
        return scores

    return _make
