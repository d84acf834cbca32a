"""Shared pytest fixtures configured to use SQLite in-memory for tests."""

import logging
import os
from datetime import datetime, timedelta, timezone
from uuid import uuid4

# keep test runs from writing log files; must happen before notekeep is imported
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from notekeep.core.models.note import Note
from notekeep.core.models.user import User
from notekeep.database import Database
from notekeep.main import create_app
from notekeep.security.jwt import create_access_token
from notekeep.security.password import hash_password

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

TEST_PASSWORD = "TestPassword123!"


@pytest_asyncio.fixture
async def test_database():
    """A connected in-memory SQLite database with all tables created."""
    database = Database("sqlite+aiosqlite:///:memory:")
    await database.connect()
    await database.create_tables()
    try:
        yield database
    finally:
        await database.disconnect()


@pytest_asyncio.fixture
async def test_session(test_database):
    """Session on the test database."""
    async with test_database.session() as session:
        yield session


@pytest.fixture
def test_app(test_database):
    """App wired to the test database (lifespan is not run by ASGITransport)."""
    app = create_app()
    app.state.database = test_database
    return app


@pytest_asyncio.fixture
async def async_client(test_app):
    """Async HTTP client talking straight to the app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _make_user(session, email: str) -> User:
    user = User(email=email, password_hash=hash_password(TEST_PASSWORD))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(test_session):
    """Create a test user in the database."""
    return await _make_user(test_session, f"user_{uuid4().hex[:8]}@example.com")


@pytest_asyncio.fixture
async def other_user(test_session):
    """A second account, used to check owner scoping."""
    return await _make_user(test_session, f"other_{uuid4().hex[:8]}@example.com")


def bearer_for(user: User) -> dict:
    token = create_access_token({"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(test_user):
    """Authentication headers with a valid JWT for test_user."""
    return bearer_for(test_user)


@pytest.fixture
def other_headers(other_user):
    return bearer_for(other_user)


@pytest.fixture
def test_note_data():
    """Sample note data for testing."""
    return {
        "title": "Road Trip Plan",
        "content": "Fuel, snacks and a playlist",
        "tags": ["travel", "summer"],
        "color": "blue",
        "is_pinned": False,
    }


@pytest.fixture
def make_note(test_session):
    """Factory inserting notes directly, with an optional age for ordering tests."""

    async def _make(owner: User, title: str = "Note", content: str = "Body", *,
                    tags=None, color: str = "yellow", is_pinned: bool = False,
                    minutes_ago: int = 0) -> Note:
        created = datetime.now(timezone.utc) - timedelta(minutes=minutes_ago)
        note = Note(
            title=title,
            content=content,
            tags=list(tags or []),
            color=color,
            is_pinned=is_pinned,
            owner_id=owner.id,
            created_at=created,
            updated_at=created,
        )
        test_session.add(note)
        await test_session.commit()
        await test_session.refresh(note)
        return note

    return _make


@pytest_asyncio.fixture
async def test_note(make_note, test_user, test_note_data):
    """Create a test note in the database."""
    return await make_note(
        test_user,
        test_note_data["title"],
        test_note_data["content"],
        tags=test_note_data["tags"],
        color=test_note_data["color"],
        is_pinned=test_note_data["is_pinned"],
    )
