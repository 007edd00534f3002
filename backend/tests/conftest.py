"""
Notebox Backend - Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── sqlite_engine: async SQLite engine in a temp dir, schema synced
    ├── sql_repository: SqlNoteRepository on top of sqlite_engine
    ├── repository: parametrized over both implementations
    ├── mock_repository: AsyncMock standing in for a failing/controlled store
    └── test_client: HTTPX AsyncClient talking to an app on `repository`
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DB_LOG_STATEMENTS"] = "false"

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from notebox.bootstrap import sync_schema  # noqa: E402
from notebox.main import create_app  # noqa: E402
from notebox.models.note import Note  # noqa: E402
from notebox.repositories.base import NoteRepository  # noqa: E402
from notebox.repositories.memory import InMemoryNoteRepository  # noqa: E402
from notebox.repositories.sql import SqlNoteRepository  # noqa: E402


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    """
    Async SQLite engine backed by a file in tmp_path.

    A file (not :memory:) so every pooled connection sees the same data.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    await sync_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_repository(sqlite_engine):
    return SqlNoteRepository.from_engine(sqlite_engine)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def repository(request, tmp_path):
    """Runs a test once against each NoteRepository implementation."""
    if request.param == "memory":
        yield InMemoryNoteRepository()
        return

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'contract.db'}")
    await sync_schema(engine)
    try:
        yield SqlNoteRepository.from_engine(engine)
    finally:
        await engine.dispose()


@pytest.fixture
def mock_repository():
    """
    AsyncMock implementing the NoteRepository interface.

    Usage:
        mock_repository.find_by_id.return_value = None
        mock_repository.find_all.side_effect = OSError("connection reset")
    """
    return AsyncMock(spec=NoteRepository)


@pytest.fixture
def sample_note():
    now = datetime.now(timezone.utc)
    return Note(
        id=str(uuid4()),
        title="Groceries",
        content="eggs, milk",
        created_at=now,
        updated_at=now,
    )


@pytest_asyncio.fixture
async def test_client(repository):
    """
    HTTPX AsyncClient wired to an app on each repository implementation.

    ASGITransport does not run the lifespan; the repository is injected, so
    the SQL variant only touches its temporary SQLite file.
    """
    app = create_app(repository=repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def failing_client(mock_repository):
    """Client whose store raises on every call."""
    for method in ("find_all", "find_by_id", "create", "update", "delete"):
        getattr(mock_repository, method).side_effect = OSError("connection reset")
    app = create_app(repository=mock_repository)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
