"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for database sessions, the chat host, test
clients and commonly used test data.

NOTE: Heavy imports (main, models) are done lazily inside fixtures
to avoid loading the entire app for tests that don't need it.
"""

import gc
import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Type hints only - not imported at runtime
if TYPE_CHECKING:
    from typing import AsyncGenerator

    from httpx import AsyncClient
    from infrastructure.database import models
    from services.chat_host import ChatHost
    from sqlalchemy.ext.asyncio import AsyncSession


RULES_URL = "http://rules.test/static/defaultrules.json"

# Files that use database fixtures
DB_FIXTURE_FILES = {
    "test_chat_persistence.py",
    "test_crud.py",
}


def pytest_collection_modifyitems(items):
    """Auto-apply markers based on test directory and fixtures used."""
    for item in items:
        filepath = str(item.fspath)
        filename = Path(filepath).name

        # Apply 'unit' marker to tests in unit directory
        if "/tests/unit/" in filepath:
            item.add_marker(pytest.mark.unit)
            # Mark database-using tests
            if filename in DB_FIXTURE_FILES:
                item.add_marker(pytest.mark.db)
        # Apply 'integration' marker to tests in integration directory
        elif "/tests/integration/" in filepath:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.db)  # All integration tests use db


@pytest.fixture(autouse=True)
def cleanup_after_test():
    """Run garbage collection after each test to free memory."""
    yield
    gc.collect()


@pytest.fixture(autouse=True)
def fresh_write_lock():
    """The SQLite write lock must not outlive the event loop of one test."""
    from infrastructure.database.connection import reset_write_lock

    reset_write_lock()
    yield
    reset_write_lock()


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment changes made by a test do not leak."""
    from core import reset_settings

    reset_settings()
    yield
    reset_settings()


# ============================================================================
# Database fixtures (only loaded when needed)
# ============================================================================


@pytest.fixture
async def test_engine():
    """
    Create an in-memory database engine for one test.

    StaticPool keeps a single connection so every session sees the same database.
    """
    from infrastructure.database.connection import Base
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Create session factory for tests."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory) -> "AsyncGenerator[AsyncSession, None]":
    """Provide a database session on the test database."""
    async with test_session_factory() as session:
        yield session


# ============================================================================
# Rules fetch fixtures
# ============================================================================


@pytest.fixture
def default_rules() -> dict:
    """The bundled default rules document."""
    path = Path(__file__).parent.parent / "static" / "defaultrules.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def rules_requests() -> list:
    """Requests seen by the mocked rules endpoint."""
    return []


@pytest.fixture
async def rules_client(default_rules, rules_requests):
    """httpx client whose transport serves the default rules document."""
    import httpx

    def handler(request: httpx.Request) -> httpx.Response:
        rules_requests.append(request)
        return httpx.Response(200, json=default_rules)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


@pytest.fixture
async def failing_rules_client(rules_requests):
    """httpx client whose rules endpoint always answers 500."""
    import httpx

    def handler(request: httpx.Request) -> httpx.Response:
        rules_requests.append(request)
        return httpx.Response(500, text="boom")

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        yield client


# ============================================================================
# Chat host / App / Client fixtures (only loaded when needed)
# ============================================================================


@pytest.fixture
def test_settings():
    """Settings with an immediate save delay and a mocked rules URL."""
    from core.settings import Settings

    return Settings(default_rules_url=RULES_URL, metadata_save_delay=0.0)


@pytest.fixture
async def chat_host(test_session_factory, rules_client, test_settings) -> "AsyncGenerator[ChatHost, None]":
    """Chat host backed by the test database."""
    from services.chat_host import ChatHost

    host = ChatHost(test_session_factory, rules_client, settings=test_settings)
    yield host
    await host.flush()


def _get_app():
    """Lazy import of the FastAPI app."""
    from main import app

    return app


@pytest.fixture
async def client(test_session_factory, chat_host: "ChatHost") -> "AsyncGenerator[AsyncClient, None]":
    """Create a test client bound to the test database and chat host."""
    from httpx import ASGITransport, AsyncClient
    from infrastructure.database.connection import get_db

    app = _get_app()
    app.state.chat_host = chat_host

    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.chat_host = None


# ============================================================================
# Sample data fixtures
# ============================================================================


@pytest.fixture
async def sample_chat(test_db: "AsyncSession") -> "models.Chat":
    """Create a sample chat for testing."""
    from infrastructure.database import models

    chat = models.Chat(name="test_chat", persona="hero.png")
    test_db.add(chat)
    await test_db.commit()
    await test_db.refresh(chat)
    return chat


@pytest.fixture
async def other_chat(test_db: "AsyncSession") -> "models.Chat":
    """A second chat with its own persona."""
    from infrastructure.database import models

    chat = models.Chat(name="other_chat", persona="rogue.png")
    test_db.add(chat)
    await test_db.commit()
    await test_db.refresh(chat)
    return chat


@pytest.fixture
def in_memory_chat():
    """A ChatState with no database behind it."""
    from infrastructure.host import ChatState

    return ChatState(chat_id=1, persona="hero.png")
