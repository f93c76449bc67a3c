"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.models import Base


@pytest.fixture(scope="function")
def db_session():
    """Provides an isolated in-memory SQLite DB session for tests.

    StaticPool keeps a single connection so every session (including the ones
    FastAPI opens through get_db) sees the same in-memory database.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def client(db_session):
    """TestClient with get_db bound to the test session."""
    from app.db.session import get_db
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def fake_agent_factory():
    """Build a stand-in for pydantic_ai.Agent whose run() returns the given output.

    messages is what the run result reports from all_messages().
    """

    def _factory(output=None, side_effect=None, messages=None) -> MagicMock:
        agent = MagicMock()
        if side_effect is not None:
            agent.run = AsyncMock(side_effect=side_effect)
        else:
            result = MagicMock(output=output)
            result.all_messages.return_value = list(messages or [])
            agent.run = AsyncMock(return_value=result)
        return agent

    return _factory
