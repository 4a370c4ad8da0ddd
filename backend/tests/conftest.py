"""Pytest configuration and fixtures for backend tests."""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

# Add backend to path
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

from app.core.ai_service import AIService
from app.db.persistence_service import PersistenceService
from app.db.session import Database

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database():
    """Fresh in-memory database with all tables created."""
    db = Database(TEST_DATABASE_URL)
    await db.create_tables()
    yield db
    await db.dispose()


@pytest.fixture
def persistence(database) -> PersistenceService:
    return PersistenceService(database)


def make_message(text="generated code", input_tokens=10, output_tokens=20):
    """Shape of an Anthropic Messages API response."""
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=text)],
        usage=SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens),
    )


@pytest.fixture
def mock_anthropic_client():
    """Create mock AsyncAnthropic client."""
    mock = MagicMock()
    mock.messages = MagicMock()
    mock.messages.create = AsyncMock(return_value=make_message())
    return mock


@pytest.fixture
def ai_service(mock_anthropic_client) -> AIService:
    """Configured AI service backed by the mock client."""
    return AIService(model="claude-test", timeout=5, client=mock_anthropic_client)


@pytest.fixture
def unconfigured_ai_service() -> AIService:
    return AIService(api_key=None)


@pytest.fixture
def sample_project_data():
    """Sample project payload for testing."""
    return {
        "name": "Todo App",
        "description": "A simple todo list",
    }
