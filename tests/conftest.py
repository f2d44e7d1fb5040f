"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from todos.api.app import create_app
from todos.config import Settings
from todos.database import Database
from todos.store import TodoStore


@pytest.fixture(scope="function")
def database_url(tmp_path: Path) -> str:
    """A file-backed SQLite database private to the test."""
    return f"sqlite:///{tmp_path / 'todos.db'}"


@pytest.fixture(scope="function")
def test_settings(database_url: str) -> Settings:
    return Settings(
        database_url=database_url,
        auto_create_schema=True,
        seed_on_startup=True,
        debug=False,
        log_level="WARNING",
    )


@pytest_asyncio.fixture(scope="function")
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """Provide an initialized database with an empty todos table."""
    db = Database(app_settings=test_settings)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture(scope="function")
def store(database: Database) -> TodoStore:
    return TodoStore(database)


@pytest.fixture(scope="function")
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """HTTP client against a fully started app (schema created, seed data loaded)."""
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def run_graphql(client: TestClient):
    """POST a GraphQL operation and return the decoded response body."""

    def _run(query: str, variables: dict[str, Any] | None = None) -> Any:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        resp = client.post("/graphql", json=payload)
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _run


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
