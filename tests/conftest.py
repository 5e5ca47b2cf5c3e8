"""
conftest.py — Shared Test Fixtures for the Todo Service

Provides a throwaway store file under tmp_path, an opened TodoStore
over it, and a FastAPI TestClient running a fresh app (lifespan
included) against the same file.

Business Rules:
- Every test gets its own store file (no shared state between tests)
- The app is built through create_app(), exactly as in production

Called by: all test files via pytest autodiscovery
Depends on: todo_service.main (create_app), todo_service.store, todo_service.config
"""

import json

import pytest
from fastapi.testclient import TestClient

from todo_service.config import Settings
from todo_service.main import create_app
from todo_service.store import TodoStore


@pytest.fixture()
def store_path(tmp_path):
    """Path of the store file; the file itself does not exist yet."""
    return tmp_path / "files" / "list.json"


@pytest.fixture()
def write_store(store_path):
    """Seed the store file with raw JSON-serializable content."""

    def _write(todos):
        store_path.parent.mkdir(parents=True, exist_ok=True)
        store_path.write_text(json.dumps(todos), encoding="utf-8")

    return _write


@pytest.fixture()
def store(store_path) -> TodoStore:
    """An opened TodoStore over store_path."""
    s = TodoStore(store_path)
    s.open()
    yield s
    s.close()


@pytest.fixture()
def settings(store_path) -> Settings:
    return Settings(store_path=str(store_path), _env_file=None)


@pytest.fixture()
def client(settings) -> TestClient:
    """TestClient for a fresh app bound to the per-test store file."""
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sample_todos(write_store):
    """Three stored todos with a gap in the ids (2 was deleted earlier)."""
    todos = [
        {"title": "Buy groceries", "description": "milk, eggs", "completed": False, "id": 1},
        {"title": "Walk dog", "completed": True, "id": 3},
        {"title": "File taxes", "priority": "high", "tags": ["money"], "id": 4},
    ]
    write_store(todos)
    return todos
