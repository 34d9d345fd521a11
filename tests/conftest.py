from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from todolist.config import Settings
from todolist.db.engine import Database
from todolist.main import create_app
from todolist.todo.store import TodoStore


def _sqlite_url(path: Path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(DATABASE_URL=_sqlite_url(tmp_path / "test.db"), _env_file=None)


@pytest.fixture
async def database(settings: Settings):
    db = Database(settings)
    await db.init()
    yield db
    await db.dispose()


@pytest.fixture
def store(database: Database) -> TodoStore:
    return TodoStore(database.session_factory)


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
