from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from todolist.config import Settings
from todolist.db.engine import Database
from todolist.exceptions import FatalInitError
from todolist.main import create_app
from todolist.todo.store import TodoStore


@pytest.mark.asyncio
async def test_init_creates_todos_table(database: Database) -> None:
    async with database.engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        columns = await conn.run_sync(
            lambda sync_conn: [c["name"] for c in inspect(sync_conn).get_columns("todos")]
        )

    assert "todos" in tables
    assert columns == ["id", "title"]


@pytest.mark.asyncio
async def test_init_is_idempotent_and_keeps_rows(settings: Settings) -> None:
    first = Database(settings)
    await first.init()
    await TodoStore(first.session_factory).create("survives restart")
    await first.dispose()

    second = Database(settings)
    await second.init()
    items = await TodoStore(second.session_factory).list_all()
    await second.dispose()

    assert [item.title for item in items] == ["survives restart"]


@pytest.mark.asyncio
async def test_init_raises_fatal_error_when_file_cannot_be_opened(tmp_path: Path) -> None:
    missing = tmp_path / "missing-dir" / "app.db"
    settings = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{missing}", _env_file=None)

    with pytest.raises(FatalInitError):
        await Database(settings).init()


def test_app_refuses_to_start_when_database_cannot_be_opened(tmp_path: Path) -> None:
    missing = tmp_path / "missing-dir" / "app.db"
    settings = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{missing}", _env_file=None)

    with pytest.raises(FatalInitError):
        with TestClient(create_app(settings)):
            pass
