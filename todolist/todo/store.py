"""
Todo SQLite 存储层

三个固定操作，每个都是一条原子 SQL：
- list_all：SELECT 全部行，按 id 排序（即插入顺序，调用方不应依赖顺序）
- create：INSERT 一行，id 由 SQLite 分配
- delete：按 id DELETE，未命中视为成功的空操作

所有 SQLAlchemyError 统一包装为 StorageError，由异常处理器转换为 500。
"""

import structlog
from fastapi import Request
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todolist.db.engine import get_database
from todolist.db.models.todo import Todo
from todolist.exceptions import StorageError
from todolist.observability.metrics import TODO_OPERATION_TOTAL
from todolist.todo.schemas import TodoItem

log = structlog.get_logger()

# SQLite INTEGER 为有符号 64 位
_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1


def parse_todo_id(raw: int | str | None) -> int | None:
    """将请求中的原始 id 解析为整数，无法解析或越界时返回 None"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(raw.strip())
        except ValueError:
            return None
    if not _SQLITE_INT_MIN <= value <= _SQLITE_INT_MAX:
        return None
    return value


class TodoStore:
    """todos 表的 CRUD（无 update）"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_all(self) -> list[TodoItem]:
        """读取全部 Todo，表为空时返回空列表"""
        try:
            async with self._session_factory() as db:
                result = await db.execute(select(Todo).order_by(Todo.id))
                rows = result.scalars().all()
        except SQLAlchemyError as e:
            TODO_OPERATION_TOTAL.labels(operation="list", status="error").inc()
            raise StorageError(str(e)) from e

        TODO_OPERATION_TOTAL.labels(operation="list", status="success").inc()
        return [TodoItem.model_validate(row) for row in rows]

    async def create(self, title: str) -> TodoItem:
        """新增一条 Todo，不校验 title 内容与长度"""
        try:
            async with self._session_factory() as db:
                todo = Todo(title=title)
                db.add(todo)
                await db.commit()
                item = TodoItem.model_validate(todo)
        except SQLAlchemyError as e:
            TODO_OPERATION_TOTAL.labels(operation="create", status="error").inc()
            raise StorageError(str(e)) from e

        TODO_OPERATION_TOTAL.labels(operation="create", status="success").inc()
        log.info("Todo 已创建", todo_id=item.id)
        return item

    async def delete(self, todo_id: int | str | None) -> int:
        """
        按 id 删除 Todo。

        Args:
            todo_id: 请求中的原始 id（字符串或整数）

        Returns:
            实际删除的行数（0 或 1）；id 不存在或无法解析时为 0
        """
        parsed = parse_todo_id(todo_id)
        if parsed is None:
            log.warning("忽略无效的 Todo id", raw_id=todo_id)
            TODO_OPERATION_TOTAL.labels(operation="delete", status="success").inc()
            return 0

        try:
            async with self._session_factory() as db:
                result = await db.execute(delete(Todo).where(Todo.id == parsed))
                deleted = result.rowcount
                await db.commit()
        except SQLAlchemyError as e:
            TODO_OPERATION_TOTAL.labels(operation="delete", status="error").inc()
            raise StorageError(str(e)) from e

        TODO_OPERATION_TOTAL.labels(operation="delete", status="success").inc()
        log.info("Todo 已删除", todo_id=parsed, deleted=deleted)
        return deleted


def get_todo_store(request: Request) -> TodoStore:
    """FastAPI 依赖注入：基于 app.state.database 构造 TodoStore"""
    return TodoStore(get_database(request).session_factory)
