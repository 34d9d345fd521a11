"""
数据库引擎：AsyncEngine + AsyncSession 工厂

Database 由应用 lifespan 创建并挂到 app.state.database，
请求处理通过依赖注入拿到会话，不使用模块级全局连接。
"""

from collections.abc import AsyncIterator

import structlog
from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from todolist.config import Settings
from todolist.db.models import Base
from todolist.exceptions import FatalInitError
from todolist.observability.metrics import ERROR_TOTAL

log = structlog.get_logger()


class Database:
    """进程级存储句柄：持有引擎连接池与会话工厂"""

    def __init__(self, settings: Settings):
        self.url = settings.DATABASE_URL
        self.engine: AsyncEngine = create_async_engine(self.url, echo=settings.DB_ECHO)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def init(self) -> None:
        """
        打开数据库并建表（CREATE TABLE IF NOT EXISTS，重启幂等）。

        Raises:
            FatalInitError: 库文件无法打开或建表失败
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            ERROR_TOTAL.labels(error_type="fatal_init").inc()
            log.error("数据库初始化失败，进程退出", url=self.url, error=str(e))
            await self.engine.dispose()
            raise FatalInitError(f"无法初始化数据库 {self.url}: {e}") from e
        log.info("SQLite 连接正常，todos 表就绪", url=self.url)

    async def dispose(self) -> None:
        """关闭连接池"""
        await self.engine.dispose()


def get_database(request: Request) -> Database:
    """FastAPI 依赖注入：获取 lifespan 创建的 Database"""
    return request.app.state.database


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI 依赖注入：获取数据库会话"""
    async with get_database(request).session_factory() as session:
        yield session
