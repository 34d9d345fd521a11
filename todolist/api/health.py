"""
健康检查接口：探活 + SQLite 连接状态
"""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todolist.db.engine import get_db

router = APIRouter(tags=["健康检查"])
log = structlog.get_logger()


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """健康检查：校验 SQLite 连接"""
    status = {"status": "ok", "sqlite": "ok"}

    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        status["sqlite"] = f"error: {e}"
        status["status"] = "degraded"
        log.error("SQLite 健康检查失败", error=str(e))

    return status
