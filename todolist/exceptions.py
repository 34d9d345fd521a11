"""
异常体系 + FastAPI 异常处理器注册

- FatalInitError：启动期存储不可用，进程直接退出
- StorageError：请求期数据库操作失败，转换为 500 纯文本响应
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from todolist.observability.metrics import ERROR_TOTAL

log = structlog.get_logger()


class TodoListError(Exception):
    """todolist 异常基类"""


class FatalInitError(TodoListError):
    """存储初始化失败（打不开库文件 / 建表失败），不重试"""


class StorageError(TodoListError):
    """list / create / delete 执行失败"""


async def _storage_error_handler(request: Request, exc: StorageError) -> PlainTextResponse:
    # 原样暴露数据库错误信息，仅适用于本地单用户场景
    log.error("存储操作失败", method=request.method, path=request.url.path, error=str(exc))
    ERROR_TOTAL.labels(error_type="storage_error").inc()
    return PlainTextResponse(str(exc), status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""
    app.add_exception_handler(StorageError, _storage_error_handler)
