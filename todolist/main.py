"""
FastAPI 应用主入口
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from todolist import __version__
from todolist.api.health import router as health_router
from todolist.api.todos import router as todos_router
from todolist.config import Settings, get_settings
from todolist.db.engine import Database
from todolist.exceptions import register_exception_handlers
from todolist.observability.logging_config import setup_logging
from todolist.observability.metrics_middleware import MetricsMiddleware
from todolist.observability.request_logger import RequestLoggerMiddleware

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(application: FastAPI):
    """应用生命周期：启动时打开 SQLite 并建表（失败即退出），关闭时释放连接池"""
    settings: Settings = application.state.settings
    log.info("应用启动", env=settings.ENV, app=settings.APP_NAME)

    # FatalInitError 直接抛出，uvicorn 终止启动
    database = Database(settings)
    await database.init()
    application.state.database = database

    yield

    await database.dispose()
    log.info("应用关闭，资源已释放")


def create_app(settings: Settings | None = None) -> FastAPI:
    """应用工厂：测试可传入独立配置"""
    settings = settings or get_settings()

    application = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        lifespan=lifespan,
    )
    application.state.settings = settings

    # ── 中间件（执行顺序：从下往上注册，从上往下执行） ──
    application.add_middleware(RequestLoggerMiddleware)
    application.add_middleware(MetricsMiddleware)

    # ── Prometheus 指标端点 ──
    application.mount("/metrics", make_asgi_app())

    register_exception_handlers(application)

    # ── 路由注册 ──
    application.include_router(health_router)
    application.include_router(todos_router)

    return application


settings = get_settings()

# 初始化日志（在 import 时就生效）
setup_logging(env=settings.ENV)

app = create_app(settings)


def main() -> None:
    """命令行入口：启动 uvicorn"""
    import uvicorn

    log.info("服务启动", url=f"http://localhost:{settings.APP_PORT}")
    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    main()
