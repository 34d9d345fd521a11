"""
全局配置模块：通过 pydantic-settings 读取 .env 环境变量

所有字段均有默认值，零配置即可启动（监听 8080，数据落在 ./app.db）。
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用全局配置，从 .env 文件加载"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── 数据库 ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./app.db"
    DB_ECHO: bool = False  # 打印 SQL 日志，调试时可在 .env 设为 true

    # ── 应用 ──
    ENV: str = "development"  # development | production
    APP_NAME: str = "todolist"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080

    @field_validator("DATABASE_URL")
    @classmethod
    def _check_sqlite_url(cls, v: str) -> str:
        """存储层只支持嵌入式 SQLite 单文件库"""
        if not v.startswith("sqlite"):
            raise ValueError("DATABASE_URL 必须使用 sqlite 方言，例如 sqlite+aiosqlite:///./app.db")
        return v


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()
