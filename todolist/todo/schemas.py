"""
Todo 数据模型
"""

from pydantic import BaseModel, ConfigDict, field_validator


class TodoItem(BaseModel):
    """单个 Todo 条目"""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def coerce_null_title(cls, v: object) -> str:
        """title 列允许 NULL，对外统一呈现为空字符串"""
        return "" if v is None else str(v)
