"""
待办条目模型：单表 todos(id, title)

id 使用 SQLite AUTOINCREMENT，删除后的 id 不会被复用。
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from todolist.db.models.base import Base


class Todo(Base):
    """待办条目"""

    __tablename__ = "todos"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True, comment="标题，创建后不可修改")

    def __repr__(self) -> str:
        return f"Todo(id={self.id!r}, title={self.title!r})"
