"""
模型统一导出：create_all 需要导入所有模型
"""

from todolist.db.models.base import Base
from todolist.db.models.todo import Todo

__all__ = ["Base", "Todo"]
