"""
Todo 模块：待办条目的 SQLite 持久化与列表页渲染
"""

from todolist.todo.renderer import render_page
from todolist.todo.schemas import TodoItem
from todolist.todo.store import TodoStore, get_todo_store

__all__ = ["TodoItem", "TodoStore", "get_todo_store", "render_page"]
