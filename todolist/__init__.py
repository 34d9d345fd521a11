"""
todolist：基于 FastAPI + SQLite 的极简待办清单
"""

__version__ = "0.1.0"
