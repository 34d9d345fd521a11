"""
Todo 页面接口：列表页 + 表单提交

端点：
- /        — 列表页（任意方法，按 GET 处理）
- /create  — POST 表单新增，其他方法返回 405
- /delete  — 按 query 参数 id 删除（任意方法）

create / delete 成功后 303 重定向回列表页；StorageError 由全局处理器转为 500。
"""

import structlog
from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import HTMLResponse, RedirectResponse

from todolist.todo.renderer import render_page
from todolist.todo.store import TodoStore, get_todo_store

router = APIRouter(tags=["待办"])
log = structlog.get_logger()

ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


@router.api_route("/", methods=ANY_METHOD, response_class=HTMLResponse)
async def index(store: TodoStore = Depends(get_todo_store)):
    """列表页"""
    todos = await store.list_all()
    return HTMLResponse(render_page(todos))


@router.post("/create")
async def create(
    title: str = Form(default=""),
    store: TodoStore = Depends(get_todo_store),
):
    """新增 Todo，标题只做存在性处理（缺省为空串）"""
    await store.create(title)
    return RedirectResponse(url="/", status_code=303)


@router.api_route("/delete", methods=ANY_METHOD)
async def delete(
    todo_id: str | None = Query(default=None, alias="id"),
    store: TodoStore = Depends(get_todo_store),
):
    """删除 Todo，id 不存在或非数字时为空操作"""
    await store.delete(todo_id)
    return RedirectResponse(url="/", status_code=303)
