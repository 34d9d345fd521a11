"""
列表页渲染：固定的 Jinja2 模板，autoescape 防止标题注入标签
"""

from collections.abc import Iterable

from jinja2 import Environment

from todolist.todo.schemas import TodoItem

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Todo List</title>
</head>
<body>
  <h1>Todo List</h1>
  <form action="/create" method="POST">
    <input type="text" name="title" placeholder="New Todo" required>
    <button type="submit">Add</button>
  </form>
  <ul>
  {%- for todo in todos %}
    <li>{{ todo.title }} <a href="/delete?id={{ todo.id }}">Delete</a></li>
  {%- endfor %}
  </ul>
</body>
</html>
"""

_env = Environment(autoescape=True)
_template = _env.from_string(_PAGE_TEMPLATE)


def render_page(todos: Iterable[TodoItem]) -> str:
    """渲染完整 HTML 文档"""
    return _template.render(todos=list(todos))
