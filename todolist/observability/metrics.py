"""
Prometheus 指标定义

所有指标统一在此文件定义，中间件和业务代码按需引用。
"""

from prometheus_client import Counter, Histogram

# ── 请求级指标 ──

REQUEST_TOTAL = Counter(
    "todolist_request_total",
    "HTTP 请求总数",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "todolist_request_duration_ms",
    "HTTP 请求耗时（毫秒）",
    ["method", "endpoint"],
    buckets=[5, 10, 25, 50, 100, 250, 500, 1000, 2500],
)

# ── 存储层指标 ──

TODO_OPERATION_TOTAL = Counter(
    "todolist_todo_operation_total",
    "Todo 存储操作总数",
    ["operation", "status"],  # operation: list/create/delete, status: success/error
)

# ── 错误指标 ──

ERROR_TOTAL = Counter(
    "todolist_error_total",
    "错误总数",
    ["error_type"],  # storage_error/fatal_init
)
