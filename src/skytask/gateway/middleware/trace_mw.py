"""TraceMiddleware -- 任务/用户上下文绑定

从路径中提取 task_id 或 owner_id 绑定到 structlog contextvars：
  /api/tasks/{task_id}          -> task_id
  /api/tasks/stats/{user_id}    -> owner_id
  /api/tasks?userId=N           -> owner_id
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


def extract_trace_context(path: str, query_user_id: str | None = None) -> dict[str, str]:
    """从请求路径与查询参数中提取日志上下文"""
    context: dict[str, str] = {}
    parts = [p for p in path.split("/") if p]

    if "tasks" in parts:
        rest = parts[parts.index("tasks") + 1 :]
        if len(rest) >= 2 and rest[0] == "stats":
            context["owner_id"] = rest[1]
        elif len(rest) == 1 and rest[0] != "stats":
            context["task_id"] = rest[0]

    if query_user_id and "owner_id" not in context:
        context["owner_id"] = query_user_id

    return context


class TraceMiddleware(BaseHTTPMiddleware):
    """任务级追踪中间件 -- 为任务操作绑定 task_id / owner_id"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        context = extract_trace_context(
            request.url.path,
            request.query_params.get("userId"),
        )
        if context:
            structlog.contextvars.bind_contextvars(**context)

        return await call_next(request)
