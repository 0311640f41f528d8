"""LoggingMiddleware -- 请求级日志

每个请求绑定 request_id / method / path 到 structlog contextvars，
结束时记录状态码与耗时；5xx 以 warning 级别记录。
调用方传入合法的 X-Request-ID 时沿用，否则生成 ULID；响应头原样返回。
"""

import re
import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"

_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(incoming: str | None) -> str:
    """沿用调用方的请求 id（仅限字母数字与 ._-，最长 64），否则生成 ULID"""
    if incoming and _REQUEST_ID_PATTERN.match(incoming):
        return incoming
    return str(ULID())


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        start_time = time.monotonic()

        try:
            response = await call_next(request)
        except Exception:
            await log.aexception(
                "request_crashed",
                duration_ms=int((time.monotonic() - start_time) * 1000),
            )
            raise

        duration_ms = int((time.monotonic() - start_time) * 1000)
        if response.status_code >= 500:
            await log.awarning(
                "request_failed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            await log.ainfo(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
