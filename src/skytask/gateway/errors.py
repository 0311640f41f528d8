"""异常处理器 -- 把异常体系转换为统一错误响应体

响应体格式：{"error": {"code": ..., "message": ...}}
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from skytask.core.exceptions import SkyTaskError
from starlette.responses import JSONResponse

log = structlog.get_logger()


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    """把请求校验错误整理为一行可读描述"""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(messages) or "Invalid request"


async def skytask_error_handler(request: Request, exc: SkyTaskError) -> JSONResponse:
    if exc.is_client_error:
        log.info("request_rejected", code=exc.code, message=exc.message)
    else:
        log.error("request_failed", code=exc.code, message=exc.message)
    return error_response(exc.status_code, exc.code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = describe_validation_error(exc)
    log.info("request_rejected", code="VALIDATION_ERROR", message=message)
    return error_response(400, "VALIDATION_ERROR", message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled_error", error_type=type(exc).__name__)
    return error_response(500, "INTERNAL_ERROR", "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """注册异常处理器"""
    app.add_exception_handler(SkyTaskError, skytask_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
