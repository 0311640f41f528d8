"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，探测存储是否可用。
"""

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查 -- 验证存储可用性

    检查项：
    1. storage: 存储后端连通性
    """
    checks = {}
    all_ok = True

    try:
        await request.app.state.repository.ping()
        checks["storage"] = "ok"
    except Exception as e:
        log.warning("readiness_check_failed", check="storage", error=str(e))
        checks["storage"] = f"error: {str(e)}"
        all_ok = False

    status_code = 200 if all_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ok else "not_ready",
            "backend": getattr(request.app.state, "storage_backend", "unknown"),
            "checks": checks,
        },
    )
