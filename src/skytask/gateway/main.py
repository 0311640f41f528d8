"""FastAPI 应用主文件

app 创建 + lifespan 管理：Repository 初始化/关闭 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from skytask.core.config import get_db_path, get_storage_backend
from skytask.core.store import create_repository

from .errors import register_exception_handlers
from .middleware.logging_config import setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import health, tasks, users

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建 Repository，关闭时释放"""
    backend = get_storage_backend()
    db_path = get_db_path() if backend == "sqlite" else None
    repository = await create_repository(backend, db_path)
    app.state.repository = repository
    app.state.storage_backend = backend
    log.info("repository_initialized", backend=backend, db_path=db_path)

    yield

    if getattr(app.state, "repository", None) is not None:
        await app.state.repository.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="SkyTask Gateway",
        version="0.1.0",
        description="SkyTask 任务记录 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # 初始化日志
    setup_logging()

    # 注册路由
    app.include_router(users.router, tags=["users"])
    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
