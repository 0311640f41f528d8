"""gateway 测试配置 -- FastAPI app + httpx AsyncClient"""

import os
from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from skytask.core.store import MemoryRepository


@pytest_asyncio.fixture
async def app(memory_repository: MemoryRepository):
    """创建测试用 FastAPI app 实例（绕过 lifespan，直接注入内存 Repository）"""
    os.environ["SKYTASK_STORAGE"] = "memory"

    from skytask.gateway.main import create_app

    application = create_app()
    application.state.repository = memory_repository
    application.state.storage_backend = "memory"
    yield application

    os.environ.pop("SKYTASK_STORAGE", None)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
