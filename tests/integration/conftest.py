"""集成测试共享 fixture -- SQLite 存储 + 真实 app + SkyTaskApi"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from skytask.client import SkyTaskApi
from skytask.core.store import create_repository


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path):
    """集成测试用 FastAPI app（SQLite 存储）"""
    os.environ["SKYTASK_STORAGE"] = "sqlite"
    os.environ["SKYTASK_DB_PATH"] = str(tmp_path / "test.db")

    from skytask.gateway.main import create_app

    app = create_app()
    repository = await create_repository("sqlite", str(tmp_path / "test.db"))
    app.state.repository = repository
    app.state.storage_backend = "sqlite"

    yield app

    await repository.close()
    os.environ.pop("SKYTASK_STORAGE", None)
    os.environ.pop("SKYTASK_DB_PATH", None)


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def api(client: AsyncClient) -> SkyTaskApi:
    return SkyTaskApi(http_client=client)
