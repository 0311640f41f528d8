"""全局 pytest 配置 -- Repository fixture + 临时 SQLite 数据库"""

from pathlib import Path

import pytest
import pytest_asyncio
from skytask.core.store import MemoryRepository, create_repository


@pytest.fixture
def tmp_db_path(tmp_path: Path) -> Path:
    """提供临时 SQLite 数据库路径"""
    return tmp_path / "sqlite" / "test.db"


@pytest.fixture
def memory_repository() -> MemoryRepository:
    """提供空的内存 Repository"""
    return MemoryRepository()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def repository(request, tmp_db_path: Path):
    """两种存储后端各跑一遍"""
    repo = await create_repository(
        request.param,
        str(tmp_db_path) if request.param == "sqlite" else None,
    )
    yield repo
    await repo.close()
