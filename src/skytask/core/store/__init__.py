"""SkyTask Core Store -- 任务/用户存储实现

提供工厂函数按配置创建 TaskRepository 实例；
进程内只创建一次，通过引用注入到服务层。
"""

from pathlib import Path

import aiosqlite

from .memory_store import MemoryRepository, MemoryStorage
from .protocols import TaskRepository
from .sqlite_init import init_db
from .sqlite_store import SqliteRepository


async def create_repository(
    backend: str = "memory",
    db_path: str | None = None,
) -> TaskRepository:
    """创建 TaskRepository 实例

    Args:
        backend: 存储后端（memory / sqlite）
        db_path: SQLite 数据库文件路径，仅 sqlite 后端使用

    Returns:
        TaskRepository 实例
    """
    if backend == "memory":
        return MemoryRepository()

    if backend != "sqlite":
        raise ValueError(f"Unsupported storage backend: {backend!r}")
    if not db_path:
        raise ValueError("db_path is required for the sqlite backend")

    # 确保数据库目录存在
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return SqliteRepository(conn)


__all__ = [
    "TaskRepository",
    "MemoryRepository",
    "MemoryStorage",
    "SqliteRepository",
    "create_repository",
    "init_db",
]
