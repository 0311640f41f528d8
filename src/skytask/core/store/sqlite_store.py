"""TaskRepository SQLite 实现

所有记录共享同一个 aiosqlite 连接；写操作在锁内完成插入与提交，
避免并发协程交错提交同一连接上的事务。
"""

import asyncio
from datetime import UTC, datetime

import aiosqlite
import structlog

from ..exceptions import ConflictError
from ..models import NewTask, NewUser, Task, User

log = structlog.get_logger()


class SqliteRepository:
    """TaskRepository 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn
        self._write_lock = asyncio.Lock()

    async def create_task(self, new_task: NewTask) -> Task:
        """创建任务记录"""
        created_at = datetime.now(UTC)
        async with self._write_lock:
            try:
                cursor = await self._conn.execute(
                    """
                    INSERT INTO tasks (user_id, title, description, priority,
                                       is_outdoor, created_at, due_date)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        new_task.user_id,
                        new_task.title,
                        new_task.description,
                        new_task.priority.value,
                        int(new_task.is_outdoor),
                        created_at.isoformat(),
                        new_task.due_date.isoformat() if new_task.due_date else None,
                    ),
                )
                await self._conn.commit()
            except Exception:
                await self._conn.rollback()
                raise

        return Task(
            id=cursor.lastrowid,
            created_at=created_at,
            **new_task.model_dump(),
        )

    async def list_by_owner(self, owner_id: int) -> list[Task]:
        """按插入顺序返回指定用户的任务"""
        cursor = await self._conn.execute(
            "SELECT * FROM tasks WHERE user_id = ? ORDER BY id ASC",
            (owner_id,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def delete_task(self, task_id: int) -> None:
        """删除任务（幂等）"""
        async with self._write_lock:
            await self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
            await self._conn.commit()

    async def get_user(self, user_id: int) -> User | None:
        cursor = await self._conn.execute(
            "SELECT * FROM users WHERE id = ?",
            (user_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row is not None else None

    async def get_user_by_username(self, username: str) -> User | None:
        cursor = await self._conn.execute(
            "SELECT * FROM users WHERE username = ?",
            (username,),
        )
        row = await cursor.fetchone()
        return self._row_to_user(row) if row is not None else None

    async def create_user(self, new_user: NewUser) -> User:
        """创建用户，用户名或邮箱重复时抛出 ConflictError"""
        async with self._write_lock:
            try:
                cursor = await self._conn.execute(
                    "INSERT INTO users (username, password, name, email) VALUES (?, ?, ?, ?)",
                    (new_user.username, new_user.password, new_user.name, new_user.email),
                )
                await self._conn.commit()
            except aiosqlite.IntegrityError as e:
                await self._conn.rollback()
                raise self._conflict_error(e, new_user) from e

        log.debug("user_created", user_id=cursor.lastrowid, backend="sqlite")
        return User(id=cursor.lastrowid, **new_user.model_dump())

    async def ping(self) -> None:
        cursor = await self._conn.execute("SELECT 1")
        await cursor.fetchone()

    async def close(self) -> None:
        await self._conn.close()

    @staticmethod
    def _conflict_error(error: aiosqlite.IntegrityError, new_user: NewUser) -> ConflictError:
        """把 UNIQUE 约束冲突转换为 ConflictError"""
        if "users.email" in str(error):
            return ConflictError(
                f"Email {new_user.email!r} is already registered",
                code="EMAIL_TAKEN",
            )
        return ConflictError(
            f"Username {new_user.username!r} is already taken",
            code="USERNAME_TAKEN",
        )

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            user_id=row[1],
            title=row[2],
            description=row[3],
            priority=row[4],
            is_outdoor=bool(row[5]),
            created_at=datetime.fromisoformat(row[6]),
            due_date=datetime.fromisoformat(row[7]) if row[7] else None,
        )

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """将数据库行转换为 User 模型"""
        return User(
            id=row[0],
            username=row[1],
            password=row[2],
            name=row[3],
            email=row[4],
        )
