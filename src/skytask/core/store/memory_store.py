"""TaskRepository 内存实现

数据只存在于进程内存中，进程退出即丢失。
id 分配与插入之间没有 await，在 asyncio 协作式调度下是原子的。
"""

import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime

import structlog

from ..exceptions import ConflictError
from ..models import NewTask, NewUser, Task, User

log = structlog.get_logger()


@dataclass
class MemoryStorage:
    """内存存储：按 id 索引的用户/任务表 + 单调递增的 id 计数器"""

    users: dict[int, User] = field(default_factory=dict)
    tasks: dict[int, Task] = field(default_factory=dict)
    user_ids: itertools.count = field(default_factory=lambda: itertools.count(1))
    task_ids: itertools.count = field(default_factory=lambda: itertools.count(1))


class MemoryRepository:
    """TaskRepository 的内存实现"""

    def __init__(self, storage: MemoryStorage | None = None) -> None:
        self._storage = storage if storage is not None else MemoryStorage()

    async def create_task(self, new_task: NewTask) -> Task:
        """创建任务记录"""
        task = Task(
            id=next(self._storage.task_ids),
            created_at=datetime.now(UTC),
            **new_task.model_dump(),
        )
        self._storage.tasks[task.id] = task
        return task

    async def list_by_owner(self, owner_id: int) -> list[Task]:
        """按插入顺序返回指定用户的任务"""
        return [t for t in self._storage.tasks.values() if t.user_id == owner_id]

    async def delete_task(self, task_id: int) -> None:
        """删除任务（幂等）"""
        self._storage.tasks.pop(task_id, None)

    async def get_user(self, user_id: int) -> User | None:
        return self._storage.users.get(user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        return next(
            (u for u in self._storage.users.values() if u.username == username),
            None,
        )

    async def create_user(self, new_user: NewUser) -> User:
        """创建用户，用户名或邮箱重复时抛出 ConflictError"""
        for existing in self._storage.users.values():
            if existing.username == new_user.username:
                raise ConflictError(
                    f"Username {new_user.username!r} is already taken",
                    code="USERNAME_TAKEN",
                )
            if existing.email == new_user.email:
                raise ConflictError(
                    f"Email {new_user.email!r} is already registered",
                    code="EMAIL_TAKEN",
                )

        user = User(id=next(self._storage.user_ids), **new_user.model_dump())
        self._storage.users[user.id] = user
        log.debug("user_created", user_id=user.id, backend="memory")
        return user

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        return None
