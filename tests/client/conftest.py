"""client 测试配置 -- 内存 API 替身 + 基于真实 app 的 SkyTaskApi"""

import asyncio
from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from skytask.client import SkyTaskApi
from skytask.core.exceptions import SkyTaskError
from skytask.core.models import DEFAULT_PRIORITY, Task, TaskInput
from skytask.core.store import MemoryRepository


def make_task(task_id: int, priority: str = "medium", owner_id: int = 1, **kwargs) -> Task:
    return Task(
        id=task_id,
        user_id=owner_id,
        title=kwargs.pop("title", f"task {task_id}"),
        priority=priority,
        is_outdoor=kwargs.pop("is_outdoor", False),
        created_at=datetime(2025, 6, 1, tzinfo=UTC),
        **kwargs,
    )


class FakeApi:
    """TaskStore 用的 API 替身

    - tasks: 服务端任务
    - fail_with: 设置后下一次调用抛出该异常
    - gates: 按方法名挂起调用，直到对应 Event 被 set
    """

    def __init__(self, tasks: list[Task] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.fail_with: SkyTaskError | None = None
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []
        self._next_id = max((t.id for t in self.tasks), default=0) + 1

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        gate = self.gates.get(name)
        if gate is not None:
            await gate.wait()
        if self.fail_with is not None:
            error, self.fail_with = self.fail_with, None
            raise error

    async def list_tasks(self, owner_id: int) -> list[Task]:
        snapshot = [t for t in self.tasks if t.user_id == owner_id]
        await self._enter("list_tasks")
        return snapshot

    async def create_task(self, task_input: TaskInput) -> Task:
        await self._enter("create_task")
        task = make_task(
            self._next_id,
            priority=task_input.priority or DEFAULT_PRIORITY,
            owner_id=task_input.user_id,
            title=task_input.title.strip(),
            is_outdoor=bool(task_input.is_outdoor),
        )
        self._next_id += 1
        self.tasks.append(task)
        return task

    async def delete_task(self, task_id: int) -> None:
        await self._enter("delete_task")
        self.tasks = [t for t in self.tasks if t.id != task_id]


@pytest.fixture
def task_factory():
    """构造服务端 Task 记录"""
    return make_task


@pytest.fixture
def fake_api() -> FakeApi:
    return FakeApi(
        [
            make_task(1, "high"),
            make_task(2, "low"),
            make_task(3, "medium"),
            make_task(4, "high", owner_id=2),
        ]
    )


@pytest_asyncio.fixture
async def api(memory_repository: MemoryRepository) -> AsyncGenerator[SkyTaskApi, None]:
    """连接到内存 app 的 SkyTaskApi"""
    from skytask.gateway.main import create_app

    application = create_app()
    application.state.repository = memory_repository
    application.state.storage_backend = "memory"

    async with AsyncClient(
        transport=ASGITransport(app=application),
        base_url="http://test",
    ) as http_client:
        yield SkyTaskApi(http_client=http_client)
