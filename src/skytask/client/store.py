"""TaskStore -- 客户端任务状态仓库

持有当前用户任务的本地副本、当前筛选条件及派生的筛选结果，
通过 SkyTaskApi 与服务端异步同步。

状态以不可变快照 TaskState 保存，每次变更一步生成新快照，
derived 始终由 (tasks, filter) 重新计算，不会出现 derived 落后于 tasks 的中间态。

- 没有乐观插入：任务只有在服务端确认后才进入本地状态
- 操作失败不抛出异常，只记录 last_error，tasks 保持不变
- load 携带单调递增的序号，非最新序号的结果直接丢弃
- clear() 开启新的会话纪元，纪元变化后返回的 create 结果直接丢弃
"""

import asyncio
from collections.abc import Awaitable, Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

import structlog
from skytask.core.exceptions import SkyTaskError
from skytask.core.models import FILTER_ALL, FILTER_VALUES, Task, TaskInput

log = structlog.get_logger()


class SyncStatus(StrEnum):
    """与服务端的同步状态"""

    IDLE = "idle"
    PENDING = "pending"
    SYNCED = "synced"
    FAILED = "failed"


def apply_filter(tasks: Iterable[Task], filter_value: str) -> tuple[Task, ...]:
    """筛选任务：all 返回全部，否则只保留对应优先级"""
    if filter_value == FILTER_ALL:
        return tuple(tasks)
    return tuple(t for t in tasks if t.priority == filter_value)


@dataclass(frozen=True)
class TaskState:
    """TaskStore 状态快照"""

    tasks: tuple[Task, ...] = ()
    filter: str = FILTER_ALL
    derived: tuple[Task, ...] = ()
    sync_status: SyncStatus = SyncStatus.IDLE
    last_error: str | None = None
    owner_id: int | None = None


@dataclass(frozen=True)
class OperationResult:
    """异步操作结果

    ok=False 时 error 为可展示的错误描述；
    superseded=True 表示结果属于已被更新的 load，未应用到状态。
    """

    ok: bool
    value: Any = None
    error: str | None = None
    superseded: bool = False


class TaskStore:
    """客户端任务状态仓库"""

    def __init__(self, api, queue_maxsize: int = 100) -> None:
        """
        Args:
            api: SkyTaskApi 或具有相同异步方法的对象
            queue_maxsize: 订阅队列容量，队列满的订阅者会被移除
        """
        self._api = api
        self._state = TaskState()
        self._load_seq = 0
        self._epoch = 0
        self._in_flight = 0
        self._subscribers: set[asyncio.Queue] = set()
        self._queue_maxsize = queue_maxsize

    @property
    def state(self) -> TaskState:
        return self._state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return self._state.tasks

    @property
    def derived(self) -> tuple[Task, ...]:
        return self._state.derived

    @property
    def filter(self) -> str:
        return self._state.filter

    # 订阅

    def subscribe(self) -> asyncio.Queue:
        """订阅状态变更，每个新快照都会被推送到返回的队列"""
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    def _broadcast(self, state: TaskState) -> None:
        dead_queues = []
        for queue in self._subscribers:
            try:
                queue.put_nowait(state)
            except asyncio.QueueFull:
                dead_queues.append(queue)

        # 清理已满的队列
        for q in dead_queues:
            self._subscribers.discard(q)

    # 状态提交

    def _commit(self, **changes) -> TaskState:
        """生成新快照；derived 总是按新的 tasks 与 filter 重新计算"""
        tasks = changes.get("tasks", self._state.tasks)
        filter_value = changes.get("filter", self._state.filter)
        changes["derived"] = apply_filter(tasks, filter_value)
        self._state = replace(self._state, **changes)
        self._broadcast(self._state)
        return self._state

    async def _call(self, awaitable: Awaitable):
        """执行一次服务端调用；无论结果如何都结算进行中计数"""
        self._in_flight += 1
        self._commit(sync_status=SyncStatus.PENDING, last_error=None)
        try:
            return await awaitable
        finally:
            self._in_flight -= 1

    def _succeed(self, **changes) -> None:
        status = SyncStatus.PENDING if self._in_flight else SyncStatus.SYNCED
        self._commit(sync_status=status, **changes)

    def _fail(self, operation: str, error: SkyTaskError) -> OperationResult:
        log.warning(
            "task_store_operation_failed",
            operation=operation,
            code=error.code,
            error=error.message,
        )
        self._commit(sync_status=SyncStatus.FAILED, last_error=error.message)
        return OperationResult(ok=False, error=error.message)

    def _discard(self) -> None:
        """丢弃被取代的结果，只更新同步状态"""
        if not self._in_flight and self._state.sync_status == SyncStatus.PENDING:
            self._commit(sync_status=SyncStatus.SYNCED)

    # 操作

    async def load(self, owner_id: int) -> OperationResult:
        """用服务端的任务列表整体替换本地 tasks"""
        self._load_seq += 1
        seq = self._load_seq

        try:
            tasks = await self._call(self._api.list_tasks(owner_id))
        except SkyTaskError as e:
            if seq != self._load_seq:
                self._discard()
                return OperationResult(ok=False, error=e.message, superseded=True)
            return self._fail("load", e)

        if seq != self._load_seq:
            log.info("stale_load_discarded", owner_id=owner_id, seq=seq, latest=self._load_seq)
            self._discard()
            return OperationResult(ok=True, value=tasks, superseded=True)

        self._succeed(tasks=tuple(tasks), owner_id=owner_id)
        log.debug("tasks_loaded", owner_id=owner_id, count=len(tasks))
        return OperationResult(ok=True, value=self._state.tasks)

    async def create(self, task_input: TaskInput) -> OperationResult:
        """创建任务；服务端确认后才追加到 tasks

        请求期间发生 clear()，或返回的任务不属于当前 owner 时，结果不写入 tasks。
        """
        epoch = self._epoch

        try:
            task = await self._call(self._api.create_task(task_input))
        except SkyTaskError as e:
            if epoch != self._epoch:
                self._discard()
                return OperationResult(ok=False, error=e.message, superseded=True)
            return self._fail("create", e)

        owner_id = self._state.owner_id
        if epoch != self._epoch or (owner_id is not None and task.user_id != owner_id):
            log.info("stale_create_discarded", task_id=task.id, owner_id=owner_id)
            self._discard()
            return OperationResult(ok=True, value=task, superseded=True)

        # 并发的 load 可能已带回该任务，按 id 替换而不是重复追加
        existing = [t for t in self._state.tasks if t.id != task.id]
        self._succeed(tasks=(*existing, task))
        log.debug("task_added", task_id=task.id)
        return OperationResult(ok=True, value=task)

    async def delete(self, task_id: int) -> OperationResult:
        """删除任务；服务端确认后从 tasks 中移除"""
        try:
            await self._call(self._api.delete_task(task_id))
        except SkyTaskError as e:
            return self._fail("delete", e)

        self._succeed(tasks=tuple(t for t in self._state.tasks if t.id != task_id))
        log.debug("task_removed", task_id=task_id)
        return OperationResult(ok=True, value=task_id)

    def set_filter(self, value: str) -> TaskState:
        """设置筛选条件（仅本地，不访问服务端）

        Raises:
            ValueError: value 不是 all / low / medium / high
        """
        if value not in FILTER_VALUES:
            raise ValueError(f"Unknown filter {value!r}, expected one of {FILTER_VALUES}")
        return self._commit(filter=str(value))

    def clear(self) -> TaskState:
        """清空本地任务（如登出），进行中的 load/create 结果将被丢弃"""
        self._load_seq += 1
        self._epoch += 1
        return self._commit(tasks=(), owner_id=None, last_error=None)
