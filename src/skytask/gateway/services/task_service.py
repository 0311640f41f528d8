"""TaskService -- 任务创建/删除/查询/统计业务逻辑

创建流程：
1. normalize_task_input() 统一归一化：校验标题、填充默认值、解析截止时间
2. 交给 TaskRepository 分配 id 与 created_at 并保存

存储层抛出的非 SkyTaskError 异常统一转换为 TransientServiceError。
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, tzinfo

import structlog
from skytask.core.config import get_local_timezone
from skytask.core.exceptions import InvalidInputError, SkyTaskError, TransientServiceError
from skytask.core.models import DEFAULT_PRIORITY, NewTask, Task, TaskInput, TaskStats
from skytask.core.stats import compute_task_stats
from skytask.core.store import TaskRepository

log = structlog.get_logger()


def parse_due_date(value: datetime | str | None, tz: tzinfo) -> datetime | None:
    """解析截止时间

    ISO-8601 字符串或 datetime；不带时区的值视为本地时区。
    空字符串视为未设置。无法解析时抛出 InvalidInputError。
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError as e:
            raise InvalidInputError(
                f"dueDate must be an ISO-8601 timestamp, got {text!r}",
                code="INVALID_DUE_DATE",
            ) from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value


def normalize_task_input(task_input: TaskInput, tz: tzinfo | None = None) -> NewTask:
    """把传输层请求归一化为完整的创建记录

    - title 去除首尾空白后不能为空
    - description 缺省或空白时为 None
    - priority 缺省为 medium，is_outdoor 缺省为 False
    - due_date 从 ISO-8601 字符串解析
    """
    title = task_input.title.strip()
    if not title:
        raise InvalidInputError("Task title is required", code="TITLE_REQUIRED")

    description = task_input.description
    if description is not None and not description.strip():
        description = None

    return NewTask(
        user_id=task_input.user_id,
        title=title,
        description=description,
        priority=task_input.priority or DEFAULT_PRIORITY,
        is_outdoor=bool(task_input.is_outdoor) if task_input.is_outdoor is not None else False,
        due_date=parse_due_date(task_input.due_date, tz or get_local_timezone()),
    )


@contextmanager
def repository_faults(operation: str, **context) -> Iterator[None]:
    """把存储层的意外异常转换为 TransientServiceError"""
    try:
        yield
    except SkyTaskError:
        raise
    except Exception as e:
        log.error(
            "repository_operation_failed",
            operation=operation,
            error=str(e),
            error_type=type(e).__name__,
            **context,
        )
        raise TransientServiceError(f"Failed to {operation}") from e


class TaskService:
    """任务业务服务"""

    def __init__(self, repository: TaskRepository, tz: tzinfo | None = None) -> None:
        self._repository = repository
        self._tz = tz

    @property
    def tz(self) -> tzinfo:
        return self._tz or get_local_timezone()

    async def create_task(self, task_input: TaskInput) -> Task:
        """校验并创建任务

        Raises:
            InvalidInputError: 标题为空或截止时间无法解析
            TransientServiceError: 存储层故障
        """
        new_task = normalize_task_input(task_input, self.tz)

        with repository_faults("create task", owner_id=new_task.user_id):
            task = await self._repository.create_task(new_task)

        log.info(
            "task_created",
            task_id=task.id,
            owner_id=task.user_id,
            priority=task.priority.value,
            is_outdoor=task.is_outdoor,
        )
        return task

    async def list_tasks(self, owner_id: int) -> list[Task]:
        """查询用户的全部任务"""
        with repository_faults("fetch tasks", owner_id=owner_id):
            return await self._repository.list_by_owner(owner_id)

    async def delete_task(self, task_id: int) -> None:
        """删除任务（不存在时为无操作）"""
        with repository_faults("delete task", task_id=task_id):
            await self._repository.delete_task(task_id)
        log.info("task_deleted", task_id=task_id)

    async def get_stats(self, owner_id: int, now: datetime | None = None) -> TaskStats:
        """计算用户任务的聚合统计"""
        with repository_faults("get task statistics", owner_id=owner_id):
            tasks = await self._repository.list_by_owner(owner_id)
        return compute_task_stats(tasks, now=now, tz=self.tz)
