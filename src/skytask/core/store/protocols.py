"""Repository Protocol 接口定义

使用 Python Protocol 实现结构化子类型（duck typing）。
存储层不做输入校验，假定收到的记录已由服务层归一化；
唯一的业务约束是用户名与邮箱唯一（冲突抛出 ConflictError）。
"""

from typing import Protocol

from ..models import NewTask, NewUser, Task, User


class TaskRepository(Protocol):
    """任务与用户记录存储接口"""

    async def create_task(self, new_task: NewTask) -> Task:
        """分配 id 与 created_at 后保存任务，返回保存后的记录"""
        ...

    async def list_by_owner(self, owner_id: int) -> list[Task]:
        """按插入顺序返回指定用户的全部任务，无任务时返回空列表"""
        ...

    async def delete_task(self, task_id: int) -> None:
        """删除任务；id 不存在时为无操作（幂等）"""
        ...

    async def get_user(self, user_id: int) -> User | None:
        """根据 id 查询用户"""
        ...

    async def get_user_by_username(self, username: str) -> User | None:
        """根据用户名（区分大小写）查询用户"""
        ...

    async def create_user(self, new_user: NewUser) -> User:
        """分配 id 后保存用户；用户名或邮箱重复时抛出 ConflictError"""
        ...

    async def ping(self) -> None:
        """就绪探测，存储不可用时抛出异常"""
        ...

    async def close(self) -> None:
        """释放存储资源"""
        ...
