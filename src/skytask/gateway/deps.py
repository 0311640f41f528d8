"""依赖注入模块 -- 通过 FastAPI Depends 注入 Repository 与服务实例

Repository 实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Depends, Request
from skytask.core.store import TaskRepository

from .services.task_service import TaskService
from .services.user_service import UserService


def get_repository(request: Request) -> TaskRepository:
    """从 app.state 获取 TaskRepository 实例"""
    return request.app.state.repository


def get_task_service(repository: TaskRepository = Depends(get_repository)) -> TaskService:
    return TaskService(repository)


def get_user_service(repository: TaskRepository = Depends(get_repository)) -> UserService:
    return UserService(repository)
