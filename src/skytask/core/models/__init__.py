"""SkyTask Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .base import CamelModel
from .enums import DEFAULT_PRIORITY, FILTER_ALL, FILTER_VALUES, Priority
from .stats import PriorityBreakdown, TaskStats
from .task import NewTask, Task, TaskInput, TaskUpdate
from .user import NewUser, PublicUser, User

__all__ = [
    "CamelModel",
    # 枚举
    "Priority",
    "DEFAULT_PRIORITY",
    "FILTER_ALL",
    "FILTER_VALUES",
    # Task
    "Task",
    "TaskInput",
    "NewTask",
    "TaskUpdate",
    # User
    "User",
    "NewUser",
    "PublicUser",
    # Stats
    "TaskStats",
    "PriorityBreakdown",
]
