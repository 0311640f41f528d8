"""Task Domain Model

Task 是存储层持有的完整记录；NewTask 是服务层归一化后交给存储层的创建记录，
所有可选字段已被填充默认值；TaskInput 是传输层的原始创建请求。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import DEFAULT_PRIORITY, Priority


class TaskInput(CamelModel):
    """创建任务请求体（传输层），可选字段允许缺省"""

    user_id: int = Field(description="任务所属用户 ID")
    title: str = Field(description="任务标题，去除首尾空白后不能为空")
    description: str | None = Field(default=None, description="任务描述")
    priority: Priority | None = Field(default=None, description="优先级，缺省为 medium")
    is_outdoor: bool | None = Field(default=None, description="是否为户外任务，缺省为 False")
    due_date: datetime | str | None = Field(
        default=None, description="截止时间，ISO-8601 字符串"
    )


class NewTask(CamelModel):
    """归一化后的创建记录 -- 除 id 与 created_at 外全部字段均已确定"""

    user_id: int
    title: str
    description: str | None = None
    priority: Priority = DEFAULT_PRIORITY
    is_outdoor: bool = False
    due_date: datetime | None = None


class Task(CamelModel):
    """Task 数据模型

    id 与 created_at 由存储层在插入时分配，之后不再变化。
    """

    id: int = Field(description="唯一标识，存储层单调分配，不复用")
    user_id: int = Field(description="所属用户 ID")
    title: str = Field(description="任务标题")
    description: str | None = Field(default=None, description="任务描述")
    priority: Priority = Field(default=DEFAULT_PRIORITY, description="优先级")
    is_outdoor: bool = Field(default=False, description="是否为户外任务")
    created_at: datetime = Field(description="创建时间（存储层插入时间）")
    due_date: datetime | None = Field(default=None, description="截止时间")


class TaskUpdate(CamelModel):
    """任务更新结构（预留，当前没有端点使用）"""

    title: str | None = None
    description: str | None = None
    priority: Priority | None = None
    is_outdoor: bool | None = None
    due_date: datetime | None = None
