"""任务统计结果模型"""

from pydantic import Field

from .base import CamelModel


class PriorityBreakdown(CamelModel):
    """按优先级的数量与整数百分比"""

    high: int = 0
    medium: int = 0
    low: int = 0
    high_percentage: int = 0
    medium_percentage: int = 0
    low_percentage: int = 0


class TaskStats(CamelModel):
    """某个用户任务集合上的聚合统计"""

    total: int = 0
    due_today: int = 0
    outdoor: int = 0
    created_this_week: int = 0
    priorities: PriorityBreakdown = Field(default_factory=PriorityBreakdown)
