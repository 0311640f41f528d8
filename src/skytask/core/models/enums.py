"""枚举定义

Priority 是任务优先级；FILTER_ALL 是客户端筛选条件中表示“不过滤”的取值。
"""

from enum import StrEnum


class Priority(StrEnum):
    """任务优先级"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# 默认优先级（创建任务时未提供 priority）
DEFAULT_PRIORITY: Priority = Priority.MEDIUM

# 客户端筛选条件：all 或任一 Priority 取值
FILTER_ALL = "all"
FILTER_VALUES: tuple[str, ...] = (FILTER_ALL, *(p.value for p in Priority))
