"""任务统计 -- 纯函数，无副作用

给定同一任务集合与同一 now 时刻，结果确定。
日期口径使用本地时区：当天为 [本地零点, 次日零点)，
本周从最近一个周日零点开始。
"""

import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta, tzinfo

from .config import get_local_timezone
from .models import Priority, PriorityBreakdown, Task, TaskStats


def start_of_day(moment: datetime) -> datetime:
    """moment 所在本地日期的零点"""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(moment: datetime) -> datetime:
    """moment 所在周的周日零点（周日为一周第一天）"""
    days_since_sunday = (moment.weekday() + 1) % 7
    return start_of_day(moment) - timedelta(days=days_since_sunday)


def _as_local(value: datetime, tz: tzinfo) -> datetime:
    """转换为本地时区；naive 时间视为本地时间"""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def rounded_percentages(counts: list[int], total: int) -> list[int]:
    """计算整数百分比

    每项四舍五入（0.5 进位）；若总和超过 100，则从进位的项中
    按小数部分从小到大依次减 1，直到总和不超过 100。total 为 0 时全为 0。
    """
    if total <= 0:
        return [0 for _ in counts]

    exact = [count * 100 / total for count in counts]
    rounded = [math.floor(value + 0.5) for value in exact]

    overflow = sum(rounded) - 100
    if overflow > 0:
        rounded_up = sorted(
            (i for i, value in enumerate(exact) if rounded[i] > value),
            key=lambda i: (exact[i] - math.floor(exact[i]), -i),
        )
        for i in rounded_up[:overflow]:
            rounded[i] -= 1
    return rounded


def compute_task_stats(
    tasks: Iterable[Task],
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> TaskStats:
    """计算任务集合的聚合统计

    Args:
        tasks: 同一用户的任务集合
        now: 参考时刻，None 使用当前时间
        tz: 本地时区，None 使用配置的时区

    Returns:
        TaskStats
    """
    tz = tz or get_local_timezone()
    local_now = _as_local(now or datetime.now(UTC), tz)

    today = start_of_day(local_now)
    tomorrow = today + timedelta(days=1)
    week_start = start_of_week(local_now)

    task_list = list(tasks)
    total = len(task_list)

    due_today = sum(
        1
        for t in task_list
        if t.due_date is not None and today <= _as_local(t.due_date, tz) < tomorrow
    )
    outdoor = sum(1 for t in task_list if t.is_outdoor)
    created_this_week = sum(
        1 for t in task_list if _as_local(t.created_at, tz) >= week_start
    )

    counts = [
        sum(1 for t in task_list if t.priority == priority)
        for priority in (Priority.HIGH, Priority.MEDIUM, Priority.LOW)
    ]
    high_pct, medium_pct, low_pct = rounded_percentages(counts, total)

    return TaskStats(
        total=total,
        due_today=due_today,
        outdoor=outdoor,
        created_this_week=created_this_week,
        priorities=PriorityBreakdown(
            high=counts[0],
            medium=counts[1],
            low=counts[2],
            high_percentage=high_pct,
            medium_percentage=medium_pct,
            low_percentage=low_pct,
        ),
    )
