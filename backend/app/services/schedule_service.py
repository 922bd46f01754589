"""
Run-of-show checks over event tasks and milestones
"""
from datetime import datetime, timedelta
from typing import Any, Iterable, List


def overdue_tasks(tasks: Iterable[Any], now: datetime) -> List[Any]:
    """Open tasks whose due time has passed. Tasks without a due time are never overdue."""
    return [t for t in tasks if t.completed_at is None and t.due_time is not None and t.due_time < now]


def upcoming_milestones(milestones: Iterable[Any], now: datetime, hours_ahead: float = 24) -> List[Any]:
    """Open milestones scheduled between `now` and `hours_ahead` hours from now, inclusive."""
    until = now + timedelta(hours=hours_ahead)
    return [m for m in milestones if m.completed_at is None and now <= m.scheduled_time <= until]
