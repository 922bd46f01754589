"""
Unit tests for overdue task and upcoming milestone selection.
"""
from datetime import datetime, timedelta
from types import SimpleNamespace

from app.services.schedule_service import overdue_tasks, upcoming_milestones

NOW = datetime(2024, 6, 1, 12, 0)


def task(name, due=None, done=None):
    return SimpleNamespace(task_name=name, due_time=due, completed_at=done)


def milestone(name, at, done=None):
    return SimpleNamespace(milestone_name=name, scheduled_time=at, completed_at=done)


def test_overdue_tasks():
    tasks = [
        task("late", due=NOW - timedelta(hours=1)),
        task("late but done", due=NOW - timedelta(hours=1), done=NOW),
        task("later", due=NOW + timedelta(hours=1)),
        task("whenever"),
    ]
    assert [t.task_name for t in overdue_tasks(tasks, NOW)] == ["late"]


def test_upcoming_milestones_window():
    milestones = [
        milestone("passed", NOW - timedelta(minutes=1)),
        milestone("now", NOW),
        milestone("tonight", NOW + timedelta(hours=8)),
        milestone("tonight, done", NOW + timedelta(hours=8), done=NOW),
        milestone("edge", NOW + timedelta(hours=24)),
        milestone("next week", NOW + timedelta(days=7)),
    ]
    assert [m.milestone_name for m in upcoming_milestones(milestones, NOW)] == ["now", "tonight", "edge"]
    assert [m.milestone_name for m in upcoming_milestones(milestones, NOW, hours_ahead=1)] == ["now"]
