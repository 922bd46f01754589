"""
Event Tasks and Milestones API Endpoints
"""
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission, get_event_or_404
from app.models.user import User
from app.models.event import Event
from app.models.event_task import EventTask, EventMilestone
from app.models.staff import Staff
from app.schemas.event_task import (
    EventTaskCreate, EventTaskUpdate, EventTaskResponse, EventMilestoneCreate, EventMilestoneResponse,
)
from app.services.schedule_service import overdue_tasks, upcoming_milestones

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_staff(db: Session, staff_id, current_user: User) -> None:
    if staff_id is None:
        return
    member = db.query(Staff.id).filter(
        Staff.id == staff_id,
        Staff.organization_id == current_user.organization_id,
    ).first()
    if not member:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Staff member not found in organization")


def _get_task_or_404(db: Session, event: Event, task_id: UUID) -> EventTask:
    task = db.query(EventTask).filter(EventTask.id == task_id, EventTask.event_id == event.id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("/{event_id}/tasks", response_model=List[EventTaskResponse])
async def list_tasks(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
    overdue: bool = Query(False, description="Only open tasks past their due time"),
):
    """
    Tasks of an event by due time; tasks without one come last
    """
    event = get_event_or_404(db, event_id, current_user)
    tasks = db.query(EventTask).filter(EventTask.event_id == event.id).order_by(
        EventTask.due_time.is_(None), EventTask.due_time, EventTask.created_at,
    ).all()
    if overdue:
        tasks = overdue_tasks(tasks, datetime.utcnow())
    return [EventTaskResponse.model_validate(t) for t in tasks]


@router.post("/{event_id}/tasks", response_model=EventTaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    event_id: UUID,
    data: EventTaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    event = get_event_or_404(db, event_id, current_user)
    _check_staff(db, data.assigned_staff_id, current_user)
    task = EventTask(event_id=event.id, **data.model_dump())
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task %s added to event %s", task.task_name, event.id)
    return EventTaskResponse.model_validate(task)


@router.patch("/{event_id}/tasks/{task_id}", response_model=EventTaskResponse)
async def update_task(
    event_id: UUID,
    task_id: UUID,
    data: EventTaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    task = _get_task_or_404(db, get_event_or_404(db, event_id, current_user), task_id)
    updates = data.model_dump(exclude_unset=True)
    if "assigned_staff_id" in updates:
        _check_staff(db, updates["assigned_staff_id"], current_user)
    for field, value in updates.items():
        if value is None and field in ("task_name", "priority", "task_category"):
            continue
        setattr(task, field, value)
    db.commit()
    db.refresh(task)
    return EventTaskResponse.model_validate(task)


@router.post("/{event_id}/tasks/{task_id}/complete", response_model=EventTaskResponse)
async def complete_task(
    event_id: UUID,
    task_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    """
    Mark a task done now. Completing a done task keeps its first completion time.
    """
    task = _get_task_or_404(db, get_event_or_404(db, event_id, current_user), task_id)
    if task.completed_at is None:
        task.completed_at = datetime.utcnow()
        db.commit()
        db.refresh(task)
    return EventTaskResponse.model_validate(task)


@router.delete("/{event_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    event_id: UUID,
    task_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    task = _get_task_or_404(db, get_event_or_404(db, event_id, current_user), task_id)
    db.delete(task)
    db.commit()


@router.get("/{event_id}/milestones", response_model=List[EventMilestoneResponse])
async def list_milestones(
    event_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.view")),
    upcoming_hours: Optional[float] = Query(None, gt=0, description="Only open milestones due within this many hours"),
):
    event = get_event_or_404(db, event_id, current_user)
    milestones = db.query(EventMilestone).filter(EventMilestone.event_id == event.id).order_by(
        EventMilestone.scheduled_time,
    ).all()
    if upcoming_hours is not None:
        milestones = upcoming_milestones(milestones, datetime.utcnow(), upcoming_hours)
    return [EventMilestoneResponse.model_validate(m) for m in milestones]


@router.post("/{event_id}/milestones", response_model=EventMilestoneResponse, status_code=status.HTTP_201_CREATED)
async def create_milestone(
    event_id: UUID,
    data: EventMilestoneCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    event = get_event_or_404(db, event_id, current_user)
    _check_staff(db, data.assigned_staff_id, current_user)
    milestone = EventMilestone(event_id=event.id, **data.model_dump())
    db.add(milestone)
    db.commit()
    db.refresh(milestone)
    return EventMilestoneResponse.model_validate(milestone)


@router.post("/{event_id}/milestones/{milestone_id}/complete", response_model=EventMilestoneResponse)
async def complete_milestone(
    event_id: UUID,
    milestone_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("events.edit")),
):
    event = get_event_or_404(db, event_id, current_user)
    milestone = db.query(EventMilestone).filter(
        EventMilestone.id == milestone_id,
        EventMilestone.event_id == event.id,
    ).first()
    if not milestone:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Milestone not found")
    if milestone.completed_at is None:
        milestone.completed_at = datetime.utcnow()
        db.commit()
        db.refresh(milestone)
    return EventMilestoneResponse.model_validate(milestone)
