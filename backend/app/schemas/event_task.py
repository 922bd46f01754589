"""
Event Task and Milestone Schemas
"""
from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

TaskPriority = Literal["low", "medium", "high"]


class EventTaskCreate(BaseModel):
    task_name: str = Field(..., min_length=1)
    description: Optional[str] = None
    assigned_staff_id: Optional[UUID] = None
    due_time: Optional[datetime] = None
    priority: TaskPriority = "medium"
    task_category: str = "general"
    estimated_duration: Optional[int] = Field(None, ge=0)


class EventTaskUpdate(BaseModel):
    task_name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    assigned_staff_id: Optional[UUID] = None
    due_time: Optional[datetime] = None
    priority: Optional[TaskPriority] = None
    task_category: Optional[str] = None
    estimated_duration: Optional[int] = Field(None, ge=0)


class EventTaskResponse(EventTaskCreate):
    id: UUID
    event_id: UUID
    assigned_staff_name: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventMilestoneCreate(BaseModel):
    milestone_name: str = Field(..., min_length=1)
    milestone_type: str = "checkpoint"
    scheduled_time: datetime
    assigned_staff_id: Optional[UUID] = None
    notes: Optional[str] = None


class EventMilestoneResponse(EventMilestoneCreate):
    id: UUID
    event_id: UUID
    assigned_staff_name: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True
