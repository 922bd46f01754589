"""
Event Task and Milestone Models - the run-of-show checklist for an event
"""
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from app.database import Base


class EventTask(Base):
    __tablename__ = "event_tasks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    task_name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    assigned_staff_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    due_time = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    priority = Column(String, nullable=False, default="medium")  # low, medium, high
    task_category = Column(String, nullable=False, default="general")  # prep, setup, service, cleanup, ...
    estimated_duration = Column(Integer, nullable=True)  # minutes
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="tasks")
    assigned_staff = relationship("Staff")

    @property
    def assigned_staff_name(self):
        return self.assigned_staff.name if self.assigned_staff is not None else None

    def __repr__(self):
        return f"<EventTask {self.task_name} ({self.priority})>"


class EventMilestone(Base):
    __tablename__ = "event_milestones"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    milestone_name = Column(String, nullable=False)
    milestone_type = Column(String, nullable=False, default="checkpoint")
    scheduled_time = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    assigned_staff_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="milestones")
    assigned_staff = relationship("Staff")

    @property
    def assigned_staff_name(self):
        return self.assigned_staff.name if self.assigned_staff is not None else None

    def __repr__(self):
        return f"<EventMilestone {self.milestone_name} {self.scheduled_time}>"
