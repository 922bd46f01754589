"""
Staff and Staff Assignment Models
"""
from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from app.database import Base
from app.services.revenue_service import shift_hours


class Staff(Base):
    __tablename__ = "staff"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    position = Column(String, nullable=False, default="server")  # chef, server, bartender, ...
    hourly_rate = Column(Float, nullable=False, default=0.0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<Staff {self.name} ({self.position})>"


class StaffAssignment(Base):
    __tablename__ = "staff_assignments"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    staff_id = Column(Uuid(as_uuid=True), ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    role_for_event = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=True)
    end_time = Column(DateTime, nullable=True)
    hourly_rate = Column(Float, nullable=True)  # falls back to the staff member's rate
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="staff_assignments")
    staff = relationship("Staff")

    __table_args__ = (
        UniqueConstraint("event_id", "staff_id", name="uq_event_staff"),
    )

    @property
    def effective_rate(self) -> float:
        if self.hourly_rate is not None:
            return self.hourly_rate
        return self.staff.hourly_rate if self.staff is not None else 0.0

    @property
    def staff_name(self) -> str:
        return self.staff.name if self.staff is not None else ""

    @property
    def hours(self) -> float:
        return shift_hours(self.start_time, self.end_time)

    @property
    def labor_cost(self) -> float:
        return self.effective_rate * self.hours

    def __repr__(self):
        return f"<StaffAssignment {self.staff_id} as {self.role_for_event}>"
