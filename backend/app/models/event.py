"""
Event Model - booked catering events and their guest lists
"""
from sqlalchemy import Column, String, Integer, Float, Date, DateTime, ForeignKey, Text, JSON, Index, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from app.database import Base


class EventStatus(str, enum.Enum):
    """Event lifecycle status"""
    BOOKED = "booked"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that count towards realised monthly revenue
REVENUE_STATUSES = (EventStatus.CONFIRMED, EventStatus.IN_PROGRESS, EventStatus.COMPLETED)


class GuestType(str, enum.Enum):
    ADULT = "adult"
    CHILD = "child"


class Event(Base):
    __tablename__ = "events"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    event_type_id = Column(Uuid(as_uuid=True), ForeignKey("event_types.id", ondelete="SET NULL"), nullable=True)
    title = Column(String, nullable=False)
    client_name = Column(String, nullable=False)
    event_date = Column(Date, nullable=True)
    event_time = Column(String, nullable=True)
    address = Column(Text, nullable=True)
    adult_count = Column(Integer, default=0, nullable=False)
    child_count = Column(Integer, default=0, nullable=False)
    number_of_guests = Column(Integer, default=0, nullable=False)
    gratuity_percent = Column(Float, default=20.0, nullable=False)
    selected_upcharges = Column(JSON, nullable=False, default=list)  # e.g. ["Filet Mignon", "Chicken"]
    status = Column(SQLEnum(EventStatus, values_callable=lambda obj: [e.value for e in obj]), nullable=False, default=EventStatus.BOOKED)
    total_revenue = Column(Float, nullable=True)
    created_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    organization = relationship("Organization", back_populates="events")
    client = relationship("Client", back_populates="events")
    guests = relationship("EventGuest", back_populates="event", cascade="all, delete-orphan", order_by="EventGuest.created_at")
    event_type = relationship("EventType")
    tasks = relationship("EventTask", back_populates="event", cascade="all, delete-orphan")
    milestones = relationship("EventMilestone", back_populates="event", cascade="all, delete-orphan")
    menu_items = relationship("EventMenuItem", back_populates="event", cascade="all, delete-orphan")
    staff_assignments = relationship("StaffAssignment", back_populates="event", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_events_org_date", "organization_id", "event_date"),
    )

    def __repr__(self):
        return f"<Event {self.title} {self.event_date} ({self.status})>"


class EventGuest(Base):
    __tablename__ = "event_guests"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False, default="")
    guest_type = Column(SQLEnum(GuestType, values_callable=lambda obj: [e.value for e in obj]), nullable=False, default=GuestType.ADULT)
    proteins = Column(JSON, nullable=False, default=list)
    special_requests = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="guests")

    def __repr__(self):
        return f"<EventGuest {self.name} ({self.guest_type})>"
