"""
Event Type Model - the kinds of events an organization books (wedding, corporate, ...)
"""
from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey, Text, Uuid
from datetime import datetime
import uuid

from app.database import Base


class EventType(Base):
    __tablename__ = "event_types"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    base_price = Column(Float, nullable=False, default=0.0)
    # Deleting an event type only deactivates it
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<EventType {self.name}>"
