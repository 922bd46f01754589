"""
Event Schemas
"""
from typing import Optional, List, Literal
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from uuid import UUID

from app.config import settings
from app.models.event import EventStatus, GuestType

EventStatusName = Literal["booked", "confirmed", "in_progress", "completed", "cancelled"]


def _check_selection(value: List[str]) -> List[str]:
    if len(value) > settings.MAX_UPCHARGE_SELECTIONS:
        raise ValueError(f"at most {settings.MAX_UPCHARGE_SELECTIONS} selections allowed")
    if len(set(value)) != len(value):
        raise ValueError("selections must be unique")
    return value


class EventGuestIn(BaseModel):
    name: str = ""
    guest_type: Literal["adult", "child"] = "adult"
    proteins: List[str] = Field(default_factory=list)
    special_requests: Optional[str] = None

    @field_validator("proteins")
    @classmethod
    def check_proteins(cls, value):
        return _check_selection(value)


class EventGuestResponse(EventGuestIn):
    id: UUID
    guest_type: GuestType

    class Config:
        from_attributes = True


class EventBase(BaseModel):
    title: str = Field(..., min_length=1)
    client_name: str = Field(..., min_length=1)
    client_id: Optional[UUID] = None
    event_type_id: Optional[UUID] = None
    event_date: Optional[date] = None
    event_time: Optional[str] = None
    address: Optional[str] = None
    adult_count: int = Field(0, ge=0)
    child_count: int = Field(0, ge=0)
    gratuity_percent: float = Field(20.0, ge=0, le=100)
    selected_upcharges: List[str] = Field(default_factory=list)
    status: EventStatusName = "booked"
    total_revenue: Optional[float] = Field(None, ge=0)

    @field_validator("selected_upcharges")
    @classmethod
    def check_upcharges(cls, value):
        return _check_selection(value)


class EventCreate(EventBase):
    """Event with its full guest list"""
    guests: List[EventGuestIn] = Field(default_factory=list)


class EventUpdate(BaseModel):
    """Partial update; a supplied guest list replaces the stored one"""
    title: Optional[str] = None
    client_name: Optional[str] = None
    client_id: Optional[UUID] = None
    event_type_id: Optional[UUID] = None
    event_date: Optional[date] = None
    event_time: Optional[str] = None
    address: Optional[str] = None
    adult_count: Optional[int] = Field(None, ge=0)
    child_count: Optional[int] = Field(None, ge=0)
    gratuity_percent: Optional[float] = Field(None, ge=0, le=100)
    selected_upcharges: Optional[List[str]] = None
    status: Optional[EventStatusName] = None
    total_revenue: Optional[float] = Field(None, ge=0)
    guests: Optional[List[EventGuestIn]] = None

    @field_validator("selected_upcharges")
    @classmethod
    def check_upcharges(cls, value):
        return value if value is None else _check_selection(value)


class EventResponse(EventBase):
    id: UUID
    status: EventStatus
    organization_id: UUID
    number_of_guests: int
    guests: List[EventGuestResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventList(BaseModel):
    events: List[EventResponse]
    total: int
