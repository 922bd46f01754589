"""
Event Type Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID


class EventTypeBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    base_price: float = Field(0.0, ge=0)
    is_active: bool = True


class EventTypeCreate(EventTypeBase):
    pass


class EventTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    base_price: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class EventTypeResponse(EventTypeBase):
    id: UUID
    organization_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class EventTypeList(BaseModel):
    event_types: List[EventTypeResponse]
    total: int
