"""
Staff Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID


class StaffBase(BaseModel):
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    position: str = "server"
    hourly_rate: float = Field(0.0, ge=0)
    is_active: bool = True


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    hourly_rate: Optional[float] = Field(None, ge=0)
    is_active: Optional[bool] = None


class StaffResponse(StaffBase):
    id: UUID
    organization_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StaffList(BaseModel):
    staff: List[StaffResponse]
    total: int


class StaffAssignmentCreate(BaseModel):
    staff_id: UUID
    role_for_event: str = Field(..., min_length=1)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    hourly_rate: Optional[float] = Field(None, ge=0)


class StaffAssignmentResponse(StaffAssignmentCreate):
    id: UUID
    event_id: UUID
    staff_name: str
    effective_rate: float
    hours: float
    labor_cost: float
    created_at: datetime

    class Config:
        from_attributes = True
