"""
User Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime
from uuid import UUID

from app.models.user import UserRole

RoleName = Literal["admin", "employee", "client"]


class UserCreate(BaseModel):
    """User creation schema"""
    email: EmailStr
    full_name: str
    password: str = Field(..., min_length=8)
    role: RoleName = "client"
    client_id: Optional[UUID] = None


class UserUpdate(BaseModel):
    """User update schema"""
    full_name: Optional[str] = None
    role: Optional[RoleName] = None
    client_id: Optional[UUID] = None
    is_active: Optional[bool] = None


class UserDetail(BaseModel):
    """User response schema"""
    id: UUID
    email: str
    full_name: str
    role: UserRole
    organization_id: UUID
    client_id: Optional[UUID] = None
    is_active: bool
    created_at: datetime
    last_login: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    """List of users response"""
    users: List[UserDetail]
    total: int
