"""
Client Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel
from uuid import UUID


class ClientBase(BaseModel):
    """Base client schema"""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool = True


class ClientCreate(ClientBase):
    """Schema for creating a client"""
    pass


class ClientUpdate(BaseModel):
    """Schema for updating a client"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: Optional[bool] = None


class ClientResponse(ClientBase):
    """Client response schema"""
    id: UUID
    organization_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientList(BaseModel):
    """List of clients with pagination"""
    clients: List[ClientResponse]
    total: int
