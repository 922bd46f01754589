"""
Event Menu Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field, model_validator
from uuid import UUID


class EventMenuItemCreate(BaseModel):
    """A menu line names exactly one dish or one package"""
    menu_item_id: Optional[UUID] = None
    package_id: Optional[UUID] = None
    quantity: int = Field(1, ge=1)
    per_guest_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_one_source(self):
        if (self.menu_item_id is None) == (self.package_id is None):
            raise ValueError("Give exactly one of menu_item_id or package_id")
        return self


class EventMenuItemUpdate(BaseModel):
    quantity: Optional[int] = Field(None, ge=1)
    per_guest_price: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None


class EventMenuItemResponse(BaseModel):
    id: UUID
    event_id: UUID
    menu_item_id: Optional[UUID] = None
    package_id: Optional[UUID] = None
    name: str
    quantity: int
    per_guest_price: Optional[float] = None
    effective_price: float
    total_price: float = 0.0
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class EventMenu(BaseModel):
    items: List[EventMenuItemResponse]
    guest_count: int
    menu_total: float
