"""
Inventory Schemas
"""
from typing import Optional, List
from datetime import date, datetime
from pydantic import BaseModel, Field
from uuid import UUID


class InventoryItemBase(BaseModel):
    name: str = Field(..., min_length=1)
    category: Optional[str] = None
    unit_type: str = "unit"
    cost_per_unit: float = Field(0.0, ge=0)
    current_quantity: float = Field(0.0, ge=0)
    minimum_stock: float = Field(0.0, ge=0)
    storage_location: Optional[str] = None
    expiry_date: Optional[date] = None


class InventoryItemCreate(InventoryItemBase):
    pass


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    unit_type: Optional[str] = None
    cost_per_unit: Optional[float] = Field(None, ge=0)
    current_quantity: Optional[float] = Field(None, ge=0)
    minimum_stock: Optional[float] = Field(None, ge=0)
    storage_location: Optional[str] = None
    expiry_date: Optional[date] = None


class InventoryItemResponse(InventoryItemBase):
    id: UUID
    organization_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class InventoryList(BaseModel):
    items: List[InventoryItemResponse]
    total: int
