"""
Package Schemas
"""
from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field
from uuid import UUID

from app.schemas.menu import MenuItemResponse


class PackageBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price_per_guest: float = Field(0.0, ge=0)
    min_guests: int = Field(0, ge=0)
    is_active: bool = True


class PackageCreate(PackageBase):
    pass


class PackageUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price_per_guest: Optional[float] = Field(None, ge=0)
    min_guests: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class PackageItemCreate(BaseModel):
    menu_item_id: UUID
    qty_per_guest: float = Field(1.0, gt=0)


class PackageItemResponse(PackageItemCreate):
    id: UUID
    menu_item: Optional[MenuItemResponse] = None

    class Config:
        from_attributes = True


class PackageResponse(PackageBase):
    id: UUID
    organization_id: UUID
    items: List[PackageItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PackageList(BaseModel):
    packages: List[PackageResponse]
    total: int
