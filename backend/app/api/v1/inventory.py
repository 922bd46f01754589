"""
Inventory API Endpoints

Ingredient stock with unit costs; the same rows price ingredient usage in
the quotes calculator.
"""
import logging
from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User
from app.models.inventory_item import InventoryItem
from app.schemas.inventory import InventoryItemCreate, InventoryItemUpdate, InventoryItemResponse, InventoryList

logger = logging.getLogger(__name__)

router = APIRouter()


def _org_items(db: Session, current_user: User):
    return db.query(InventoryItem).filter(InventoryItem.organization_id == current_user.organization_id)


def _get_item_or_404(db: Session, item_id: UUID, current_user: User) -> InventoryItem:
    item = _org_items(db, current_user).filter(InventoryItem.id == item_id).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Inventory item not found"
        )
    return item


def _as_list(items) -> InventoryList:
    return InventoryList(items=[InventoryItemResponse.model_validate(i) for i in items], total=len(items))


@router.get("", response_model=InventoryList)
async def list_inventory(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    query = _org_items(db, current_user)
    if category:
        query = query.filter(InventoryItem.category == category)
    if search:
        query = query.filter(InventoryItem.name.ilike(f"%{search}%"))

    total = query.count()
    items = query.order_by(InventoryItem.name).offset(skip).limit(limit).all()
    return InventoryList(items=[InventoryItemResponse.model_validate(i) for i in items], total=total)


@router.get("/low-stock", response_model=InventoryList)
async def list_low_stock(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
):
    """
    Items at or below their minimum stock level
    """
    items = _org_items(db, current_user).filter(
        InventoryItem.current_quantity <= InventoryItem.minimum_stock,
    ).order_by(InventoryItem.name).all()
    return _as_list(items)


@router.get("/expiring", response_model=InventoryList)
async def list_expiring(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
    days: int = Query(7, ge=0, le=365),
):
    """
    Items expiring within the next `days` days, soonest first
    """
    cutoff = date.today() + timedelta(days=days)
    items = _org_items(db, current_user).filter(
        InventoryItem.expiry_date.isnot(None),
        InventoryItem.expiry_date <= cutoff,
    ).order_by(InventoryItem.expiry_date).all()
    return _as_list(items)


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    item = InventoryItem(organization_id=current_user.organization_id, **data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    return InventoryItemResponse.model_validate(item)


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
):
    return InventoryItemResponse.model_validate(_get_item_or_404(db, item_id, current_user))


@router.patch("/{item_id}", response_model=InventoryItemResponse)
async def update_inventory_item(
    item_id: UUID,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    item = _get_item_or_404(db, item_id, current_user)
    nullable = {"category", "storage_location", "expiry_date"}
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in nullable:
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    if item.is_low_stock():
        logger.info("Inventory item %s is at or below minimum stock", item.name)
    return InventoryItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    item = _get_item_or_404(db, item_id, current_user)
    db.delete(item)
    db.commit()
