"""
Menu Items API Endpoints
"""
import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User
from app.models.menu_item import MenuItem
from app.schemas.menu import MenuItemCreate, MenuItemUpdate, MenuItemResponse, MenuItemList

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_item_or_404(db: Session, item_id: UUID, current_user: User) -> MenuItem:
    item = db.query(MenuItem).filter(
        MenuItem.id == item_id,
        MenuItem.organization_id == current_user.organization_id,
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Menu item not found"
        )
    return item


@router.get("", response_model=MenuItemList)
async def list_menu_items(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
    category: Optional[str] = Query(None),
    vegetarian: Optional[bool] = Query(None),
    vegan: Optional[bool] = Query(None),
    gluten_free: Optional[bool] = Query(None),
    active_only: bool = Query(True),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
):
    """
    List menu items, optionally filtered by category and dietary flags
    """
    query = db.query(MenuItem).filter(MenuItem.organization_id == current_user.organization_id)
    if active_only:
        query = query.filter(MenuItem.is_active == True)  # noqa: E712
    if category:
        query = query.filter(MenuItem.category == category)
    if vegetarian is not None:
        query = query.filter(MenuItem.is_vegetarian == vegetarian)
    if vegan is not None:
        query = query.filter(MenuItem.is_vegan == vegan)
    if gluten_free is not None:
        query = query.filter(MenuItem.is_gluten_free == gluten_free)

    total = query.count()
    items = query.order_by(MenuItem.category, MenuItem.name).offset(skip).limit(limit).all()
    return MenuItemList(items=[MenuItemResponse.model_validate(i) for i in items], total=total)


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    data: MenuItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.create")),
):
    item = MenuItem(organization_id=current_user.organization_id, **data.model_dump())
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Menu item %s created", item.name)
    return MenuItemResponse.model_validate(item)


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
):
    return MenuItemResponse.model_validate(_get_item_or_404(db, item_id, current_user))


@router.patch("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: UUID,
    data: MenuItemUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    item = _get_item_or_404(db, item_id, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "description" and field != "category":
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return MenuItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_menu_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.delete")),
):
    item = _get_item_or_404(db, item_id, current_user)
    db.delete(item)
    db.commit()
    logger.info("Menu item %s deleted by %s", item_id, current_user.email)
