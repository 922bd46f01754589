"""
Menu Packages API Endpoints
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
from app.models.package import Package, PackageItem
from app.schemas.package import (
    PackageCreate, PackageUpdate, PackageResponse, PackageList, PackageItemCreate, PackageItemResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DIETARY_FLAGS = ("is_vegetarian", "is_vegan", "is_gluten_free")


def _get_package_or_404(db: Session, package_id: UUID, current_user: User) -> Package:
    package = db.query(Package).filter(
        Package.id == package_id,
        Package.organization_id == current_user.organization_id,
    ).first()
    if not package:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Package not found"
        )
    return package


def _meets_diet(package: Package, required: tuple) -> bool:
    """A package qualifies when every dish in it carries each required flag"""
    return all(
        getattr(item.menu_item, flag)
        for item in package.items if item.menu_item is not None
        for flag in required
    )


@router.get("", response_model=PackageList)
async def list_packages(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
    vegetarian: Optional[bool] = Query(None),
    vegan: Optional[bool] = Query(None),
    gluten_free: Optional[bool] = Query(None),
    active_only: bool = Query(True),
):
    """
    Packages with their dishes. Dietary filters keep packages whose dishes
    all meet them.
    """
    query = db.query(Package).filter(Package.organization_id == current_user.organization_id)
    if active_only:
        query = query.filter(Package.is_active == True)  # noqa: E712
    packages = query.order_by(Package.name).all()

    required = tuple(flag for flag, wanted in zip(DIETARY_FLAGS, (vegetarian, vegan, gluten_free)) if wanted)
    if required:
        packages = [p for p in packages if _meets_diet(p, required)]
    return PackageList(packages=[PackageResponse.model_validate(p) for p in packages], total=len(packages))


@router.post("", response_model=PackageResponse, status_code=status.HTTP_201_CREATED)
async def create_package(
    data: PackageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.create")),
):
    package = Package(organization_id=current_user.organization_id, **data.model_dump())
    db.add(package)
    db.commit()
    db.refresh(package)
    logger.info("Package %s created", package.name)
    return PackageResponse.model_validate(package)


@router.get("/{package_id}", response_model=PackageResponse)
async def get_package(
    package_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.view")),
):
    return PackageResponse.model_validate(_get_package_or_404(db, package_id, current_user))


@router.patch("/{package_id}", response_model=PackageResponse)
async def update_package(
    package_id: UUID,
    data: PackageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    package = _get_package_or_404(db, package_id, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(package, field, value)
    db.commit()
    db.refresh(package)
    return PackageResponse.model_validate(package)


@router.delete("/{package_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_package(
    package_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.delete")),
):
    package = _get_package_or_404(db, package_id, current_user)
    db.delete(package)
    db.commit()
    logger.info("Package %s deleted by %s", package_id, current_user.email)


@router.post("/{package_id}/items", response_model=PackageItemResponse, status_code=status.HTTP_201_CREATED)
async def add_package_item(
    package_id: UUID,
    data: PackageItemCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    """
    Add a dish to a package
    """
    package = _get_package_or_404(db, package_id, current_user)
    dish = db.query(MenuItem).filter(
        MenuItem.id == data.menu_item_id,
        MenuItem.organization_id == current_user.organization_id,
    ).first()
    if not dish:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Menu item not found in organization")
    if any(item.menu_item_id == dish.id for item in package.items):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{dish.name} is already in the package")

    item = PackageItem(menu_item_id=dish.id, qty_per_guest=data.qty_per_guest)
    package.items.append(item)
    db.commit()
    db.refresh(item)
    return PackageItemResponse.model_validate(item)


@router.delete("/{package_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_package_item(
    package_id: UUID,
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("menu.edit")),
):
    package = _get_package_or_404(db, package_id, current_user)
    item = next((i for i in package.items if i.id == item_id), None)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Package item not found")
    package.items.remove(item)
    db.commit()
