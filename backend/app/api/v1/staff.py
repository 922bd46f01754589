"""
Staff API Endpoints
"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission
from app.models.user import User
from app.models.staff import Staff
from app.schemas.staff import StaffCreate, StaffUpdate, StaffResponse, StaffList

router = APIRouter()


def _get_staff_or_404(db: Session, staff_id: UUID, current_user: User) -> Staff:
    member = db.query(Staff).filter(
        Staff.id == staff_id,
        Staff.organization_id == current_user.organization_id,
    ).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Staff member not found"
        )
    return member


@router.get("", response_model=StaffList)
async def list_staff(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.view")),
    position: Optional[str] = Query(None),
    active_only: bool = Query(False),
):
    query = db.query(Staff).filter(Staff.organization_id == current_user.organization_id)
    if position:
        query = query.filter(Staff.position == position)
    if active_only:
        query = query.filter(Staff.is_active == True)  # noqa: E712
    members = query.order_by(Staff.name).all()
    return StaffList(staff=[StaffResponse.model_validate(m) for m in members], total=len(members))


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    data: StaffCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.manage")),
):
    member = Staff(organization_id=current_user.organization_id, **data.model_dump())
    db.add(member)
    db.commit()
    db.refresh(member)
    return StaffResponse.model_validate(member)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.view")),
):
    return StaffResponse.model_validate(_get_staff_or_404(db, staff_id, current_user))


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: UUID,
    data: StaffUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.manage")),
):
    member = _get_staff_or_404(db, staff_id, current_user)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in ("email", "phone"):
            continue
        setattr(member, field, value)
    db.commit()
    db.refresh(member)
    return StaffResponse.model_validate(member)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_staff(
    staff_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("staff.manage")),
):
    member = _get_staff_or_404(db, staff_id, current_user)
    db.delete(member)
    db.commit()
