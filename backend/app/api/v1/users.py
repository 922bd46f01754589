"""
User Management API Routes
"""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import require_permission, ensure_client_in_org
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate, UserDetail, UserListResponse
from app.services.auth_service import create_user

router = APIRouter()


@router.get("", response_model=UserListResponse)
async def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("admin.users")),
):
    """List users in the current organization"""
    users = db.query(User).filter(
        User.organization_id == current_user.organization_id
    ).order_by(User.created_at).all()
    return UserListResponse(users=[UserDetail.model_validate(u) for u in users], total=len(users))


@router.post("", response_model=UserDetail, status_code=status.HTTP_201_CREATED)
async def create_org_user(
    data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("admin.users")),
):
    """Create a user (employee, client login or another admin) in the current organization"""
    if db.query(User).filter(User.email == data.email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    ensure_client_in_org(db, data.client_id, current_user)

    user = create_user(
        db,
        email=data.email,
        password=data.password,
        full_name=data.full_name,
        organization_id=current_user.organization_id,
        role=data.role,
        client_id=data.client_id,
    )
    return UserDetail.model_validate(user)


@router.patch("/{user_id}", response_model=UserDetail)
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("admin.users")),
):
    """Change a user's name, role, client link or active flag"""
    user = db.query(User).filter(
        User.id == user_id,
        User.organization_id == current_user.organization_id,
    ).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if user.id == current_user.id and (data.role not in (None, "admin") or data.is_active is False):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot demote or deactivate yourself")

    updates = data.model_dump(exclude_unset=True)
    if "client_id" in updates:
        ensure_client_in_org(db, updates["client_id"], current_user)
    if "role" in updates and updates["role"] is not None:
        updates["role"] = UserRole(updates["role"])
    for field, value in updates.items():
        if value is None and field != "client_id":
            continue
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return UserDetail.model_validate(user)
