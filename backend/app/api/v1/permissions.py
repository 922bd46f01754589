"""
Role Permission Management API
"""
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user, require_permission
from app.models.user import User
from app.config.permissions import ALL_PERMISSIONS, DEFAULT_PERMISSIONS
from app.schemas.permission import (
    PermissionCatalogResponse, PermissionMatrixResponse, PermissionMatrixUpdate,
    MyPermissionsResponse, PermissionKeyInfo, PermissionAuditEntry, PermissionAuditResponse,
)
from app.services import permission_service

router = APIRouter()


def _key_infos() -> List[PermissionKeyInfo]:
    return [PermissionKeyInfo(key=key, **info) for key, info in ALL_PERMISSIONS.items()]


@router.get("/catalog", response_model=PermissionCatalogResponse)
async def get_permission_catalog(
    current_user: User = Depends(get_current_user),
):
    """All permission keys and the built-in defaults per role"""
    defaults = {role: sorted(keys) for role, keys in DEFAULT_PERMISSIONS.items()}
    return PermissionCatalogResponse(permissions=_key_infos(), defaults=defaults)


@router.get("/matrix", response_model=PermissionMatrixResponse)
async def get_permission_matrix(
    current_user: User = Depends(require_permission("admin.permissions")),
    db: Session = Depends(get_db),
):
    """Get the full permission matrix for all configurable roles.
    Auto-seeds defaults if the organization has no permission rows yet."""
    org_id = current_user.organization_id
    if not permission_service.is_seeded(db, org_id):
        permission_service.seed_defaults(db, org_id, updated_by=current_user.id)

    return PermissionMatrixResponse(
        permissions=_key_infos(),
        matrix=permission_service.get_matrix(db, org_id),
    )


@router.put("/matrix", response_model=PermissionMatrixResponse)
async def update_permission_matrix(
    data: PermissionMatrixUpdate,
    current_user: User = Depends(require_permission("admin.permissions")),
    db: Session = Depends(get_db),
):
    """Save the updated permission matrix. Only changed grants are audited;
    admin is not configurable."""
    org_id = current_user.organization_id
    if not permission_service.is_seeded(db, org_id):
        permission_service.seed_defaults(db, org_id, updated_by=current_user.id)

    permission_service.update_matrix(db, org_id, data.matrix, changed_by=current_user.id)

    return PermissionMatrixResponse(
        permissions=_key_infos(),
        matrix=permission_service.get_matrix(db, org_id),
    )


@router.get("/me", response_model=MyPermissionsResponse)
async def get_my_permissions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Return the flat list of granted permission keys for the current user."""
    return MyPermissionsResponse(
        role=current_user.role_value,
        permissions=sorted(permission_service.get_granted_permissions(db, current_user)),
    )


@router.get("/audit", response_model=PermissionAuditResponse)
async def get_permission_audit(
    current_user: User = Depends(require_permission("admin.permissions")),
    db: Session = Depends(get_db),
    limit: int = Query(100, ge=1, le=1000),
):
    """Most recent grant changes first"""
    entries = permission_service.get_audit_log(db, current_user.organization_id, limit=limit)
    return PermissionAuditResponse(entries=[PermissionAuditEntry.model_validate(e) for e in entries])
