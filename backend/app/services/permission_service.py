"""
Role permission persistence: per-organization matrix, defaults seeding and
the audit trail of grant changes.
"""
import logging
import uuid as uuid_lib
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.config.permissions import (
    ALL_PERMISSIONS, CONFIGURABLE_ROLES, FULL_ACCESS_ROLES, DEFAULT_PERMISSIONS,
)
from app.models.role_permission import RolePermission, PermissionAuditLog
from app.models.user import User

logger = logging.getLogger(__name__)


def is_seeded(db: Session, organization_id) -> bool:
    return db.query(RolePermission).filter(
        RolePermission.organization_id == organization_id,
    ).count() > 0


def seed_defaults(db: Session, organization_id, updated_by=None) -> None:
    """Insert default permission rows for an organization."""
    for role in CONFIGURABLE_ROLES:
        granted_keys = DEFAULT_PERMISSIONS.get(role, frozenset())
        for key in ALL_PERMISSIONS:
            db.add(RolePermission(
                id=uuid_lib.uuid4(),
                organization_id=organization_id,
                role=role,
                permission_key=key,
                granted=(key in granted_keys),
                updated_at=datetime.utcnow(),
                updated_by=updated_by,
            ))
    db.commit()
    logger.info("Seeded default role permissions for organization %s", organization_id)


def get_matrix(db: Session, organization_id) -> Dict[str, Dict[str, bool]]:
    """Return {role: {permission_key: granted}} for an org."""
    rows = db.query(RolePermission).filter(
        RolePermission.organization_id == organization_id,
    ).all()
    matrix: Dict[str, Dict[str, bool]] = {role: {} for role in CONFIGURABLE_ROLES}
    for row in rows:
        if row.role in matrix and row.permission_key in ALL_PERMISSIONS:
            matrix[row.role][row.permission_key] = row.granted
    return matrix


def update_matrix(
    db: Session,
    organization_id,
    changes: Dict[str, Dict[str, bool]],
    changed_by=None,
) -> int:
    """
    Upsert grants from `changes` and write one audit row per actual change.
    Unknown roles and permission keys are ignored.

    Returns:
        Number of grants that changed
    """
    changed = 0
    for role, perms in changes.items():
        if role not in CONFIGURABLE_ROLES:
            continue
        for key, granted in perms.items():
            if key not in ALL_PERMISSIONS:
                continue
            existing = db.query(RolePermission).filter(
                RolePermission.organization_id == organization_id,
                RolePermission.role == role,
                RolePermission.permission_key == key,
            ).first()

            old_granted: Optional[bool] = existing.granted if existing else None
            if old_granted == granted:
                continue

            if existing:
                existing.granted = granted
                existing.updated_at = datetime.utcnow()
                existing.updated_by = changed_by
            else:
                db.add(RolePermission(
                    id=uuid_lib.uuid4(),
                    organization_id=organization_id,
                    role=role,
                    permission_key=key,
                    granted=granted,
                    updated_at=datetime.utcnow(),
                    updated_by=changed_by,
                ))
            db.add(PermissionAuditLog(
                id=uuid_lib.uuid4(),
                organization_id=organization_id,
                role=role,
                permission_key=key,
                old_granted=old_granted,
                new_granted=granted,
                changed_by=changed_by,
                changed_at=datetime.utcnow(),
            ))
            changed += 1

    db.commit()
    if changed:
        logger.info("Updated %d role permission grants for organization %s", changed, organization_id)
    return changed


def get_granted_permissions(db: Session, user: User) -> List[str]:
    """
    Flat list of permission keys granted to the user's role.
    Full-access roles get every key; unseeded organizations fall back to
    the static defaults.
    """
    role_val = user.role_value
    if role_val in FULL_ACCESS_ROLES:
        return list(ALL_PERMISSIONS.keys())

    if not is_seeded(db, user.organization_id):
        return sorted(DEFAULT_PERMISSIONS.get(role_val, frozenset()))

    rows = db.query(RolePermission).filter(
        RolePermission.organization_id == user.organization_id,
        RolePermission.role == role_val,
        RolePermission.granted == True,  # noqa: E712
    ).all()
    return [row.permission_key for row in rows if row.permission_key in ALL_PERMISSIONS]


def user_has_permission(db: Session, user: User, permission_key: str) -> bool:
    return permission_key in get_granted_permissions(db, user)


def get_audit_log(db: Session, organization_id, limit: int = 100) -> List[PermissionAuditLog]:
    return db.query(PermissionAuditLog).filter(
        PermissionAuditLog.organization_id == organization_id,
    ).order_by(PermissionAuditLog.changed_at.desc()).limit(limit).all()
