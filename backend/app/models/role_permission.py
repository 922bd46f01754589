"""Role Permission models: per-org, per-role permission grants and their change history."""
import uuid as uuid_lib
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint, Index, Uuid

from app.database import Base


class RolePermission(Base):
    __tablename__ = "role_permissions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid_lib.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    role = Column(String, nullable=False)
    permission_key = Column(String, nullable=False)
    granted = Column(Boolean, nullable=False, default=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    updated_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)

    __table_args__ = (
        UniqueConstraint("organization_id", "role", "permission_key", name="uq_org_role_permission"),
        Index("ix_role_permissions_org_role", "organization_id", "role"),
    )


class PermissionAuditLog(Base):
    __tablename__ = "permission_audit_log"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid_lib.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String, nullable=False)
    permission_key = Column(String, nullable=False)
    old_granted = Column(Boolean, nullable=True)  # None when the row did not exist
    new_granted = Column(Boolean, nullable=False)
    changed_by = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    changed_at = Column(DateTime, default=datetime.utcnow, nullable=False)
