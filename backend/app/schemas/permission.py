"""Schemas for the role permission management API."""
from typing import Dict, List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class PermissionKeyInfo(BaseModel):
    key: str
    label: str
    description: str
    category: str


class PermissionCatalogResponse(BaseModel):
    permissions: List[PermissionKeyInfo]
    defaults: Dict[str, List[str]]


class PermissionMatrixResponse(BaseModel):
    permissions: List[PermissionKeyInfo]
    matrix: Dict[str, Dict[str, bool]]


class PermissionMatrixUpdate(BaseModel):
    matrix: Dict[str, Dict[str, bool]]


class MyPermissionsResponse(BaseModel):
    role: str
    permissions: List[str]


class PermissionAuditEntry(BaseModel):
    role: str
    permission_key: str
    old_granted: Optional[bool] = None
    new_granted: bool
    changed_by: Optional[UUID] = None
    changed_at: datetime

    class Config:
        from_attributes = True


class PermissionAuditResponse(BaseModel):
    entries: List[PermissionAuditEntry]
