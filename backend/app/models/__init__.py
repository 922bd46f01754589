"""
Models package - Import all models to ensure SQLAlchemy relationships work
"""
# Import Base first
from app.database import Base

# Import models in dependency order to avoid relationship resolution issues
from app.models.organization import Organization
from app.models.user import User, UserRole
from app.models.client import Client
from app.models.event_type import EventType
from app.models.event import Event, EventGuest, EventStatus, GuestType
from app.models.menu_item import MenuItem
from app.models.package import Package, PackageItem
from app.models.inventory_item import InventoryItem
from app.models.staff import Staff, StaffAssignment
from app.models.event_task import EventTask, EventMilestone
from app.models.event_menu_item import EventMenuItem
from app.models.revenue_record import RevenueRecord
from app.models.invoice import Invoice, InvoicePayment, InvoiceStatus
from app.models.role_permission import RolePermission, PermissionAuditLog

__all__ = [
    "Base",
    "Organization",
    "User",
    "UserRole",
    "Client",
    "EventType",
    "Event",
    "EventGuest",
    "EventStatus",
    "GuestType",
    "MenuItem",
    "Package",
    "PackageItem",
    "EventMenuItem",
    "InventoryItem",
    "Staff",
    "StaffAssignment",
    "EventTask",
    "EventMilestone",
    "RevenueRecord",
    "Invoice",
    "InvoicePayment",
    "InvoiceStatus",
    "RolePermission",
    "PermissionAuditLog",
]
