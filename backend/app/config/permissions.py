"""
Permission registry: single source of truth for all permission keys, labels,
categories, and per-role defaults.
"""
from types import MappingProxyType

ALL_PERMISSIONS = MappingProxyType({
    # Events
    "events.view":   {"label": "View Events",   "description": "View event listings and calendar", "category": "events"},
    "events.create": {"label": "Create Events", "description": "Create new events",                "category": "events"},
    "events.edit":   {"label": "Edit Events",   "description": "Modify existing events",           "category": "events"},
    "events.delete": {"label": "Delete Events", "description": "Remove events from system",        "category": "events"},

    # Menu
    "menu.view":   {"label": "View Menu",         "description": "View menu items and dishes",    "category": "menu"},
    "menu.create": {"label": "Create Menu Items", "description": "Add new dishes and menu items", "category": "menu"},
    "menu.edit":   {"label": "Edit Menu Items",   "description": "Modify menu items and pricing", "category": "menu"},
    "menu.delete": {"label": "Delete Menu Items", "description": "Remove menu items",             "category": "menu"},

    # Clients
    "clients.view":   {"label": "View Clients",   "description": "View client information", "category": "clients"},
    "clients.create": {"label": "Create Clients", "description": "Add new clients",         "category": "clients"},
    "clients.edit":   {"label": "Edit Clients",   "description": "Modify client details",   "category": "clients"},
    "clients.delete": {"label": "Delete Clients", "description": "Remove clients",          "category": "clients"},

    # Billing
    "billing.view":   {"label": "View Billing",    "description": "View invoices and financial data", "category": "billing"},
    "billing.create": {"label": "Create Invoices", "description": "Generate invoices",                "category": "billing"},
    "billing.edit":   {"label": "Edit Billing",    "description": "Modify billing information",       "category": "billing"},

    # Analytics
    "analytics.view":   {"label": "View Analytics", "description": "Access reports and analytics", "category": "analytics"},
    "analytics.export": {"label": "Export Data",    "description": "Export reports and data",      "category": "analytics"},

    # Staff
    "staff.view":   {"label": "View Staff",   "description": "View staff members and assignments", "category": "staff"},
    "staff.manage": {"label": "Manage Staff", "description": "Add, edit, and remove staff",        "category": "staff"},

    # Admin
    "admin.settings":    {"label": "System Settings",       "description": "Access system configuration",    "category": "admin"},
    "admin.users":       {"label": "User Management",       "description": "Manage user accounts and roles", "category": "admin"},
    "admin.permissions": {"label": "Permission Management", "description": "Configure role permissions",     "category": "admin"},
})

CONFIGURABLE_ROLES = ("employee", "client")
FULL_ACCESS_ROLES = ("admin",)

# Defaults: role -> set of granted permission keys
DEFAULT_PERMISSIONS = MappingProxyType({
    "admin": frozenset(ALL_PERMISSIONS),
    "employee": frozenset({
        "events.view", "events.create", "events.edit",
        "menu.view", "menu.create", "menu.edit",
        "clients.view", "clients.create", "clients.edit",
        "billing.view",
        "staff.view",
    }),
    "client": frozenset({
        "events.view",
        "menu.view",
        "billing.view",
    }),
})


def has_permission(role: str, permission_key: str) -> bool:
    """Static lookup: is `permission_key` granted to `role` by default?"""
    if permission_key not in ALL_PERMISSIONS:
        return False
    return permission_key in DEFAULT_PERMISSIONS.get(role, frozenset())
