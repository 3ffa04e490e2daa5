"""Module/action registry and subscription-based access defaults."""
from __future__ import annotations

from typing import Literal

PermissionAction = Literal["view", "add", "edit", "delete"]

ACTION_BY_METHOD: dict[str, PermissionAction] = {
    "GET": "view",
    "HEAD": "view",
    "OPTIONS": "view",
    "POST": "add",
    "PUT": "edit",
    "PATCH": "edit",
    "DELETE": "delete",
}

SYSTEM_MODULES: list[dict[str, str]] = [
    {"key": "account", "name": "Account"},
    {"key": "calendar", "name": "Calendar"},
    {"key": "academic_years", "name": "Academic Years"},
    {"key": "holidays", "name": "Holidays"},
    {"key": "classes", "name": "Classes"},
    {"key": "subjects", "name": "Subjects"},
    {"key": "timetable", "name": "Timetable"},
    {"key": "lessons", "name": "Lessons"},
    {"key": "tasks", "name": "Tasks"},
    {"key": "events", "name": "Events"},
]

PAID_STATUSES = frozenset({"active", "trialing"})


def _full_permissions() -> dict[str, bool]:
    return {"view": True, "add": True, "edit": True, "delete": True}


def _view_only() -> dict[str, bool]:
    return {"view": True, "add": False, "edit": False, "delete": False}


def _module_defaults(fill: dict[str, bool]) -> dict[str, dict[str, bool]]:
    return {module["key"]: dict(fill) for module in SYSTEM_MODULES}


PAID_PERMISSIONS: dict[str, dict[str, bool]] = _module_defaults(_full_permissions())

# Lapsed or never-subscribed accounts can still see their data and manage the account.
UNPAID_PERMISSIONS: dict[str, dict[str, bool]] = {
    **_module_defaults({"view": False, "add": False, "edit": False, "delete": False}),
    "account": {"view": True, "add": False, "edit": True, "delete": False},
    "calendar": _view_only(),
    "academic_years": _view_only(),
    "holidays": _view_only(),
}


def permissions_for(subscription_status: str | None) -> dict[str, dict[str, bool]]:
    if subscription_status in PAID_STATUSES:
        return PAID_PERMISSIONS
    return UNPAID_PERMISSIONS


def has_access(subscription_status: str | None, module: str, action: str) -> bool:
    permission = permissions_for(subscription_status).get(module)
    if not permission:
        return False
    return bool(permission.get(action, False))
