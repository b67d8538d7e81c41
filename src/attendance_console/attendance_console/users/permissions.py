"""Role-based permission table for the console."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Optional

from ..core.enums import Role
from ..core.exceptions import AuthorizationError


class Permission(str, Enum):
    VIEW_STUDENTS = "view_students"
    CREATE_STUDENT = "create_student"
    EDIT_STUDENT = "edit_student"
    DELETE_STUDENT = "delete_student"

    VIEW_SUBJECTS = "view_subjects"
    CREATE_SUBJECT = "create_subject"
    EDIT_SUBJECT = "edit_subject"
    DELETE_SUBJECT = "delete_subject"

    VIEW_ENROLLMENTS = "view_enrollments"
    MANAGE_ENROLLMENTS = "manage_enrollments"

    VIEW_ATTENDANCE = "view_attendance"
    MARK_ATTENDANCE = "mark_attendance"

    VIEW_RECORDS = "view_records"
    EXPORT_RECORDS = "export_records"

    SEND_EMAILS = "send_emails"
    VIEW_EMAIL_HISTORY = "view_email_history"

    MANAGE_USERS = "manage_users"


_READ_ONLY = (
    Permission.VIEW_STUDENTS,
    Permission.VIEW_SUBJECTS,
    Permission.VIEW_ENROLLMENTS,
    Permission.VIEW_ATTENDANCE,
    Permission.VIEW_RECORDS,
)

_EVERYTHING = frozenset(Permission)

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.PROFESSOR: frozenset(
        _READ_ONLY + (Permission.MARK_ATTENDANCE, Permission.SEND_EMAILS, Permission.VIEW_EMAIL_HISTORY)
    ),
    Role.REGISTRAR: _EVERYTHING - {Permission.MARK_ATTENDANCE, Permission.MANAGE_USERS},
    Role.ADMIN: _EVERYTHING,
    # superadmin is an alias for admin
    Role.SUPERADMIN: _EVERYTHING,
    Role.STAFF: frozenset(_READ_ONLY),
}

_DISPLAY_NAMES = {
    Role.PROFESSOR: "Professor",
    Role.REGISTRAR: "Registrar",
    Role.ADMIN: "Administrator",
    Role.SUPERADMIN: "Super Administrator",
    Role.STAFF: "Staff",
}


def _role(value) -> Optional[Role]:
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        return None


def has_permission(role, permission: Permission) -> bool:
    """Unknown or missing roles have no permissions."""
    known = _role(role) if role else None
    return known is not None and Permission(permission) in ROLE_PERMISSIONS[known]


def has_any_permission(role, permissions: Iterable[Permission]) -> bool:
    return bool(role) and any(has_permission(role, p) for p in permissions)


def has_all_permissions(role, permissions: Iterable[Permission]) -> bool:
    return bool(role) and all(has_permission(role, p) for p in permissions)


def can_manage_students(role) -> bool:
    return has_any_permission(
        role, (Permission.CREATE_STUDENT, Permission.EDIT_STUDENT, Permission.DELETE_STUDENT)
    )


def can_view_students(role) -> bool:
    return has_permission(role, Permission.VIEW_STUDENTS)


def can_manage_subjects(role) -> bool:
    return has_any_permission(
        role, (Permission.CREATE_SUBJECT, Permission.EDIT_SUBJECT, Permission.DELETE_SUBJECT)
    )


def can_view_subjects(role) -> bool:
    return has_permission(role, Permission.VIEW_SUBJECTS)


def can_manage_enrollments(role) -> bool:
    return has_permission(role, Permission.MANAGE_ENROLLMENTS)


def can_mark_attendance(role) -> bool:
    return has_permission(role, Permission.MARK_ATTENDANCE)


def can_view_attendance(role) -> bool:
    return has_permission(role, Permission.VIEW_ATTENDANCE)


def can_view_records(role) -> bool:
    return has_permission(role, Permission.VIEW_RECORDS)


def can_export_records(role) -> bool:
    return has_permission(role, Permission.EXPORT_RECORDS)


def can_send_emails(role) -> bool:
    return has_permission(role, Permission.SEND_EMAILS)


def can_manage_users(role) -> bool:
    return has_permission(role, Permission.MANAGE_USERS)


def get_role_permissions(role) -> list[Permission]:
    """Permissions of a role in declaration order."""
    known = _role(role)
    if known is None:
        return []
    return [p for p in Permission if p in ROLE_PERMISSIONS[known]]


def get_role_display_name(role) -> str:
    known = _role(role)
    return _DISPLAY_NAMES[known] if known else str(role)


def get_roles_with_permission(permission: Permission) -> list[Role]:
    return [role for role in Role if Permission(permission) in ROLE_PERMISSIONS[role]]


def require_permission(role, permission: Permission) -> None:
    if not has_permission(role, permission):
        raise AuthorizationError(f"Role '{role}' is not allowed to {Permission(permission).value.replace('_', ' ')}")
