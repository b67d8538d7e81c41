import pytest

from attendance_console.core.enums import Role
from attendance_console.core.exceptions import AuthorizationError
from attendance_console.users import permissions as perms
from attendance_console.users.permissions import Permission


def test_professor_marks_attendance_but_cannot_edit_records():
    assert perms.can_mark_attendance("professor")
    assert perms.can_send_emails(Role.PROFESSOR)
    assert not perms.can_manage_students("professor")
    assert not perms.can_export_records("professor")


def test_registrar_manages_records_but_does_not_mark_attendance():
    assert perms.can_manage_students("registrar")
    assert perms.can_manage_enrollments("registrar")
    assert perms.can_export_records("registrar")
    assert not perms.can_mark_attendance("registrar")
    assert not perms.can_manage_users("registrar")


@pytest.mark.parametrize("role", ["admin", "superadmin", "ADMIN"])
def test_admins_have_everything(role):
    assert perms.has_all_permissions(role, list(Permission))


def test_staff_is_read_only():
    assert perms.get_role_permissions("staff") == [
        Permission.VIEW_STUDENTS,
        Permission.VIEW_SUBJECTS,
        Permission.VIEW_ENROLLMENTS,
        Permission.VIEW_ATTENDANCE,
        Permission.VIEW_RECORDS,
    ]


@pytest.mark.parametrize("role", [None, "", "janitor"])
def test_unknown_roles_have_nothing(role):
    assert not perms.has_permission(role, Permission.VIEW_STUDENTS)
    assert not perms.has_any_permission(role, [Permission.VIEW_STUDENTS])
    assert perms.get_role_permissions(role) == []


def test_role_lookups():
    assert perms.get_role_display_name("superadmin") == "Super Administrator"
    assert perms.get_role_display_name("janitor") == "janitor"
    assert perms.get_roles_with_permission(Permission.MANAGE_USERS) == [Role.ADMIN, Role.SUPERADMIN]


def test_require_permission_raises():
    perms.require_permission("admin", Permission.MANAGE_USERS)
    with pytest.raises(AuthorizationError):
        perms.require_permission("professor", Permission.DELETE_STUDENT)
