from datetime import datetime
from types import SimpleNamespace

import pytest

from attendance_console.attendance.service import AttendanceService
from attendance_console.container import build_container
from attendance_console.core.enums import Role
from attendance_console.core.exceptions import AuthorizationError, ValidationError
from attendance_console.spreadsheets.attendance_sheet import build_import_template
from attendance_console.students.service import StudentService
from attendance_console.subjects.service import SubjectService
from attendance_console.users.service import AuthService, UserService
from attendance_console.validation.fields import FileInfo
from attendance_console.validation.policy import ValidationPolicy
from attendance_console.validation.snapshot import Snapshot

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


def test_student_service_checks_role_before_validating(clock):
    svc = StudentService(clock=clock)

    with pytest.raises(AuthorizationError):
        svc.validate(current_role=Role.PROFESSOR, payload={}, snapshot=Snapshot())

    result = svc.validate(
        current_role=Role.REGISTRAR,
        payload={"student_number": "24-0001", "email": "john.doe@example.com"},
        snapshot=Snapshot(),
    )
    assert result.is_valid


def test_student_deletion_check(clock):
    snapshot = Snapshot.from_dict({"enrollments": [{"student_id": 4, "subject_id": 1}]})
    result = StudentService(clock=clock).deletion_check(current_role="admin", student_id="4", snapshot=snapshot)
    assert result.related_entities == ("1 subject enrollment(s)",)


def test_subject_capacity_check_counts_snapshot():
    snapshot = Snapshot.from_dict({"enrollments": [{"student_id": i, "subject_id": 9} for i in range(5)]})
    svc = SubjectService()

    ok = svc.capacity_check(current_role="registrar", subject={"id": 9, "code": "CS101", "capacity": 6}, snapshot=snapshot)
    full = svc.capacity_check(
        current_role="registrar", subject={"id": 9, "code": "CS101", "capacity": 6}, additional=2, snapshot=snapshot
    )

    assert ok.is_valid
    assert full.error == "Cannot enroll 2 student(s). Only 1 spot(s) available (capacity: 6)"
    with pytest.raises(ValidationError):
        svc.capacity_check(current_role="registrar", subject={"code": "CS101"}, additional=0, snapshot=snapshot)


def test_attendance_service_uses_policy_limits(clock):
    svc = AttendanceService(policy=ValidationPolicy(bulk_attendance_limit=2), clock=clock)

    result = svc.validate_bulk(current_role="professor", student_ids=[1, 2, 3], day="2025-03-15", status="present")

    assert result.error == "Bulk operation limit exceeded. Maximum 2 items allowed, got 3"
    with pytest.raises(ValidationError):
        svc.validate_bulk(current_role="professor", student_ids="1,2", day="2025-03-15", status="present")
    with pytest.raises(AuthorizationError):
        svc.validate_bulk(current_role="registrar", student_ids=[1], day="2025-03-15", status="present")


def test_attendance_import_rejects_wrong_file_before_parsing(clock):
    svc = AttendanceService(clock=clock)
    report = svc.validate_import(
        current_role="professor",
        upload=FileInfo(filename="photo.png", size=10, content_type="image/png"),
        content=b"\x89PNG",
    )
    assert not report.is_valid
    assert report.marks == ()


def test_attendance_import_of_template(clock, fixed_now):
    svc = AttendanceService(clock=clock)
    content = build_import_template(today=fixed_now.date())

    report = svc.validate_import(
        current_role="admin",
        upload=FileInfo(filename="template.xlsx", size=len(content), content_type=XLSX),
        content=content,
    )

    assert report.is_valid
    assert [m.student_number for m in report.marks] == ["24-0001", "24-0002", "24-0003"]
    assert report.to_dict()["rows"][1]["status"] == "late"


def test_attendance_export_names_file_by_day(clock):
    sheet = AttendanceService(clock=clock).export(
        current_role="registrar",
        records=[{"studentNumber": "24-0001", "status": "present", "timeSlot": "arrival", "timestamp": "2025-03-14T08:00:00"}],
        fmt="CSV",
    )
    assert sheet.filename == "attendance_export_2025-03-15.csv"
    assert b"24-0001" in sheet.content


def test_attendance_summary_report(clock):
    svc = AttendanceService(clock=clock)
    daily = {"date": "2025-03-14", "total_students": 2, "present": 2, "attendance_rate": 100}

    dated = svc.summary_report(current_role="registrar", daily=daily, students=[], report_date="2025-03-14")
    today = svc.summary_report(current_role="admin", daily=daily)

    assert dated.filename == "attendance_summary_2025-03-14.xlsx"
    assert today.filename == "attendance_summary_2025-03-15.xlsx"
    assert dated.content[:2] == b"PK"
    with pytest.raises(ValidationError):
        svc.summary_report(current_role="registrar", daily=daily, report_date="14/03/2025")
    with pytest.raises(AuthorizationError):
        svc.summary_report(current_role="professor", daily=daily)


def test_auth_and_user_services():
    assert AuthService().validate_login({"email": "a@b.co", "password": "x"}).is_valid
    assert not AuthService().validate_signup({}).is_valid

    snapshot = Snapshot.from_dict({"authored_records": [{"id": 1, "created_by": 3}]})
    assert not UserService().deletion_check(current_role="admin", user_id=3, snapshot=snapshot)
    with pytest.raises(AuthorizationError):
        UserService().deletion_check(current_role="registrar", user_id=3, snapshot=snapshot)


def test_container_reads_policy_from_settings():
    settings = SimpleNamespace(ATTENDANCE_EDIT_WINDOW_DAYS=7, DUPLICATE_ATTENDANCE_BY_TIME_SLOT=True)

    container = build_container(settings=settings, clock=lambda: datetime(2025, 3, 15, 9, 0))

    assert container.policy.edit_window_days == 7
    assert container.policy.duplicate_attendance_by_time_slot is True
    assert container.policy.import_row_limit == 500
