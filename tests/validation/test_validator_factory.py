from datetime import datetime

import pytest

from attendance_console.core.enums import EntityKind
from attendance_console.core.exceptions import ValidationError
from attendance_console.validation.factory import EntityValidatorFactory, validate_submission
from attendance_console.validation.snapshot import Snapshot
from attendance_console.validation.strategies.attendance_strategy import AttendanceValidator
from attendance_console.validation.strategies.base import ValidationContext
from attendance_console.validation.strategies.enrollment_strategy import EnrollmentValidator
from attendance_console.validation.strategies.student_strategy import StudentValidator
from attendance_console.validation.strategies.subject_strategy import SubjectValidator


@pytest.mark.parametrize(
    "kind, expected",
    [
        (EntityKind.STUDENT, StudentValidator),
        ("subject", SubjectValidator),
        ("attendance", AttendanceValidator),
        (EntityKind.ENROLLMENT, EnrollmentValidator),
    ],
)
def test_factory_picks_validator_for_kind(kind, expected):
    assert isinstance(EntityValidatorFactory().for_kind(kind), expected)


def test_factory_rejects_unknown_kind():
    with pytest.raises(ValueError):
        EntityValidatorFactory().for_kind("invoice")


def test_submission_uses_context_clock():
    context = ValidationContext(now=datetime(2025, 3, 15, 9, 0))
    payload = {"studentId": 1, "status": "present", "date": "2025-03-16"}

    result = validate_submission(EntityKind.ATTENDANCE, payload, Snapshot(), context=context)

    assert result.errors == {"date": "Attendance date cannot be in the future"}


def test_enrollment_submission_resolves_records_from_snapshot():
    snapshot = Snapshot.from_dict(
        {
            "students": [{"id": 1, "studentNumber": "24-0001", "email": "a@example.com", "status": "active"}],
            "subjects": [{"id": "7", "code": "CS101", "capacity": 30}],
            "enrollments": [{"studentId": 1, "subjectId": 7}],
        }
    )

    result = validate_submission("enrollment", {"student_id": "1", "subject_id": 7}, snapshot)

    assert result.errors == {"subject_id": "Student is already enrolled in this subject"}


def test_non_mapping_payload_raises():
    with pytest.raises(ValidationError):
        validate_submission("student", ["not", "a", "mapping"], Snapshot())


@pytest.mark.parametrize(
    "kind, payload, field, message",
    [
        ("student", {"student_number": "24-0001", "email": "a@example.com", "age": "--5"}, "age", "Age must be a valid number"),
        ("student", {"student_number": "24-0001", "email": "a@example.com", "age": "²"}, "age", "Age must be a valid number"),
        ("subject", {"code": "CS101", "name": "Intro to Computing", "capacity": "²"}, "capacity", "Capacity must be a valid number"),
        ("subject", {"code": "CS101", "name": "Intro to Computing", "capacity": "-–-7"}, "capacity", "Capacity must be a valid number"),
    ],
)
def test_garbage_numbers_fail_validation(kind, payload, field, message):
    context = ValidationContext(now=datetime(2025, 3, 15, 9, 0))

    result = validate_submission(kind, payload, Snapshot(), context=context)

    assert result.errors == {field: message}
