from datetime import timedelta

from attendance_console.attendance.model import AttendanceData
from attendance_console.core.enums import ErrorKind
from attendance_console.enrollments.model import EnrollmentData
from attendance_console.students.model import NfcCard, StudentData
from attendance_console.subjects.model import SubjectData
from attendance_console.validation.composite import (
    validate_attendance_data,
    validate_enrollment_data,
    validate_student_data,
    validate_subject_data,
)
from attendance_console.validation.policy import ValidationPolicy

EXISTING_STUDENTS = [
    StudentData(student_number="24-0001", email="john.doe@example.com", id=1),
    StudentData(student_number="24-0002", email="bad", id=2),
]


def test_valid_new_student(today):
    proposed = StudentData(
        student_number="24-0003",
        email="bob@example.com",
        first_name="Bob",
        last_name="Johnson",
        birthdate="2010-06-01",
        age=14,
        status="active",
    )
    assert validate_student_data(proposed, EXISTING_STUDENTS, today=today).is_valid


def test_student_update_does_not_collide_with_itself(today):
    proposed = StudentData(student_number="24-0001", email="john.doe@example.com", id=1)
    assert validate_student_data(proposed, EXISTING_STUDENTS, is_update=True, today=today)
    assert not validate_student_data(proposed, EXISTING_STUDENTS, is_update=False, today=today)


def test_every_failure_is_kept_and_last_message_wins(today):
    proposed = StudentData(student_number="24-0009", email="bad")

    result = validate_student_data(proposed, EXISTING_STUDENTS, today=today)

    assert result.messages["email"] == ("Invalid email format", 'Email "bad" is already registered')
    assert result.errors["email"] == 'Email "bad" is already registered'
    assert result.kinds["email"] is ErrorKind.UNIQUENESS


def test_age_mismatch_is_reported_on_age(today):
    proposed = StudentData(student_number="24-0003", email="bob@example.com", birthdate="2010-06-01", age=20)
    result = validate_student_data(proposed, EXISTING_STUDENTS, today=today)
    assert result.errors == {"age": "Age (20) does not match birthdate. Expected age: 14"}


def test_age_tolerance_comes_from_policy(today):
    proposed = StudentData(student_number="24-0003", email="bob@example.com", birthdate="2010-06-01", age=20)
    loose = ValidationPolicy(age_tolerance_years=6)
    assert validate_student_data(proposed, EXISTING_STUDENTS, today=today, policy=loose)


def test_school_domain_policy_and_nfc_uniqueness(today):
    policy = ValidationPolicy(school_email_domain="school.edu")
    proposed = StudentData(student_number="24-0003", email="bob@gmail.com", nfc_id="04a1b2c3")
    result = validate_student_data(
        proposed, EXISTING_STUDENTS, nfc_cards=[NfcCard(nfc_id="04A1B2C3", id=9)], today=today, policy=policy
    )
    assert result.errors["email"] == "Email must be from the school.edu domain"
    assert result.errors["nfc_id"] == 'NFC ID "04a1b2c3" is already assigned to another card'


def test_subject_capacity_update_checks_headcount():
    enrollments = [EnrollmentData(student_id=i, subject_id=1) for i in range(12)]
    proposed = SubjectData(code="CS101", name="Intro to Computing", id=1, capacity=10)

    updated = validate_subject_data(proposed, [SubjectData(code="CS101", id=1)], is_update=True, enrollments=enrollments)
    assert updated.errors == {"capacity": "Cannot set capacity to 10. There are currently 12 students enrolled"}

    created = validate_subject_data(
        SubjectData(code="CS102", name="Intro to Computing", capacity=10), [], enrollments=enrollments
    )
    assert created.is_valid


def test_subject_duplicate_code():
    result = validate_subject_data(SubjectData(code="cs101", name="Intro"), [SubjectData(code="CS101", id=1)])
    assert result.errors == {"code": 'Subject code "cs101" already exists'}


def test_attendance_requires_student_and_day(fixed_now):
    result = validate_attendance_data(AttendanceData(student_id="", status="present"), [], now=fixed_now)
    assert result.errors == {"student_id": "Student is required", "date": "Date is required"}


def test_attendance_edit_window_applies_to_updates_only(fixed_now):
    old_day = (fixed_now - timedelta(days=40)).date().isoformat()
    mark = AttendanceData(student_id=1, status="late", id=3, date=old_day)

    assert validate_attendance_data(mark, [], now=fixed_now).is_valid
    updated = validate_attendance_data(mark, [], is_update=True, now=fixed_now)
    assert updated.errors == {"date": "Cannot modify attendance older than 30 days"}


def test_attendance_future_timestamp_beyond_skew(fixed_now):
    mark = AttendanceData(student_id=1, status="present", timestamp=(fixed_now + timedelta(hours=1)).isoformat())
    result = validate_attendance_data(mark, [], now=fixed_now)
    assert result.errors == {"timestamp": "Attendance timestamp cannot be in the future"}


def test_attendance_duplicate_depends_on_slot_policy(fixed_now):
    existing = [AttendanceData(student_id=1, status="present", id=1, date="2025-03-15", time_slot="arrival")]
    departure = AttendanceData(student_id=1, status="present", date="2025-03-15", time_slot="departure")

    result = validate_attendance_data(departure, existing, now=fixed_now)
    assert result.errors == {"date": "Attendance record already exists for this student on 2025-03-15"}

    by_slot = ValidationPolicy(duplicate_attendance_by_time_slot=True)
    assert validate_attendance_data(departure, existing, now=fixed_now, policy=by_slot)


def test_enrollment_checks():
    student = StudentData(student_number="24-0001", email="a@example.com", id=1, status="active")
    subject = SubjectData(code="CS101", id=7, capacity=2)
    existing = [EnrollmentData(student_id=2, subject_id=7), EnrollmentData(student_id=3, subject_id=7)]
    enrollment = EnrollmentData(student_id=1, subject_id=7)

    missing = validate_enrollment_data(enrollment, None, None, [])
    assert missing.errors == {"student_id": "Student not found", "subject_id": "Subject not found"}

    full = validate_enrollment_data(enrollment, student, subject, existing)
    assert full.errors == {"subject_id": "Cannot enroll 1 student(s). Only 0 spot(s) available (capacity: 2)"}

    graduated = StudentData(student_number="24-0001", email="a@example.com", id=1, status="graduated")
    result = validate_enrollment_data(enrollment, graduated, SubjectData(code="CS101", id=7), [])
    assert result.errors == {"student_id": 'Cannot enroll student with status "graduated". Student must be active.'}
