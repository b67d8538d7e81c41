"""Business rules checked against a caller-supplied snapshot.

Uniqueness, capacity, enrollment eligibility, attendance temporal windows and
age/birthdate consistency. Identifiers are always compared in canonical string
form; ``exclude_id`` removes the record being edited from uniqueness scans.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceData
from ..common.datetime_utils import calculate_age, today_local, try_parse_iso_date
from ..common.identifiers import canonical_id, same_id
from ..common.payload import coerce_int
from ..core.constants import DEFAULT_AGE_TOLERANCE_YEARS, DEFAULT_CLOCK_SKEW_MINUTES, DEFAULT_EDIT_WINDOW_DAYS
from ..core.enums import INELIGIBLE_FOR_ENROLLMENT, EducationLevel, ErrorKind, StudentStatus
from ..enrollments.model import EnrollmentData
from ..students.model import NfcCard, StudentData
from ..subjects.model import SubjectData
from .fields import (
    parse_education_level,
    validate_attendance_timestamp,
    validate_birthdate,
    validate_capacity,
    validate_email,
)
from .registry import DEFAULT_REGISTRY, ValidationRegistry
from .results import ValidationResult
from .sanitizers import sanitize_email, sanitize_nfc_id, sanitize_student_number, sanitize_subject_code, trim_string

OK = ValidationResult.ok
fail = ValidationResult.fail


def _is_excluded(record_id, exclude_id) -> bool:
    return exclude_id is not None and same_id(record_id, exclude_id)


# uniqueness

def check_duplicate_student_number(
    student_number,
    existing: Iterable[StudentData],
    exclude_id=None,
) -> ValidationResult:
    wanted = sanitize_student_number(student_number)
    for student in existing:
        if _is_excluded(student.id, exclude_id):
            continue
        if wanted and sanitize_student_number(student.student_number) == wanted:
            return fail(
                f'Student number "{trim_string(student_number)}" is already assigned to another student',
                ErrorKind.UNIQUENESS,
            )
    return OK()


def check_duplicate_email(email, existing: Iterable[StudentData], exclude_id=None) -> ValidationResult:
    wanted = sanitize_email(email)
    for student in existing:
        if _is_excluded(student.id, exclude_id):
            continue
        if wanted and sanitize_email(student.email) == wanted:
            return fail(f'Email "{trim_string(email)}" is already registered', ErrorKind.UNIQUENESS)
    return OK()


def check_duplicate_subject_code(code, existing: Iterable[SubjectData], exclude_id=None) -> ValidationResult:
    wanted = sanitize_subject_code(code)
    for subject in existing:
        if _is_excluded(subject.id, exclude_id):
            continue
        if wanted and sanitize_subject_code(subject.code) == wanted:
            return fail(f'Subject code "{trim_string(code)}" already exists', ErrorKind.UNIQUENESS)
    return OK()


def check_duplicate_nfc_id(nfc_id, existing: Iterable[NfcCard], exclude_id=None) -> ValidationResult:
    wanted = sanitize_nfc_id(nfc_id)
    for card in existing:
        if _is_excluded(card.id, exclude_id):
            continue
        if wanted and sanitize_nfc_id(card.nfc_id) == wanted:
            return fail(f'NFC ID "{trim_string(nfc_id)}" is already assigned to another card', ErrorKind.UNIQUENESS)
    return OK()


def check_duplicate_enrollment(student_id, subject_id, existing: Iterable[EnrollmentData]) -> ValidationResult:
    for enrollment in existing:
        if same_id(enrollment.student_id, student_id) and same_id(enrollment.subject_id, subject_id):
            return fail("Student is already enrolled in this subject", ErrorKind.UNIQUENESS)
    return OK()


# age / birthdate

def validate_age_matches_birthdate(
    age,
    birthdate,
    tolerance: int = DEFAULT_AGE_TOLERANCE_YEARS,
    *,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Declared age must be within ``tolerance`` years of the age implied by birthdate."""
    today = today or today_local()
    born_result = validate_birthdate(birthdate, today=today, registry=registry)
    if not born_result:
        return born_result
    declared, problem = coerce_int(age)
    if declared is None:
        return fail(f"Age must be a {'whole' if problem == 'whole' else 'valid'} number")

    expected = calculate_age(try_parse_iso_date(birthdate), today=today)
    if abs(expected - declared) > tolerance:
        return fail(f"Age ({declared}) does not match birthdate. Expected age: {expected}", ErrorKind.RANGE)
    return OK()


def get_age_from_birthdate(
    birthdate, *, today: date | None = None, registry: ValidationRegistry = DEFAULT_REGISTRY
) -> Optional[int]:
    today = today or today_local()
    if not validate_birthdate(birthdate, today=today, registry=registry):
        return None
    return calculate_age(try_parse_iso_date(birthdate), today=today)


# attendance

def validate_attendance_time(
    timestamp,
    *,
    now: datetime | None = None,
    skew_minutes: int = DEFAULT_CLOCK_SKEW_MINUTES,
) -> ValidationResult:
    return validate_attendance_timestamp(timestamp, now=now, skew_minutes=skew_minutes)


def _day_key(value) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return trim_string(value).split("T")[0]


def _record_day_key(record: AttendanceData) -> str:
    day = record.day
    if day is not None:
        return day.isoformat()
    return _day_key(record.date or record.timestamp)


def check_duplicate_attendance(
    student_id,
    day,
    existing: Iterable[AttendanceData],
    subject_id=None,
    *,
    time_slot: str | None = None,
    key_on_time_slot: bool = False,
    exclude_id=None,
) -> ValidationResult:
    """Reject a second mark for the same student on the same calendar day.

    The subject joins the key when given. The time slot joins it only when
    ``key_on_time_slot`` is set, so arrival and departure count as separate
    records under that setting and as a conflict otherwise.
    """
    wanted_day = _day_key(day)
    by_subject = subject_id is not None and canonical_id(subject_id) != ""
    slot = trim_string(time_slot).lower() if key_on_time_slot and time_slot else None

    for record in existing:
        if _is_excluded(record.id, exclude_id):
            continue
        if not same_id(record.student_id, student_id) or _record_day_key(record) != wanted_day:
            continue
        if by_subject and not same_id(record.subject_id, subject_id):
            continue
        if slot is not None and trim_string(record.time_slot).lower() != slot:
            continue
        suffix = " for this subject" if by_subject else ""
        if slot is not None:
            suffix += f" ({slot})"
        return fail(f"Attendance record already exists for this student on {wanted_day}{suffix}", ErrorKind.UNIQUENESS)
    return OK()


def validate_attendance_date_range(
    day,
    max_days_back: int = DEFAULT_EDIT_WINDOW_DAYS,
    *,
    today: date | None = None,
) -> ValidationResult:
    """No future dates, and nothing older than ``max_days_back`` days."""
    target = try_parse_iso_date(day)
    if target is None:
        return fail("Invalid date")
    today = today or today_local()
    if target > today:
        return fail("Cannot mark attendance for future dates", ErrorKind.TEMPORAL)
    if (today - target).days > max_days_back:
        return fail(f"Cannot modify attendance older than {max_days_back} days", ErrorKind.TEMPORAL)
    return OK()


# capacity

def check_course_capacity(subject: SubjectData) -> ValidationResult:
    if not subject.has_capacity_limit:
        return OK()
    enrolled = subject.enrolled_count or 0
    if enrolled >= subject.capacity:
        return fail(f"Course is at full capacity ({enrolled}/{subject.capacity} enrolled)", ErrorKind.CAPACITY)
    return OK()


def validate_enrollment_capacity(subject: SubjectData, additional: int = 1) -> ValidationResult:
    if not subject.has_capacity_limit:
        return OK()
    enrolled = subject.enrolled_count or 0
    if enrolled + additional > subject.capacity:
        available = max(subject.capacity - enrolled, 0)
        return fail(
            f"Cannot enroll {additional} student(s). Only {available} spot(s) available "
            f"(capacity: {subject.capacity})",
            ErrorKind.CAPACITY,
        )
    return OK()


def validate_capacity_update(
    new_capacity,
    current_enrollment: int,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    result = validate_capacity(new_capacity, registry=registry)
    if not result:
        return result
    capacity, _ = coerce_int(new_capacity)
    if capacity < current_enrollment:
        return fail(
            f"Cannot set capacity to {capacity}. There are currently {current_enrollment} students enrolled",
            ErrorKind.CAPACITY,
        )
    return OK()


def enrolled_count_for(subject: SubjectData, enrollments: Sequence[EnrollmentData]) -> int:
    """Headcount for a subject: the stored count, else the snapshot rows."""
    if subject.enrolled_count is not None:
        return subject.enrolled_count
    if subject.id is None:
        return 0
    return sum(1 for e in enrollments if same_id(e.subject_id, subject.id))


# eligibility

def validate_student_can_enroll(status) -> ValidationResult:
    text = status.value if isinstance(status, StudentStatus) else trim_string(status)
    try:
        current = StudentStatus(text.lower())
    except ValueError:
        return OK()
    if current in INELIGIBLE_FOR_ENROLLMENT:
        return fail(
            f'Cannot enroll student with status "{text}". Student must be active.',
            ErrorKind.ELIGIBILITY,
        )
    return OK()


def validate_high_school_level(level, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    number, _ = coerce_int(level)
    if number is None or not b.grade_level_min <= number <= b.grade_level_max:
        return fail(f"Grade level must be between {b.grade_level_min} and {b.grade_level_max}", ErrorKind.RANGE)
    return OK()


def validate_college_level(level, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    number, _ = coerce_int(level)
    if number is None or not b.college_year_min <= number <= b.college_year_max:
        return fail(f"College year must be between {b.college_year_min} and {b.college_year_max}", ErrorKind.RANGE)
    return OK()


def validate_education_level(
    level,
    institution: EducationLevel | str,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    education = parse_education_level(institution)
    if education is None:
        return fail(f'Unknown institution type "{trim_string(institution)}". Must be highschool or college')
    if education is EducationLevel.HIGHSCHOOL:
        return validate_high_school_level(level, registry=registry)
    return validate_college_level(level, registry=registry)


def validate_school_domain_email(
    email,
    school_domain: str | None = None,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    result = validate_email(email, registry=registry)
    if not result or not school_domain:
        return result
    domain = sanitize_email(email).partition("@")[2]
    wanted = school_domain.strip().lower().lstrip("@")
    if domain != wanted and not domain.endswith("." + wanted):
        return fail(f"Email must be from the {school_domain} domain", ErrorKind.ELIGIBILITY)
    return OK()
