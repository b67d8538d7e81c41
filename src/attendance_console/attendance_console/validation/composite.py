"""Per-entity submission checks: field rules first, then business rules.

Nothing short-circuits. Every check runs so the form can show all problems
in one pass, and each failure is filed under the field it concerns.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceData
from ..common.datetime_utils import now_local
from ..common.identifiers import canonical_id
from ..core.enums import ErrorKind
from ..enrollments.model import EnrollmentData
from ..students.model import NfcCard, StudentData
from ..subjects.model import SubjectData
from . import business, fields
from .policy import DEFAULT_POLICY, ValidationPolicy
from .registry import DEFAULT_REGISTRY, ValidationRegistry
from .results import FormErrors, FormValidationResult


def _given(value) -> bool:
    return value is not None and str(value).strip() != ""


def validate_student_data(
    proposed: StudentData,
    existing: Sequence[StudentData],
    is_update: bool = False,
    *,
    nfc_cards: Sequence[NfcCard] = (),
    today: date | None = None,
    policy: ValidationPolicy = DEFAULT_POLICY,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> FormValidationResult:
    errors = FormErrors()
    exclude_id = proposed.id if is_update else None

    errors.check("student_number", fields.validate_student_number(proposed.student_number, today=today, registry=registry))
    errors.check(
        "student_number",
        business.check_duplicate_student_number(proposed.student_number, existing, exclude_id),
    )

    errors.check("email", fields.validate_email(proposed.email, registry=registry))
    if policy.school_email_domain:
        errors.check(
            "email",
            business.validate_school_domain_email(proposed.email, policy.school_email_domain, registry=registry),
        )
    errors.check("email", business.check_duplicate_email(proposed.email, existing, exclude_id))

    for name, label in (("first_name", "First name"), ("middle_name", "Middle name"), ("last_name", "Last name")):
        value = getattr(proposed, name)
        if _given(value):
            errors.check(name, fields.validate_person_name(value, label, registry=registry))

    if _given(proposed.birthdate):
        errors.check("birthdate", fields.validate_birthdate(proposed.birthdate, today=today, registry=registry))
    if _given(proposed.age):
        errors.check("age", fields.validate_age(proposed.age, registry=registry))
    if _given(proposed.contact):
        errors.check("contact", fields.validate_contact(proposed.contact, registry=registry))
    if _given(proposed.status):
        errors.check("status", fields.validate_student_status(proposed.status))
    if _given(proposed.section):
        errors.check("section", fields.validate_section(proposed.section, registry=registry))
    if _given(proposed.year_level):
        errors.check("year_level", fields.validate_year_level(proposed.year_level, registry=registry))
    if _given(proposed.guardian_name):
        errors.check("guardian_name", fields.validate_guardian_name(proposed.guardian_name, registry=registry))
    if _given(proposed.guardian_contact):
        errors.check(
            "guardian_contact",
            fields.validate_contact(proposed.guardian_contact, "Guardian contact", registry=registry),
        )
    if _given(proposed.nfc_id):
        errors.check("nfc_id", fields.validate_nfc_id(proposed.nfc_id, registry=registry))
        errors.check("nfc_id", business.check_duplicate_nfc_id(proposed.nfc_id, nfc_cards, exclude_id))

    if _given(proposed.age) and _given(proposed.birthdate):
        errors.check(
            "age",
            business.validate_age_matches_birthdate(
                proposed.age,
                proposed.birthdate,
                policy.age_tolerance_years,
                today=today,
                registry=registry,
            ),
        )
    return errors.result()


def validate_subject_data(
    proposed: SubjectData,
    existing: Sequence[SubjectData],
    is_update: bool = False,
    *,
    enrollments: Sequence[EnrollmentData] = (),
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> FormValidationResult:
    errors = FormErrors()
    exclude_id = proposed.id if is_update else None

    errors.check("code", fields.validate_subject_code(proposed.code, registry=registry))
    errors.check("code", business.check_duplicate_subject_code(proposed.code, existing, exclude_id))

    if proposed.name is not None:
        errors.check("name", fields.validate_subject_name(proposed.name, registry=registry))
    if _given(proposed.capacity):
        errors.check("capacity", fields.validate_capacity(proposed.capacity, registry=registry))
        enrolled = business.enrolled_count_for(proposed, enrollments)
        if is_update and enrolled:
            errors.check(
                "capacity",
                business.validate_capacity_update(proposed.capacity, enrolled, registry=registry),
            )

    if _given(proposed.description):
        errors.check("description", fields.validate_description(proposed.description, registry=registry))
    if _given(proposed.instructor):
        errors.check("instructor", fields.validate_instructor_name(proposed.instructor, registry=registry))
    if _given(proposed.room):
        errors.check("room", fields.validate_room_number(proposed.room, registry=registry))
    if _given(proposed.section):
        errors.check("section", fields.validate_section(proposed.section, registry=registry))
    if _given(proposed.year_level):
        errors.check("year_level", fields.validate_year_level(proposed.year_level, registry=registry))
    return errors.result()


def validate_attendance_data(
    proposed: AttendanceData,
    existing: Sequence[AttendanceData],
    is_update: bool = False,
    *,
    now: datetime | None = None,
    policy: ValidationPolicy = DEFAULT_POLICY,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> FormValidationResult:
    """Status, slot and temporal checks, then the duplicate scan.

    The rolling edit window applies to updates only; new marks only have to
    avoid the future.
    """
    errors = FormErrors()
    now = now or now_local()
    today = now.date()

    if not canonical_id(proposed.student_id):
        errors.add("student_id", "Student is required", ErrorKind.REQUIRED)

    errors.check("status", fields.validate_attendance_status(proposed.status))
    if _given(proposed.time_slot):
        errors.check("time_slot", fields.validate_time_slot(proposed.time_slot))
    if _given(proposed.notes):
        errors.check("notes", fields.validate_notes(proposed.notes, registry=registry))

    if _given(proposed.date):
        errors.check("date", fields.validate_attendance_date(proposed.date, today=today, registry=registry))
    if _given(proposed.timestamp):
        errors.check(
            "timestamp",
            fields.validate_attendance_timestamp(proposed.timestamp, now=now, skew_minutes=policy.clock_skew_minutes),
        )
    if not _given(proposed.date) and not _given(proposed.timestamp):
        errors.add("date", "Date is required", ErrorKind.REQUIRED)

    day = proposed.day
    if day is not None and is_update:
        errors.check("date", business.validate_attendance_date_range(day, policy.edit_window_days, today=today))

    if day is not None and canonical_id(proposed.student_id):
        errors.check(
            "date",
            business.check_duplicate_attendance(
                proposed.student_id,
                day,
                existing,
                proposed.subject_id,
                time_slot=proposed.time_slot,
                key_on_time_slot=policy.duplicate_attendance_by_time_slot,
                exclude_id=proposed.id if is_update else None,
            ),
        )
    return errors.result()


def validate_enrollment_data(
    enrollment: EnrollmentData,
    student: Optional[StudentData],
    subject: Optional[SubjectData],
    existing: Sequence[EnrollmentData],
) -> FormValidationResult:
    errors = FormErrors()

    if student is None:
        errors.add("student_id", "Student not found", ErrorKind.REQUIRED)
    elif _given(student.status):
        errors.check("student_id", business.validate_student_can_enroll(student.status))

    if subject is None:
        errors.add("subject_id", "Subject not found", ErrorKind.REQUIRED)
    else:
        errors.check(
            "subject_id",
            business.check_duplicate_enrollment(enrollment.student_id, enrollment.subject_id, existing),
        )
        headcount = business.enrolled_count_for(subject, existing)
        errors.check(
            "subject_id",
            business.validate_enrollment_capacity(replace(subject, enrolled_count=headcount), 1),
        )
    return errors.result()
