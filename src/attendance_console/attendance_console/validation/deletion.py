"""Referential-integrity guards run before a delete is dispatched."""

from __future__ import annotations

from typing import Iterable

from ..attendance.model import AttendanceData
from ..common.identifiers import same_id
from ..enrollments.model import EnrollmentData
from ..users.model import AuthoredRecord
from .results import DeletionCheckResult


def _count(rows: Iterable, attr: str, target) -> int:
    return sum(1 for row in rows if same_id(getattr(row, attr), target))


def can_delete_student(
    student_id,
    enrollments: Iterable[EnrollmentData],
    attendance: Iterable[AttendanceData],
) -> DeletionCheckResult:
    related = []
    enrolled = _count(enrollments, "student_id", student_id)
    if enrolled:
        related.append(f"{enrolled} subject enrollment(s)")
    marks = _count(attendance, "student_id", student_id)
    if marks:
        related.append(f"{marks} attendance record(s)")

    if not related:
        return DeletionCheckResult(can_delete=True)
    return DeletionCheckResult(
        can_delete=False,
        reason=(
            f"Cannot delete student. Found related data: {', '.join(related)}. "
            'Consider setting status to "inactive" instead.'
        ),
        related_entities=tuple(related),
    )


def can_delete_subject(
    subject_id,
    enrollments: Iterable[EnrollmentData],
    attendance: Iterable[AttendanceData],
) -> DeletionCheckResult:
    related = []
    enrolled = _count(enrollments, "subject_id", subject_id)
    if enrolled:
        related.append(f"{enrolled} student enrollment(s)")
    marks = _count(attendance, "subject_id", subject_id)
    if marks:
        related.append(f"{marks} attendance record(s)")

    if not related:
        return DeletionCheckResult(can_delete=True)
    return DeletionCheckResult(
        can_delete=False,
        reason=f"Cannot delete subject. Found related data: {', '.join(related)}",
        related_entities=tuple(related),
    )


def can_delete_user(user_id, authored: Iterable[AuthoredRecord]) -> DeletionCheckResult:
    created = _count(authored, "created_by", user_id)
    if not created:
        return DeletionCheckResult(can_delete=True)
    return DeletionCheckResult(
        can_delete=False,
        reason=(
            f"Cannot delete user. They have created {created} record(s). "
            "Consider deactivating the account instead."
        ),
        related_entities=(f"{created} created record(s)",),
    )
