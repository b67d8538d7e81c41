from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Console roles used for permission checks."""

    PROFESSOR = "professor"
    REGISTRAR = "registrar"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"
    STAFF = "staff"


class AttendanceStatus(str, Enum):
    """Attendance marks accepted by forms and spreadsheet import."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"


class TimeSlot(str, Enum):
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


class StudentStatus(str, Enum):
    """Student lifecycle status."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"
    TRANSFERRED = "transferred"
    SUSPENDED = "suspended"
    DROPPED = "dropped"


# Students in any of these states cannot be newly enrolled.
INELIGIBLE_FOR_ENROLLMENT = frozenset(
    {
        StudentStatus.INACTIVE,
        StudentStatus.GRADUATED,
        StudentStatus.TRANSFERRED,
        StudentStatus.SUSPENDED,
        StudentStatus.DROPPED,
    }
)


class EducationLevel(str, Enum):
    HIGHSCHOOL = "highschool"
    COLLEGE = "college"


class ErrorKind(str, Enum):
    """Failure taxonomy attached to a failing ValidationResult."""

    REQUIRED = "required"
    FORMAT = "format_violation"
    RANGE = "range_violation"
    UNIQUENESS = "uniqueness_conflict"
    CAPACITY = "capacity_exceeded"
    TEMPORAL = "temporal_violation"
    ELIGIBILITY = "eligibility_violation"
    REFERENTIAL_INTEGRITY = "referential_integrity_violation"
    BATCH_SIZE = "batch_size_violation"
    BATCH_DUPLICATE = "batch_duplicate_violation"


class EntityKind(str, Enum):
    """Entity kinds accepted by the submission dispatcher."""

    STUDENT = "student"
    SUBJECT = "subject"
    ATTENDANCE = "attendance"
    ENROLLMENT = "enrollment"


class FileCategory(str, Enum):
    PROFILE_PHOTO = "profile_photo"
    DOCUMENT = "document"
    SPREADSHEET = "spreadsheet"
