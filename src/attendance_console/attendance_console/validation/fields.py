"""Field validators: one pure function per atomic form field.

Every function returns a ``ValidationResult`` and never raises for bad input;
``None``, empty strings and values of the wrong type are ordinary failures.
Functions that depend on the current date accept ``today=`` (or ``now=``) so
callers and tests can pin the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import calculate_age, now_local, today_local, try_parse_datetime
from ..common.payload import coerce_int
from ..core.constants import (
    DEFAULT_CLOCK_SKEW_MINUTES,
    DEFAULT_DATE_RANGE_DAYS,
    DEFAULT_MIN_SCHEDULE_MINUTES,
    STUDENT_NUMBER_YEARS_AHEAD,
    STUDENT_NUMBER_YEARS_BACK,
)
from ..core.enums import AttendanceStatus, EducationLevel, ErrorKind, FileCategory, StudentStatus, TimeSlot
from .registry import DEFAULT_REGISTRY, ValidationRegistry
from .results import ValidationResult
from .sanitizers import normalize_whitespace, sanitize_email, sanitize_input, sanitize_phone, sanitize_search, trim_string

OK = ValidationResult.ok
fail = ValidationResult.fail

_BYTES_PER_MB = 1024 * 1024


def _required(label: str) -> ValidationResult:
    return fail(f"{label} is required", ErrorKind.REQUIRED)



def _number_problem(label: str, problem: str) -> ValidationResult:
    if problem == "whole":
        return fail(f"{label} must be a whole number", ErrorKind.FORMAT)
    return fail(f"{label} must be a valid number", ErrorKind.FORMAT)


def _parse_real_date(text: str, registry: ValidationRegistry) -> tuple[Optional[date], Optional[str]]:
    if not registry.patterns.date_iso.fullmatch(text):
        return None, "format"
    try:
        return datetime.strptime(text, "%Y-%m-%d").date(), None
    except ValueError:
        return None, "invalid"


# students

def validate_student_number(
    value,
    *,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Student number in ``YY-NNNN`` form with a plausible intake year.

    The two-digit year must fall between ten years back and one year ahead of
    today's year. The comparison wraps at the century.
    """
    b = registry.bounds
    text = trim_string(value)
    if not text:
        return _required("Student number")
    if len(text) < b.student_number_min:
        return fail(f"Student number must be at least {b.student_number_min} characters")
    if len(text) > b.student_number_max:
        return fail(f"Student number must be at most {b.student_number_max} characters")
    if not registry.patterns.student_number.fullmatch(text):
        return fail("Student number must be in format YY-NNNN (e.g., 24-0001)")

    today = today or today_local()
    offset = (int(text[:2]) - today.year % 100) % 100
    if offset >= 50:
        offset -= 100
    if not -STUDENT_NUMBER_YEARS_BACK <= offset <= STUDENT_NUMBER_YEARS_AHEAD:
        return fail("Student number year appears to be invalid", ErrorKind.RANGE)
    return OK()


def validate_person_name(
    value,
    field_name: str = "Name",
    *,
    min_length: int | None = None,
    max_length: int | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    b = registry.bounds
    lo = b.name_min if min_length is None else min_length
    hi = b.name_max if max_length is None else max_length
    text = normalize_whitespace(value)
    if not text:
        return _required(field_name)
    if len(text) < lo:
        return fail(f"{field_name} must be at least {lo} characters")
    if len(text) > hi:
        return fail(f"{field_name} must be at most {hi} characters")
    if not registry.patterns.person_name.fullmatch(text):
        return fail(f"{field_name} can only contain letters, spaces, hyphens, and apostrophes")
    if registry.patterns.name_edge.search(text):
        return fail(f"{field_name} cannot start or end with special characters")
    return OK()


def validate_guardian_name(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    return validate_person_name(
        value,
        "Guardian name",
        min_length=b.guardian_name_min,
        max_length=b.guardian_name_max,
        registry=registry,
    )


def validate_age(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    age, problem = coerce_int(value)
    if age is None:
        return _number_problem("Age", problem or "number")
    if age < b.age_min:
        return fail(f"Age must be at least {b.age_min} years", ErrorKind.RANGE)
    if age > b.age_max:
        return fail(f"Age must be at most {b.age_max} years", ErrorKind.RANGE)
    return OK()


def validate_birthdate(
    value,
    *,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    b = registry.bounds
    if isinstance(value, date) and not isinstance(value, datetime):
        value = value.isoformat()
    text = trim_string(value)
    if not text:
        return _required("Birthdate")
    born, problem = _parse_real_date(text, registry)
    if problem == "format":
        return fail("Birthdate must be in YYYY-MM-DD format")
    if born is None:
        return fail("Invalid date")

    today = today or today_local()
    if born > today:
        return fail("Birthdate cannot be in the future", ErrorKind.TEMPORAL)
    age = calculate_age(born, today=today)
    if age < b.age_min:
        return fail(f"Person must be at least {b.age_min} years old", ErrorKind.RANGE)
    if age > b.age_max:
        return fail(f"Person cannot be more than {b.age_max} years old", ErrorKind.RANGE)
    return OK()


def validate_contact(
    value,
    field_name: str = "Contact number",
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    b = registry.bounds
    digits = sanitize_phone(value)
    if not digits:
        return _required(field_name)
    if len(digits) < b.contact_min:
        return fail(f"{field_name} must be at least {b.contact_min} digits")
    if len(digits) > b.contact_max:
        return fail(f"{field_name} must be at most {b.contact_max} digits")
    if not registry.patterns.phone.fullmatch(digits):
        return fail(f"Invalid {field_name[0].lower() + field_name[1:]} format")
    return OK()


def validate_email(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = sanitize_email(value)
    if not text:
        return _required("Email")
    if len(text) > b.email_max:
        return fail(f"Email must be at most {b.email_max} characters")
    if not registry.patterns.email.fullmatch(text):
        return fail("Invalid email format")
    local, _, domain = text.partition("@")
    if len(local) > b.email_local_max:
        return fail("Email local part too long")
    if len(domain) > b.email_domain_max:
        return fail("Email domain too long")
    return OK()


def validate_student_status(value) -> ValidationResult:
    text = trim_string(value).lower()
    if not text:
        return _required("Student status")
    allowed = [s.value for s in StudentStatus]
    if text not in allowed:
        return fail(f"Status must be one of: {', '.join(allowed)}")
    return OK()


# subjects

def validate_subject_code(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = trim_string(value).upper()
    if not text:
        return _required("Subject code")
    if len(text) < b.subject_code_min:
        return fail(f"Subject code must be at least {b.subject_code_min} characters")
    if len(text) > b.subject_code_max:
        return fail(f"Subject code must be at most {b.subject_code_max} characters")
    if not registry.patterns.subject_code.fullmatch(text):
        return fail("Subject code can only contain letters, numbers, and hyphens")
    return OK()


def validate_subject_name(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = normalize_whitespace(value)
    if not text:
        return _required("Subject name")
    if len(text) < b.subject_name_min:
        return fail(f"Subject name must be at least {b.subject_name_min} characters")
    if len(text) > b.subject_name_max:
        return fail(f"Subject name must be at most {b.subject_name_max} characters")
    return OK()


def validate_section(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = trim_string(value).upper()
    if not text:
        return _required("Section")
    if len(text) > b.section_max:
        return fail(f"Section must be at most {b.section_max} characters")
    if not registry.patterns.section.fullmatch(text):
        return fail("Section can only contain letters, numbers, and hyphens")
    return OK()


def parse_education_level(value) -> Optional[EducationLevel]:
    if isinstance(value, EducationLevel):
        return value
    try:
        return EducationLevel(trim_string(value).lower())
    except ValueError:
        return None


def _unknown_education_level(value) -> ValidationResult:
    choices = ", ".join(level.value for level in EducationLevel)
    return fail(f'Unknown education level "{trim_string(value)}". Must be one of: {choices}')


def validate_year_level(
    value,
    level: EducationLevel | str = EducationLevel.COLLEGE,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    b = registry.bounds
    number, problem = coerce_int(value)
    if number is None:
        return _number_problem("Year level", problem or "number")
    education = parse_education_level(level)
    if education is None:
        return _unknown_education_level(level)
    if education is EducationLevel.COLLEGE:
        if not b.college_year_min <= number <= b.college_year_max:
            return fail(
                f"College year level must be between {b.college_year_min} and {b.college_year_max}",
                ErrorKind.RANGE,
            )
    elif not b.grade_level_min <= number <= b.grade_level_max:
        return fail(
            f"Grade level must be between {b.grade_level_min} and {b.grade_level_max}",
            ErrorKind.RANGE,
        )
    return OK()


def validate_description(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return OK()
    limit = registry.bounds.description_max
    if len(text) > limit:
        return fail(f"Description must be {limit} characters or less")
    if registry.patterns.blocked_markup.search(text):
        return fail("Description contains invalid content")
    return OK()


def validate_instructor_name(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = trim_string(value)
    if not text:
        return OK()
    if len(text) < b.instructor_name_min:
        return fail(f"Instructor name must be at least {b.instructor_name_min} characters")
    if len(text) > b.instructor_name_max:
        return fail(f"Instructor name must be {b.instructor_name_max} characters or less")
    if not registry.patterns.instructor_name.fullmatch(text):
        return fail("Instructor name contains invalid characters")
    return OK()


def validate_room_number(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return OK()
    if len(text) > registry.bounds.room_max:
        return fail(f"Room number must be {registry.bounds.room_max} characters or less")
    if not registry.patterns.room.fullmatch(text):
        return fail("Room number contains invalid characters")
    return OK()


def validate_capacity(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    capacity, problem = coerce_int(value)
    if capacity is None:
        return _number_problem("Capacity", problem or "number")
    if capacity < b.capacity_min:
        return fail(f"Capacity must be at least {b.capacity_min}", ErrorKind.RANGE)
    if capacity > b.capacity_max:
        return fail(f"Capacity must be at most {b.capacity_max}", ErrorKind.RANGE)
    return OK()


# attendance

def validate_attendance_status(value) -> ValidationResult:
    text = trim_string(value).lower()
    if not text:
        return _required("Attendance status")
    allowed = [s.value for s in AttendanceStatus]
    if text not in allowed:
        return fail(f"Status must be one of: {', '.join(allowed)}")
    return OK()


def validate_time_slot(value) -> ValidationResult:
    text = trim_string(value).lower()
    if not text:
        return _required("Time slot")
    allowed = [s.value for s in TimeSlot]
    if text not in allowed:
        return fail(f"Time slot must be one of: {', '.join(allowed)}")
    return OK()


def validate_attendance_timestamp(
    value,
    *,
    now: datetime | None = None,
    skew_minutes: int = DEFAULT_CLOCK_SKEW_MINUTES,
) -> ValidationResult:
    if not isinstance(value, (date, datetime)) and not trim_string(value):
        return _required("Timestamp")
    moment = try_parse_datetime(value)
    if moment is None:
        return fail("Invalid timestamp format")
    now = now or now_local()
    if moment > now + timedelta(minutes=skew_minutes):
        return fail("Attendance timestamp cannot be in the future", ErrorKind.TEMPORAL)
    return OK()


def validate_attendance_date(
    value,
    *,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    if isinstance(value, date) and not isinstance(value, datetime):
        value = value.isoformat()
    text = trim_string(value)
    if not text:
        return _required("Date")
    day, problem = _parse_real_date(text, registry)
    if problem == "format":
        return fail("Date must be in YYYY-MM-DD format")
    if day is None:
        return fail("Invalid date")
    if day > (today or today_local()):
        return fail("Attendance date cannot be in the future", ErrorKind.TEMPORAL)
    return OK()


def validate_notes(
    value,
    max_length: int | None = None,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    limit = registry.bounds.notes_max if max_length is None else max_length
    if len(sanitize_input(value)) > limit:
        return fail(f"Notes must be at most {limit} characters")
    return OK()


def validate_remarks(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    return validate_notes(value, registry.bounds.remarks_max, registry=registry)


# nfc / id card

def validate_nfc_id(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = trim_string(value).upper()
    if not text:
        return _required("NFC ID")
    if len(text) < b.nfc_id_min:
        return fail(f"NFC ID must be at least {b.nfc_id_min} characters")
    if len(text) > b.nfc_id_max:
        return fail(f"NFC ID must be at most {b.nfc_id_max} characters")
    if not registry.patterns.nfc_id.fullmatch(text):
        return fail("NFC ID must be a valid hexadecimal string")
    return OK()


def validate_card_number(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = "".join(trim_string(value).split())
    if not text:
        return _required("Card number")
    if not registry.patterns.card_number.fullmatch(text):
        return fail(f"Card number must be exactly {registry.bounds.card_number_length} digits")
    return OK()


# authentication

def validate_password(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    if not isinstance(value, str) or not value:
        return _required("Password")
    if len(value) < b.password_min:
        return fail(f"Password must be at least {b.password_min} characters")
    if len(value) > b.password_max:
        return fail(f"Password must be at most {b.password_max} characters")
    if not any(c.islower() for c in value if c.isascii()):
        return fail("Password must contain at least one lowercase letter")
    if not any(c.isupper() for c in value if c.isascii()):
        return fail("Password must contain at least one uppercase letter")
    if not any(c.isdigit() for c in value if c.isascii()):
        return fail("Password must contain at least one number")
    if value.lower() in registry.common_passwords:
        return fail("Password is too common. Please choose a stronger password")
    return OK()


def validate_password_confirmation(password, confirmation) -> ValidationResult:
    if not confirmation:
        return fail("Please confirm your password", ErrorKind.REQUIRED)
    if password != confirmation:
        return fail("Passwords do not match")
    return OK()


@dataclass(frozen=True)
class PasswordStrength:
    result: ValidationResult
    strength: Optional[str] = None
    feedback: tuple[str, ...] = ()


_SPECIAL_CHARS = set("!@#$%^&*(),.?\":{}|<>_-+=[]\\/`~;'")


def validate_password_strength(
    value, *, registry: ValidationRegistry = DEFAULT_REGISTRY
) -> PasswordStrength:
    """Score a password as weak, fair or strong.

    The minimum composition rules still apply; ``feedback`` carries hints even
    for passwords that pass.
    """
    if not isinstance(value, str) or not value:
        return PasswordStrength(_required("Password"))

    score = sum(len(value) >= n for n in (8, 12, 16))
    score += any(c.islower() for c in value)
    score += any(c.isupper() for c in value)
    score += any(c.isdigit() for c in value)
    score += any(c in _SPECIAL_CHARS for c in value)

    feedback: list[str] = []
    if any(value[i] == value[i + 1] == value[i + 2] for i in range(len(value) - 2)):
        score -= 2
        feedback.append("Avoid repeated characters")
    if value.isascii() and value.isalpha():
        score -= 1
        feedback.append("Add numbers or special characters")
    if value.isascii() and value.isdigit():
        score -= 2
        feedback.append("Add letters and special characters")

    lowered = value.lower()
    if any(word in lowered for word in registry.weak_password_words):
        return PasswordStrength(
            fail("Password contains a common word. Please choose a stronger password"), "weak", tuple(feedback)
        )
    if len(value) < registry.bounds.password_min:
        return PasswordStrength(
            fail(f"Password must be at least {registry.bounds.password_min} characters"), "weak", tuple(feedback)
        )
    if not (any(c.islower() for c in value) and any(c.isupper() for c in value) and any(c.isdigit() for c in value)):
        return PasswordStrength(
            fail("Password must contain uppercase, lowercase, and numbers"), "weak", tuple(feedback)
        )

    strength = "strong" if score >= 6 else "fair" if score >= 4 else "weak"
    return PasswordStrength(OK(), strength, tuple(feedback))


def validate_otp(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return _required("OTP code")
    if not registry.patterns.otp.fullmatch(text):
        return fail(f"OTP must be exactly {registry.bounds.otp_length} digits")
    return OK()


def validate_username(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    b = registry.bounds
    text = trim_string(value).lower()
    if not text:
        return _required("Username")
    if len(text) < b.username_min:
        return fail(f"Username must be at least {b.username_min} characters")
    if len(text) > b.username_max:
        return fail(f"Username must be at most {b.username_max} characters")
    if not registry.patterns.username.fullmatch(text):
        return fail("Username must start with a letter and contain only letters, numbers, and underscores")
    return OK()


# uploads

@dataclass(frozen=True)
class FileInfo:
    """What the validators need to know about an upload."""

    filename: str
    size: int
    content_type: str


def validate_file_size(size, max_size_mb: float) -> ValidationResult:
    if isinstance(size, bool) or not isinstance(size, (int, float)) or size < 0:
        return fail("File size is unknown")
    if size > max_size_mb * _BYTES_PER_MB:
        return fail(
            f"File size must be under {max_size_mb}MB. Current size: {size / _BYTES_PER_MB:.2f}MB",
            ErrorKind.RANGE,
        )
    return OK()


def validate_file_type(content_type, allowed: Iterable[str]) -> ValidationResult:
    allowed = tuple(allowed)
    kind = trim_string(content_type).lower()
    if kind not in allowed:
        return fail(f"File type '{kind}' is not allowed. Allowed types: {', '.join(allowed)}")
    return OK()


def validate_filename(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return _required("Filename")
    if len(text) > registry.bounds.filename_max:
        return fail(f"Filename must be at most {registry.bounds.filename_max} characters")
    if ".." in text or "/" in text or "\\" in text:
        return fail("Filename contains invalid path characters")
    if not registry.patterns.filename.fullmatch(text):
        return fail("Filename contains invalid characters")
    return OK()


def validate_file(
    upload: FileInfo,
    category: FileCategory | str,
    *,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Size, then MIME type, then filename. The first failure wins."""
    if not isinstance(category, FileCategory):
        try:
            category = FileCategory(trim_string(category).lower())
        except ValueError:
            return fail(f'Unknown file category "{trim_string(category)}"')
    size_result = validate_file_size(upload.size, registry.max_upload_mb(category))
    if not size_result:
        return size_result
    type_result = validate_file_type(upload.content_type, registry.mime_types[category])
    if not type_result:
        return type_result
    return validate_filename(upload.filename, registry=registry)


def validate_profile_photo(upload: FileInfo, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    return validate_file(upload, FileCategory.PROFILE_PHOTO, registry=registry)


def validate_document(upload: FileInfo, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    return validate_file(upload, FileCategory.DOCUMENT, registry=registry)


def validate_spreadsheet_file(upload: FileInfo, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    return validate_file(upload, FileCategory.SPREADSHEET, registry=registry)


# search, ids and schedules

def validate_search_term(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = sanitize_search(value)
    if not text:
        # An empty search lists everything.
        return OK()
    b = registry.bounds
    if len(text) < b.search_min:
        return fail(f"Search term must be at least {b.search_min} character")
    if len(text) > b.search_max:
        return fail(f"Search term must be at most {b.search_max} characters")
    return OK()


def validate_date_range(
    start,
    end,
    *,
    max_days: int = DEFAULT_DATE_RANGE_DAYS,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    start_result = validate_attendance_date(start, today=today, registry=registry)
    if not start_result:
        return fail(f"Start date: {start_result.error}", start_result.kind or ErrorKind.FORMAT)
    end_result = validate_attendance_date(end, today=today, registry=registry)
    if not end_result:
        return fail(f"End date: {end_result.error}", end_result.kind or ErrorKind.FORMAT)

    first = date.fromisoformat(str(start).strip()[:10])
    last = date.fromisoformat(str(end).strip()[:10])
    if first > last:
        return fail("Start date must be before or equal to end date", ErrorKind.RANGE)
    if (last - first).days > max_days:
        return fail("Date range cannot exceed 1 year", ErrorKind.RANGE)
    return OK()


def validate_id(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    if isinstance(value, bool):
        return fail("ID must be a positive integer")
    if isinstance(value, (int, float)):
        if not float(value).is_integer() or value < 1:
            return fail("ID must be a positive integer")
        return OK()
    text = trim_string(value)
    if not text:
        return _required("ID")
    p = registry.patterns
    if p.numeric_id.fullmatch(text) or p.mongo_id.fullmatch(text) or p.uuid.fullmatch(text):
        return OK()
    return fail("Invalid ID format")


def validate_time_format(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return _required("Time")
    if not registry.patterns.time_24h.fullmatch(text):
        return fail("Time must be in HH:mm format (e.g., 09:00, 14:30)")
    return OK()


def validate_schedule_time_range(
    start,
    end,
    *,
    min_minutes: int = DEFAULT_MIN_SCHEDULE_MINUTES,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    for value in (start, end):
        result = validate_time_format(value, registry=registry)
        if not result:
            return result

    def _minutes(text: str) -> int:
        hours, minutes = trim_string(text).split(":")
        return int(hours) * 60 + int(minutes)

    begin, finish = _minutes(start), _minutes(end)
    if begin >= finish:
        return fail("End time must be after start time", ErrorKind.RANGE)
    if finish - begin < min_minutes:
        return fail(f"Schedule duration must be at least {min_minutes} minutes", ErrorKind.RANGE)
    return OK()


def validate_day_of_week(value, *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> ValidationResult:
    text = trim_string(value)
    if not text:
        return _required("Day")
    if text.capitalize() not in registry.days_of_week:
        return fail(f"Day must be one of: {', '.join(registry.days_of_week)}")
    return OK()
