"""Bounds, patterns and allow-lists shared by every validator.

One ``ValidationRegistry`` is built at import time (``DEFAULT_REGISTRY``) and
handed to validators through their ``registry=`` keyword. It is frozen; tests
and alternative deployments build their own instance instead of patching this
one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern

from ..core.enums import FileCategory


@dataclass(frozen=True)
class FieldBounds:
    # students
    student_number_min: int = 7
    student_number_max: int = 10
    name_min: int = 2
    name_max: int = 50
    age_min: int = 3
    age_max: int = 100
    contact_min: int = 10
    contact_max: int = 15
    email_max: int = 254
    email_local_max: int = 64
    email_domain_max: int = 253
    section_max: int = 20
    guardian_name_min: int = 2
    guardian_name_max: int = 100

    # subjects
    subject_code_min: int = 2
    subject_code_max: int = 20
    subject_name_min: int = 3
    subject_name_max: int = 100
    year_level_min: int = 1
    year_level_max: int = 12
    grade_level_min: int = 7
    grade_level_max: int = 12
    college_year_min: int = 1
    college_year_max: int = 6
    capacity_min: int = 1
    capacity_max: int = 500
    description_max: int = 1000
    instructor_name_min: int = 2
    instructor_name_max: int = 100
    room_max: int = 50

    # auth
    password_min: int = 8
    password_max: int = 128
    otp_length: int = 6
    username_min: int = 3
    username_max: int = 50

    # uploads, in megabytes
    spreadsheet_max_mb: int = 10
    profile_photo_max_mb: int = 5
    document_max_mb: int = 25
    filename_max: int = 255

    # nfc / id card
    nfc_id_min: int = 8
    nfc_id_max: int = 32
    card_number_length: int = 16

    # free text
    search_min: int = 1
    search_max: int = 100
    notes_max: int = 500
    remarks_max: int = 1000


_EMAIL = (
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)


@dataclass(frozen=True)
class Patterns:
    """Compiled formats. Always applied with ``fullmatch``."""

    student_number: Pattern[str] = re.compile(r"\d{2}-\d{4}")
    person_name: Pattern[str] = re.compile(r"[a-zA-ZÀ-ÿ\u00C0-\u017F\s'-]+")
    name_edge: Pattern[str] = re.compile(r"^[-'\s]|[-'\s]$")
    instructor_name: Pattern[str] = re.compile(r"[A-Za-zÀ-ÿ][A-Za-zÀ-ÿ\s\-'.]*[A-Za-zÀ-ÿ.]")
    email: Pattern[str] = re.compile(_EMAIL)
    phone: Pattern[str] = re.compile(r"\+?[1-9]\d{9,14}")
    subject_code: Pattern[str] = re.compile(r"[A-Z0-9][A-Z0-9-]*[A-Z0-9]", re.IGNORECASE)
    section: Pattern[str] = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?")
    room: Pattern[str] = re.compile(r"[A-Za-z0-9\s-]+")
    otp: Pattern[str] = re.compile(r"\d{6}")
    nfc_id: Pattern[str] = re.compile(r"[A-Fa-f0-9]{8,32}")
    card_number: Pattern[str] = re.compile(r"\d{16}")
    username: Pattern[str] = re.compile(r"[a-z][a-z0-9_]*")
    date_iso: Pattern[str] = re.compile(r"\d{4}-\d{2}-\d{2}")
    time_24h: Pattern[str] = re.compile(r"(?:[01]\d|2[0-3]):[0-5]\d")
    time_12h: Pattern[str] = re.compile(r"(0?[1-9]|1[0-2]):([0-5]\d)\s*([AaPp][Mm])")
    filename: Pattern[str] = re.compile(r"[a-zA-Z0-9_\-. ()\[\]]+")
    numeric_id: Pattern[str] = re.compile(r"\d+")
    uuid: Pattern[str] = re.compile(
        r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}", re.IGNORECASE
    )
    mongo_id: Pattern[str] = re.compile(r"[a-f\d]{24}", re.IGNORECASE)
    blocked_markup: Pattern[str] = re.compile(r"<script|javascript:|on\w+\s*=", re.IGNORECASE)


def _default_mime_types() -> dict[FileCategory, tuple[str, ...]]:
    return {
        FileCategory.PROFILE_PHOTO: ("image/jpeg", "image/png", "image/gif", "image/webp"),
        FileCategory.DOCUMENT: (
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "text/plain",
        ),
        FileCategory.SPREADSHEET: (
            # Windows browsers label .csv uploads with the legacy Excel type.
            "application/vnd.ms-excel",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "text/csv",
        ),
    }


@dataclass(frozen=True)
class ValidationRegistry:
    bounds: FieldBounds = field(default_factory=FieldBounds)
    patterns: Patterns = field(default_factory=Patterns)
    mime_types: dict[FileCategory, tuple[str, ...]] = field(default_factory=_default_mime_types)
    common_passwords: frozenset[str] = frozenset({"password", "password1", "12345678", "qwerty123"})
    weak_password_words: tuple[str, ...] = (
        "password",
        "password1",
        "12345678",
        "qwerty123",
        "letmein",
        "welcome",
        "admin",
    )
    days_of_week: tuple[str, ...] = (
        "Monday",
        "Tuesday",
        "Wednesday",
        "Thursday",
        "Friday",
        "Saturday",
        "Sunday",
    )

    def max_upload_mb(self, category: FileCategory) -> int:
        return {
            FileCategory.PROFILE_PHOTO: self.bounds.profile_photo_max_mb,
            FileCategory.DOCUMENT: self.bounds.document_max_mb,
            FileCategory.SPREADSHEET: self.bounds.spreadsheet_max_mb,
        }[category]


DEFAULT_REGISTRY = ValidationRegistry()
