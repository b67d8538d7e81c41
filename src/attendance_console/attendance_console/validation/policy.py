from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import (
    DEFAULT_AGE_TOLERANCE_YEARS,
    DEFAULT_BULK_ATTENDANCE_LIMIT,
    DEFAULT_CLOCK_SKEW_MINUTES,
    DEFAULT_EDIT_WINDOW_DAYS,
    DEFAULT_IMPORT_ROW_LIMIT,
)


@dataclass(frozen=True)
class ValidationPolicy:
    """Business knobs that deployments may tune through settings."""

    edit_window_days: int = DEFAULT_EDIT_WINDOW_DAYS
    age_tolerance_years: int = DEFAULT_AGE_TOLERANCE_YEARS
    clock_skew_minutes: int = DEFAULT_CLOCK_SKEW_MINUTES
    # When True, an arrival and a departure on the same day are separate records.
    duplicate_attendance_by_time_slot: bool = False
    bulk_attendance_limit: int = DEFAULT_BULK_ATTENDANCE_LIMIT
    import_row_limit: int = DEFAULT_IMPORT_ROW_LIMIT
    school_email_domain: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "ValidationPolicy":
        """Read the ``ATTENDANCE_*``-style attributes of a settings module."""

        def _int(name: str, default: int) -> int:
            return int(getattr(settings, name, default))

        return cls(
            edit_window_days=_int("ATTENDANCE_EDIT_WINDOW_DAYS", DEFAULT_EDIT_WINDOW_DAYS),
            age_tolerance_years=_int("AGE_TOLERANCE_YEARS", DEFAULT_AGE_TOLERANCE_YEARS),
            clock_skew_minutes=_int("CLOCK_SKEW_MINUTES", DEFAULT_CLOCK_SKEW_MINUTES),
            duplicate_attendance_by_time_slot=bool(getattr(settings, "DUPLICATE_ATTENDANCE_BY_TIME_SLOT", False)),
            bulk_attendance_limit=_int("BULK_ATTENDANCE_LIMIT", DEFAULT_BULK_ATTENDANCE_LIMIT),
            import_row_limit=_int("IMPORT_ROW_LIMIT", DEFAULT_IMPORT_ROW_LIMIT),
            school_email_domain=getattr(settings, "SCHOOL_EMAIL_DOMAIN", None) or None,
        )


DEFAULT_POLICY = ValidationPolicy()
