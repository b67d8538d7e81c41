from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

from ..common.datetime_utils import try_parse_datetime, try_parse_iso_date
from ..common.payload import coerce_int, pick, require_mapping


@dataclass(frozen=True)
class AttendanceData:
    """One attendance mark.

    ``date`` is the calendar day (``YYYY-MM-DD``); ``timestamp`` is the moment
    the mark was taken. Either may be missing; ``day`` resolves whichever is
    present.
    """

    student_id: Union[int, str]
    status: str
    id: Optional[Union[int, str]] = None
    subject_id: Optional[Union[int, str]] = None
    date: Optional[str] = None
    timestamp: Optional[str] = None
    time_slot: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "AttendanceData":
        data = require_mapping(data, "Attendance")

        def _text(value):
            if isinstance(value, (date, datetime)):
                return value.isoformat()
            return value

        return cls(
            id=pick(data, "id", "_id"),
            student_id=pick(data, "student_id", "student", default=""),
            status=str(pick(data, "status", default="")),
            subject_id=pick(data, "subject_id", "subject"),
            date=_text(pick(data, "date")),
            timestamp=_text(pick(data, "timestamp")),
            time_slot=pick(data, "time_slot", "timeslot", "timeSlot"),
            notes=pick(data, "notes"),
        )

    @property
    def day(self) -> Optional[date]:
        """Calendar date of the mark, from ``date`` first, else ``timestamp``."""
        found = try_parse_iso_date(self.date) if self.date else None
        if found is None and self.timestamp:
            moment = try_parse_datetime(self.timestamp)
            found = moment.date() if moment else None
        return found


@dataclass(frozen=True)
class AttendanceExportRow:
    """Flattened attendance row in spreadsheet column order."""

    student_number: str
    first_name: str
    last_name: str
    email: str
    subject_code: str
    subject_name: str
    status: str
    time_slot: str
    timestamp: Optional[datetime]
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "AttendanceExportRow":
        data = require_mapping(data, "Attendance export row")
        return cls(
            student_number=str(pick(data, "student_number", default="")),
            first_name=str(pick(data, "first_name", default="")),
            last_name=str(pick(data, "last_name", default="")),
            email=str(pick(data, "email", default="")),
            subject_code=str(pick(data, "subject_code", default="")),
            subject_name=str(pick(data, "subject_name", default="")),
            status=str(pick(data, "status", default="")),
            time_slot=str(pick(data, "time_slot", "timeslot", default="")),
            timestamp=try_parse_datetime(pick(data, "timestamp")),
            notes=str(pick(data, "notes", default="")),
        )


def _count(value) -> int:
    number, _ = coerce_int(value)
    return number if number is not None and number >= 0 else 0


def _rate(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return round(number, 2) if math.isfinite(number) else 0.0


@dataclass(frozen=True)
class DailySummary:
    date: str
    total_students: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    attendance_rate: float = 0.0
    arrival_count: int = 0
    departure_count: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> "DailySummary":
        data = require_mapping(data, "Daily summary")
        return cls(
            date=str(pick(data, "date", default="")),
            total_students=_count(pick(data, "total_students")),
            present=_count(pick(data, "present")),
            absent=_count(pick(data, "absent")),
            late=_count(pick(data, "late")),
            excused=_count(pick(data, "excused")),
            attendance_rate=_rate(pick(data, "attendance_rate")),
            arrival_count=_count(pick(data, "arrival_count")),
            departure_count=_count(pick(data, "departure_count")),
        )


@dataclass(frozen=True)
class StudentSummary:
    """Per-student totals over a reporting period."""

    student_number: str
    student_name: str = ""
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    late_days: int = 0
    excused_days: int = 0
    attendance_rate: float = 0.0
    last_attendance: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Any) -> "StudentSummary":
        data = require_mapping(data, "Student summary")
        return cls(
            student_number=str(pick(data, "student_number", default="")),
            student_name=str(pick(data, "student_name", default="")),
            total_days=_count(pick(data, "total_days")),
            present_days=_count(pick(data, "present_days")),
            absent_days=_count(pick(data, "absent_days")),
            late_days=_count(pick(data, "late_days")),
            excused_days=_count(pick(data, "excused_days")),
            attendance_rate=_rate(pick(data, "attendance_rate")),
            last_attendance=try_parse_datetime(pick(data, "last_attendance")),
        )
