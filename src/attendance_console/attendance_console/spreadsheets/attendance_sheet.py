"""Attendance spreadsheet import/export.

Column contract shared with the console's Excel template: headers are
normalized on import, status and time slot are case-insensitive on import and
capitalized on export, dates are ``YYYY-MM-DD`` and times ``HH:MM AM/PM``.
Row numbers in messages are spreadsheet rows, so the first data row is
``Row 2``.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Sequence, Union

import pandas as pd

from ..attendance.model import AttendanceExportRow, DailySummary, StudentSummary
from ..common.datetime_utils import try_parse_iso_date
from ..core.constants import DEFAULT_IMPORT_ROW_LIMIT
from ..core.enums import AttendanceStatus, TimeSlot
from ..core.exceptions import SpreadsheetError
from ..validation.bulk import find_batch_duplicates, validate_bulk_operation_size
from ..validation.registry import DEFAULT_REGISTRY, ValidationRegistry
from ..validation.results import SheetValidationResult

logger = logging.getLogger(__name__)

ATTENDANCE_COLUMNS = (
    "Student Number",
    "First Name",
    "Last Name",
    "Email",
    "Subject Code",
    "Subject Name",
    "Status",
    "Time Slot",
    "Date",
    "Time",
    "Notes",
)
REQUIRED_IMPORT_COLUMNS = ("Student Number", "Status", "Time Slot", "Date")

_COLUMN_WIDTHS = (15, 15, 15, 25, 12, 20, 10, 10, 12, 12, 30)

HEADER_ALIASES = {
    "student number": "Student Number",
    "student no": "Student Number",
    "student_number": "Student Number",
    "first name": "First Name",
    "firstname": "First Name",
    "last name": "Last Name",
    "lastname": "Last Name",
    "email": "Email",
    "subject code": "Subject Code",
    "subject name": "Subject Name",
    "status": "Status",
    "time slot": "Time Slot",
    "timeslot": "Time Slot",
    "date": "Date",
    "time": "Time",
    "notes": "Notes",
}

SHEET_MIME_TYPES = {
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "csv": "text/csv",
}

_DATE_WITH_MIDNIGHT = re.compile(r"(\d{4}-\d{2}-\d{2})[ T]00:00:00")
_UNNAMED = re.compile(r"unnamed: \d+")

SheetRow = dict

Source = Union[bytes, BinaryIO]


@dataclass(frozen=True)
class ImportedMark:
    """One importable row. The student is still identified by number only."""

    student_number: str
    status: str
    time_slot: str
    date: str
    timestamp: str
    subject_code: str = ""
    notes: str = ""


def normalize_header(raw) -> str:
    text = " ".join(str(raw or "").strip().lower().split())
    if not text or _UNNAMED.fullmatch(text):
        return ""
    return HEADER_ALIASES.get(text) or HEADER_ALIASES.get(text.replace(" ", "")) or text.title()


def _clean_cell(value: str) -> str:
    text = value.strip()
    match = _DATE_WITH_MIDNIGHT.fullmatch(text)
    return match.group(1) if match else text


def read_attendance_sheet(source: Source, filename: str) -> list[SheetRow]:
    """Parse the first sheet of an upload into rows keyed by canonical headers.

    Every cell comes back as a trimmed string; fully blank rows are dropped.
    """
    suffix = Path(filename or "").suffix.lower()
    buffer = io.BytesIO(source) if isinstance(source, (bytes, bytearray)) else source
    try:
        if suffix == ".xlsx":
            frame = pd.read_excel(buffer, sheet_name=0, dtype=str, keep_default_na=False, engine="openpyxl")
        elif suffix == ".csv":
            frame = pd.read_csv(buffer, dtype=str, keep_default_na=False, encoding="utf-8-sig")
        else:
            raise SpreadsheetError(f"Unsupported file type '{suffix or filename}'. Use .xlsx or .csv")
    except pd.errors.EmptyDataError as exc:
        raise SpreadsheetError("Empty or invalid Excel sheet") from exc
    except (ValueError, OSError, zipfile.BadZipFile) as exc:
        logger.warning(f"Could not parse attendance sheet {filename!r}: {exc}")
        raise SpreadsheetError("Failed to parse attendance Excel file. Please check the template format.") from exc

    headers = [normalize_header(col) for col in frame.columns]
    frame.columns = headers
    frame = frame.loc[:, [bool(h) for h in headers]]
    frame = frame.fillna("").astype(str)

    rows = []
    for record in frame.to_dict(orient="records"):
        row = {key: _clean_cell(value) for key, value in record.items()}
        if any(row.values()):
            rows.append(row)
    logger.info(f"Read {len(rows)} attendance row(s) from {filename!r}")
    return rows


def _duplicate_key(row: SheetRow, key_on_time_slot: bool) -> tuple:
    key = (
        row.get("Student Number", "").lower(),
        row.get("Date", ""),
        row.get("Subject Code", "").upper(),
    )
    if key_on_time_slot:
        key += (row.get("Time Slot", "").lower(),)
    return key


def validate_attendance_rows(
    rows: Sequence[SheetRow],
    *,
    max_rows: int = DEFAULT_IMPORT_ROW_LIMIT,
    key_on_time_slot: bool = False,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> SheetValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not rows:
        return SheetValidationResult(errors=("Excel file is empty or has no valid data",))
    size = validate_bulk_operation_size(len(rows), max_rows)
    if not size:
        return SheetValidationResult(errors=(size.error,))

    statuses = [s.value for s in AttendanceStatus]
    slots = [s.value for s in TimeSlot]

    for index, row in enumerate(rows):
        prefix = f"Row {index + 2}"

        for column in REQUIRED_IMPORT_COLUMNS:
            if not row.get(column, "").strip():
                errors.append(f"{prefix}: {column} is required")

        status = row.get("Status", "").strip()
        if status and status.lower() not in statuses:
            errors.append(f'{prefix}: Invalid status "{status}". Must be: present, absent, late, or excused')

        slot = row.get("Time Slot", "").strip()
        if slot and slot.lower() not in slots:
            errors.append(f'{prefix}: Invalid time slot "{slot}". Must be: arrival or departure')

        day = row.get("Date", "").strip()
        if day and not registry.patterns.date_iso.fullmatch(day):
            errors.append(f'{prefix}: Invalid date format "{day}". Use YYYY-MM-DD format')
        elif day and try_parse_iso_date(day) is None:
            errors.append(f'{prefix}: Invalid date "{day}"')

        clock = row.get("Time", "").strip()
        patterns = registry.patterns
        if clock and not (patterns.time_12h.fullmatch(clock) or patterns.time_24h.fullmatch(clock)):
            warnings.append(f'{prefix}: Invalid time "{clock}". Only the date will be recorded')

        if not row.get("First Name") and not row.get("Last Name"):
            warnings.append(f"{prefix}: Student name is missing")
        if not row.get("Email"):
            warnings.append(f"{prefix}: Email is missing")

    # Later copies of a repeated key are errors; the first one stands.
    keys = [_duplicate_key(row, key_on_time_slot) for row in rows]
    repeated = set(find_batch_duplicates(k for k in keys if k[0] and k[1]))
    seen: set = set()
    for index, key in enumerate(keys):
        if key not in repeated:
            continue
        if key in seen:
            number = rows[index].get("Student Number")
            errors.append(f"Row {index + 2}: Duplicate entry for student {number} on {key[1]}")
        seen.add(key)

    return SheetValidationResult(errors=tuple(errors), warnings=tuple(warnings))


def _timestamp(day: str, clock: str, registry: ValidationRegistry) -> str:
    """ISO timestamp from a Date cell and a Time cell; the bare date when the time is unusable."""
    twelve = registry.patterns.time_12h.fullmatch(clock)
    if twelve:
        hour, minute, meridiem = twelve.groups()
        text, fmt = f"{day} {int(hour):02d}:{minute} {meridiem.upper()}", "%Y-%m-%d %I:%M %p"
    elif registry.patterns.time_24h.fullmatch(clock):
        text, fmt = f"{day} {clock}", "%Y-%m-%d %H:%M"
    else:
        return day
    try:
        return datetime.strptime(text, fmt).isoformat()
    except ValueError:
        return day


def rows_to_attendance(
    rows: Iterable[SheetRow], *, registry: ValidationRegistry = DEFAULT_REGISTRY
) -> list[ImportedMark]:
    """Rows missing a student number, status or time slot are skipped."""
    marks = []
    for row in rows:
        number = row.get("Student Number", "").strip()
        status = row.get("Status", "").strip().lower()
        slot = row.get("Time Slot", "").strip().lower()
        if not (number and status and slot):
            continue
        day = row.get("Date", "").strip()
        marks.append(
            ImportedMark(
                student_number=number,
                status=status,
                time_slot=slot,
                date=day,
                timestamp=_timestamp(day, row.get("Time", "").strip(), registry),
                subject_code=row.get("Subject Code", "").strip().upper(),
                notes=row.get("Notes", "").strip(),
            )
        )
    return marks


def _export_frame(records: Iterable[AttendanceExportRow]) -> pd.DataFrame:
    data = []
    for r in records:
        data.append(
            {
                "Student Number": r.student_number,
                "First Name": r.first_name,
                "Last Name": r.last_name,
                "Email": r.email,
                "Subject Code": r.subject_code or "",
                "Subject Name": r.subject_name or "",
                "Status": r.status.strip().capitalize(),
                "Time Slot": r.time_slot.strip().capitalize(),
                "Date": r.timestamp.strftime("%Y-%m-%d") if r.timestamp else "",
                "Time": r.timestamp.strftime("%I:%M %p") if r.timestamp else "",
                "Notes": r.notes or "",
            }
        )
    return pd.DataFrame(data, columns=list(ATTENDANCE_COLUMNS))


def _write_xlsx(sheets: dict[str, pd.DataFrame], widths: dict[str, Sequence[int]], headerless=()) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        for name, frame in sheets.items():
            frame.to_excel(writer, sheet_name=name, index=False, header=name not in headerless)
            sheet = writer.sheets[name]
            for position, width in enumerate(widths.get(name, ()), start=1):
                letter = sheet.cell(row=1, column=position).column_letter
                sheet.column_dimensions[letter].width = width
    return out.getvalue()


def export_attendance(records: Iterable[AttendanceExportRow], fmt: str = "xlsx") -> bytes:
    frame = _export_frame(records)
    fmt = fmt.lower()
    if fmt == "csv":
        payload = frame.to_csv(index=False).encode("utf-8-sig")
    elif fmt == "xlsx":
        payload = _write_xlsx({"Attendance": frame}, {"Attendance": _COLUMN_WIDTHS})
    else:
        raise SpreadsheetError(f"Unsupported export format '{fmt}'")
    logger.info(f"Exported {len(frame)} attendance row(s) as {fmt}")
    return payload


def export_filename(fmt: str, *, today: date) -> str:
    return f"attendance_export_{today.strftime('%Y-%m-%d')}.{fmt.lower()}"


STUDENT_SUMMARY_COLUMNS = (
    "Student Number",
    "Student Name",
    "Total Days",
    "Present",
    "Absent",
    "Late",
    "Excused",
    "Attendance Rate",
    "Last Attendance",
)
_STUDENT_SUMMARY_WIDTHS = (15, 20, 12, 10, 10, 10, 10, 15, 15)


def _percent(rate: float) -> str:
    return f"{rate:g}%"


def export_attendance_summary(
    daily: DailySummary, students: Iterable[StudentSummary], report_date: date
) -> bytes:
    """Summary workbook: a "Daily Summary" sheet, plus "Student Summary" when any students are given."""
    day = daily.date or report_date.strftime("%Y-%m-%d")
    daily_rows = [
        ("DAILY ATTENDANCE SUMMARY", ""),
        ("Date:", day),
        ("", ""),
        ("Total Students:", daily.total_students),
        ("Present:", daily.present),
        ("Absent:", daily.absent),
        ("Late:", daily.late),
        ("Excused:", daily.excused),
        ("Attendance Rate:", _percent(daily.attendance_rate)),
        ("", ""),
        ("Arrivals:", daily.arrival_count),
        ("Departures:", daily.departure_count),
    ]
    sheets = {"Daily Summary": pd.DataFrame(daily_rows)}
    widths: dict[str, Sequence[int]] = {"Daily Summary": (20, 15)}

    student_rows = [
        {
            "Student Number": s.student_number,
            "Student Name": s.student_name,
            "Total Days": s.total_days,
            "Present": s.present_days,
            "Absent": s.absent_days,
            "Late": s.late_days,
            "Excused": s.excused_days,
            "Attendance Rate": _percent(s.attendance_rate),
            "Last Attendance": s.last_attendance.strftime("%Y-%m-%d") if s.last_attendance else "N/A",
        }
        for s in students
    ]
    if student_rows:
        sheets["Student Summary"] = pd.DataFrame(student_rows, columns=list(STUDENT_SUMMARY_COLUMNS))
        widths["Student Summary"] = _STUDENT_SUMMARY_WIDTHS

    logger.info(f"Exported attendance summary for {day} with {len(student_rows)} student row(s)")
    return _write_xlsx(sheets, widths, headerless=("Daily Summary",))


def summary_filename(report_date: date) -> str:
    return f"attendance_summary_{report_date.strftime('%Y-%m-%d')}.xlsx"


_INSTRUCTIONS = (
    "ATTENDANCE IMPORT TEMPLATE - INSTRUCTIONS",
    "",
    "Required Fields:",
    "• Student Number - Must match existing student (e.g., 24-0001)",
    "• Status - Must be one of: present, absent, late, excused",
    "• Time Slot - Must be one of: arrival, departure",
    "• Date - Format: YYYY-MM-DD (e.g., 2025-01-15)",
    "",
    "Optional Fields:",
    "• First Name, Last Name, Email - For reference only",
    "• Subject Code, Subject Name - Link to specific subject",
    "• Time - Format: HH:MM AM/PM (e.g., 08:30 AM)",
    "• Notes - Any additional information",
    "",
    "Tips:",
    "• Remove example data before importing your records",
    "• All student numbers must exist in the system",
    "• Use lowercase for status and time slot values",
    "• Leave notes empty if not needed",
    "",
    "Valid Status Values:",
    "• present - Student attended",
    "• absent - Student did not attend",
    "• late - Student arrived late",
    "• excused - Student excused absence",
    "",
    "Valid Time Slot Values:",
    "• arrival - Student check-in time",
    "• departure - Student check-out time",
)


def build_import_template(*, today: date, include_instructions: bool = True) -> bytes:
    """Template workbook with three sample rows and an optional Instructions sheet."""
    day = today.strftime("%Y-%m-%d")
    sample = [
        ("24-0001", "John", "Doe", "john.doe@example.com", "present", "arrival", "08:00 AM", "On time"),
        ("24-0002", "Alice", "Smith", "alice.smith@example.com", "late", "arrival", "08:15 AM", "15 minutes late"),
        ("24-0003", "Bob", "Johnson", "bob.johnson@example.com", "present", "departure", "05:00 PM", ""),
    ]
    rows = [
        {
            "Student Number": number,
            "First Name": first,
            "Last Name": last,
            "Email": email,
            "Subject Code": "CS101",
            "Subject Name": "Computer Science 101",
            "Status": status,
            "Time Slot": slot,
            "Date": day,
            "Time": clock,
            "Notes": notes,
        }
        for number, first, last, email, status, slot, clock, notes in sample
    ]
    sheets = {"Attendance": pd.DataFrame(rows, columns=list(ATTENDANCE_COLUMNS))}
    widths: dict[str, Sequence[int]] = {"Attendance": _COLUMN_WIDTHS}
    if include_instructions:
        sheets["Instructions"] = pd.DataFrame({"Instructions": list(_INSTRUCTIONS)})
        widths["Instructions"] = (80,)
    return _write_xlsx(sheets, widths, headerless=("Instructions",))


def sheet_mime_type(fmt: str) -> Optional[str]:
    return SHEET_MIME_TYPES.get(fmt.lower())
