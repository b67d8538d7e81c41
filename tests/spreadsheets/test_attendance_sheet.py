import io
from datetime import date, datetime

import openpyxl
import pytest

from attendance_console.attendance.model import AttendanceExportRow, DailySummary, StudentSummary
from attendance_console.core.exceptions import SpreadsheetError
from attendance_console.spreadsheets.attendance_sheet import (
    ATTENDANCE_COLUMNS,
    build_import_template,
    export_attendance,
    export_attendance_summary,
    normalize_header,
    read_attendance_sheet,
    rows_to_attendance,
    validate_attendance_rows,
)


def _row(number="24-0001", status="present", slot="arrival", day="2025-03-14", **extra):
    row = {
        "Student Number": number,
        "First Name": "John",
        "Last Name": "Doe",
        "Email": "john.doe@example.com",
        "Status": status,
        "Time Slot": slot,
        "Date": day,
    }
    row.update(extra)
    return row


def _export_rows():
    return [
        AttendanceExportRow(
            student_number="24-0001",
            first_name="John",
            last_name="Doe",
            email="john.doe@example.com",
            subject_code="CS101",
            subject_name="Computer Science 101",
            status="present",
            time_slot="arrival",
            timestamp=datetime(2025, 3, 14, 8, 0),
            notes="On time",
        ),
        AttendanceExportRow(
            student_number="24-0002",
            first_name="Alice",
            last_name="Smith",
            email="alice.smith@example.com",
            subject_code="CS101",
            subject_name="Computer Science 101",
            status="late",
            time_slot="departure",
            timestamp=datetime(2025, 3, 14, 17, 5),
        ),
    ]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Student No", "Student Number"),
        ("student_number", "Student Number"),
        ("TimeSlot", "Time Slot"),
        ("  last   name ", "Last Name"),
        ("Remarks", "Remarks"),
        ("Unnamed: 4", ""),
    ],
)
def test_normalize_header(raw, expected):
    assert normalize_header(raw) == expected


def test_xlsx_export_reads_back_as_valid_import():
    content = export_attendance(_export_rows(), "xlsx")

    rows = read_attendance_sheet(content, "attendance.xlsx")

    assert list(rows[0]) == list(ATTENDANCE_COLUMNS)
    assert rows[0]["Status"] == "Present"
    assert rows[1]["Time"] == "05:05 PM"
    assert validate_attendance_rows(rows).is_valid

    marks = rows_to_attendance(rows)
    assert [m.status for m in marks] == ["present", "late"]
    assert marks[0].timestamp == "2025-03-14T08:00:00"
    assert marks[1].time_slot == "departure"
    assert marks[0].subject_code == "CS101"


def test_csv_export_reads_back():
    content = export_attendance(_export_rows(), "csv")
    rows = read_attendance_sheet(io.BytesIO(content), "attendance.csv")
    assert [r["Student Number"] for r in rows] == ["24-0001", "24-0002"]
    assert rows[1]["Notes"] == ""


def test_unknown_export_format():
    with pytest.raises(SpreadsheetError):
        export_attendance(_export_rows(), "pdf")


def test_csv_with_alias_headers_and_missing_optional_columns():
    content = b"student no,status,timeslot,date\n24-0001,Present,Arrival,2025-03-14\n,,,\n"

    rows = read_attendance_sheet(content, "upload.csv")
    result = validate_attendance_rows(rows)

    assert rows == [{"Student Number": "24-0001", "Status": "Present", "Time Slot": "Arrival", "Date": "2025-03-14"}]
    assert result.is_valid
    assert result.warnings == ("Row 2: Student name is missing", "Row 2: Email is missing")
    assert rows_to_attendance(rows)[0].timestamp == "2025-03-14"


def test_row_errors_use_spreadsheet_row_numbers():
    rows = [
        _row(status="tardy", slot="noon", day="03/14/2025"),
        _row(number=""),
        _row(day="2025-02-30"),
    ]

    result = validate_attendance_rows(rows)

    assert result.errors == (
        'Row 2: Invalid status "tardy". Must be: present, absent, late, or excused',
        'Row 2: Invalid time slot "noon". Must be: arrival or departure',
        'Row 2: Invalid date format "03/14/2025". Use YYYY-MM-DD format',
        "Row 3: Student Number is required",
        'Row 4: Invalid date "2025-02-30"',
    )


def test_duplicate_rows_in_one_upload():
    rows = [_row(), _row(slot="departure"), _row()]

    assert validate_attendance_rows(rows).errors == (
        "Row 3: Duplicate entry for student 24-0001 on 2025-03-14",
        "Row 4: Duplicate entry for student 24-0001 on 2025-03-14",
    )
    assert validate_attendance_rows(rows, key_on_time_slot=True).errors == (
        "Row 4: Duplicate entry for student 24-0001 on 2025-03-14",
    )


def test_empty_and_oversized_uploads():
    assert validate_attendance_rows([]).errors == ("Excel file is empty or has no valid data",)
    assert validate_attendance_rows([_row(), _row(number="24-0002"), _row(number="24-0003")], max_rows=2).errors == (
        "Bulk operation limit exceeded. Maximum 2 items allowed, got 3",
    )


def test_unreadable_files():
    with pytest.raises(SpreadsheetError, match="Failed to parse attendance Excel file"):
        read_attendance_sheet(b"definitely not a workbook", "attendance.xlsx")
    with pytest.raises(SpreadsheetError, match="Unsupported file type"):
        read_attendance_sheet(b"a,b\n", "attendance.txt")
    with pytest.raises(SpreadsheetError, match="Empty or invalid Excel sheet"):
        read_attendance_sheet(b"", "attendance.csv")


def test_import_template_is_a_valid_upload():
    content = build_import_template(today=date(2025, 3, 15))

    workbook = openpyxl.load_workbook(io.BytesIO(content))
    assert workbook.sheetnames == ["Attendance", "Instructions"]
    assert workbook["Instructions"]["A1"].value == "ATTENDANCE IMPORT TEMPLATE - INSTRUCTIONS"

    rows = read_attendance_sheet(content, "template.xlsx")
    result = validate_attendance_rows(rows)
    assert len(rows) == 3
    assert result.is_valid
    assert result.warnings == ()
    assert [m.timestamp for m in rows_to_attendance(rows)] == [
        "2025-03-15T08:00:00",
        "2025-03-15T08:15:00",
        "2025-03-15T17:00:00",
    ]


def test_template_without_instructions():
    content = build_import_template(today=date(2025, 3, 15), include_instructions=False)
    assert openpyxl.load_workbook(io.BytesIO(content)).sheetnames == ["Attendance"]


OLE2_HEADER = bytes.fromhex("d0cf11e0a1b11ae1") + b"\x00" * 512


def test_legacy_xls_uploads_are_rejected():
    with pytest.raises(SpreadsheetError, match=r"Use \.xlsx or \.csv"):
        read_attendance_sheet(OLE2_HEADER, "attendance.xls")
    with pytest.raises(SpreadsheetError, match="Failed to parse attendance Excel file"):
        read_attendance_sheet(OLE2_HEADER, "attendance.xlsx")


def test_summary_report_workbook():
    daily = DailySummary.from_dict(
        {
            "date": "2025-03-14",
            "totalStudents": 40,
            "present": 35,
            "absent": 2,
            "late": 2,
            "excused": 1,
            "attendanceRate": 92.5,
            "arrivalCount": 37,
            "departureCount": 30,
        }
    )
    students = [
        StudentSummary.from_dict(
            {
                "studentNumber": "24-0001",
                "studentName": "John Doe",
                "totalDays": 20,
                "presentDays": 18,
                "absentDays": 1,
                "lateDays": 1,
                "attendanceRate": "95",
                "lastAttendance": "2025-03-14T08:00:00",
            }
        ),
        StudentSummary.from_dict({"studentNumber": "24-0002", "attendanceRate": "n/a"}),
    ]

    content = export_attendance_summary(daily, students, date(2025, 3, 15))

    workbook = openpyxl.load_workbook(io.BytesIO(content))
    assert workbook.sheetnames == ["Daily Summary", "Student Summary"]
    labels = {row[0]: row[1] for row in workbook["Daily Summary"].iter_rows(values_only=True) if row[0]}
    assert labels["DAILY ATTENDANCE SUMMARY"] in (None, "")
    assert labels["Date:"] == "2025-03-14"
    assert labels["Total Students:"] == 40
    assert labels["Attendance Rate:"] == "92.5%"
    assert labels["Departures:"] == 30

    rows = list(workbook["Student Summary"].iter_rows(values_only=True))
    assert rows[0][0] == "Student Number"
    assert rows[1] == ("24-0001", "John Doe", 20, 18, 1, 1, 0, "95%", "2025-03-14")
    assert rows[2][7:] == ("0%", "N/A")


def test_summary_report_without_students():
    content = export_attendance_summary(DailySummary(date=""), [], date(2025, 3, 15))
    workbook = openpyxl.load_workbook(io.BytesIO(content))
    assert workbook.sheetnames == ["Daily Summary"]
    assert workbook["Daily Summary"]["B2"].value == "2025-03-15"
