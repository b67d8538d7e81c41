from datetime import date, datetime, timedelta

import pytest

from attendance_console.core.enums import EducationLevel, ErrorKind
from attendance_console.validation import fields
from attendance_console.validation.fields import FileInfo

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def test_student_number_accepts_recent_intake(today):
    assert fields.validate_student_number("24-0001", today=today)
    assert fields.validate_student_number(" 26-0420 ", today=today)


def test_student_number_required_and_format(today):
    empty = fields.validate_student_number("", today=today)
    assert not empty
    assert empty.error == "Student number is required"
    assert empty.kind is ErrorKind.REQUIRED

    bad = fields.validate_student_number("2400001", today=today)
    assert bad.error == "Student number must be in format YY-NNNN (e.g., 24-0001)"


def test_student_number_year_window(today):
    too_new = fields.validate_student_number("36-0001", today=today)
    assert too_new.error == "Student number year appears to be invalid"
    assert too_new.kind is ErrorKind.RANGE
    assert not fields.validate_student_number("14-0001", today=today)
    assert fields.validate_student_number("15-0001", today=today)


def test_student_number_year_wraps_at_century():
    assert fields.validate_student_number("99-0001", today=date(2005, 1, 1))
    assert fields.validate_student_number("00-0001", today=date(1999, 6, 1))


@pytest.mark.parametrize("name", ["Jean-Luc", "José", "O'Neil", "Mary Ann"])
def test_person_name_accepts_real_names(name):
    assert fields.validate_person_name(name)


def test_person_name_rejections():
    assert fields.validate_person_name("J", "First name").error == "First name must be at least 2 characters"
    assert fields.validate_person_name("R2D2").error == "Name can only contain letters, spaces, hyphens, and apostrophes"
    assert fields.validate_person_name("-Ann").error == "Name cannot start or end with special characters"
    assert fields.validate_person_name(None, "Last name").error == "Last name is required"


def test_email_rules():
    assert fields.validate_email("john.doe@example.com")
    assert fields.validate_email("not-an-email").error == "Invalid email format"
    assert fields.validate_email("a" * 65 + "@example.com").error == "Email local part too long"


def test_birthdate(today):
    assert fields.validate_birthdate("2010-06-01", today=today)
    assert fields.validate_birthdate("2030-01-01", today=today).error == "Birthdate cannot be in the future"
    assert fields.validate_birthdate("2024-02-30", today=today).error == "Invalid date"
    assert fields.validate_birthdate("01/02/2010", today=today).error == "Birthdate must be in YYYY-MM-DD format"
    assert fields.validate_birthdate("2023-03-15", today=today).error == "Person must be at least 3 years old"


def test_age_number_problems():
    assert fields.validate_age("12")
    assert fields.validate_age("12.5").error == "Age must be a whole number"
    assert fields.validate_age("abc").error == "Age must be a valid number"
    assert fields.validate_age(2).error == "Age must be at least 3 years"
    assert fields.validate_age(True).error == "Age must be a valid number"


def test_contact_numbers():
    assert fields.validate_contact("+639171234567")
    assert fields.validate_contact("12345").error == "Contact number must be at least 10 digits"
    assert fields.validate_contact("0917 123 4567").error == "Invalid contact number format"
    assert fields.validate_contact("", "Guardian contact").error == "Guardian contact is required"


def test_capacity_and_year_level():
    assert fields.validate_capacity("30")
    assert fields.validate_capacity("0").error == "Capacity must be at least 1"
    assert fields.validate_capacity(501).error == "Capacity must be at most 500"
    assert fields.validate_year_level(7).error == "College year level must be between 1 and 6"
    assert fields.validate_year_level(7, EducationLevel.HIGHSCHOOL)


def test_subject_fields():
    assert fields.validate_subject_code("cs-101")
    assert fields.validate_subject_code("CS 101").error == "Subject code can only contain letters, numbers, and hyphens"
    assert fields.validate_subject_name("AI").error == "Subject name must be at least 3 characters"
    assert fields.validate_description("<script>alert(1)</script>").error == "Description contains invalid content"
    assert fields.validate_room_number("")


def test_attendance_status_and_slot():
    assert fields.validate_attendance_status("Present")
    assert fields.validate_attendance_status("tardy").error == "Status must be one of: present, absent, late, excused"
    assert fields.validate_time_slot("noon").error == "Time slot must be one of: arrival, departure"


def test_attendance_timestamp_allows_clock_skew(fixed_now):
    soon = (fixed_now + timedelta(minutes=4)).isoformat()
    later = (fixed_now + timedelta(minutes=10)).isoformat()
    assert fields.validate_attendance_timestamp(soon, now=fixed_now)
    result = fields.validate_attendance_timestamp(later, now=fixed_now)
    assert result.error == "Attendance timestamp cannot be in the future"
    assert result.kind is ErrorKind.TEMPORAL
    assert fields.validate_attendance_timestamp("garbage", now=fixed_now).error == "Invalid timestamp format"


def test_attendance_date(today):
    assert fields.validate_attendance_date("2025-03-15", today=today)
    assert fields.validate_attendance_date(date(2025, 3, 16), today=today).kind is ErrorKind.TEMPORAL


def test_nfc_and_card():
    assert fields.validate_nfc_id("04a1b2c3")
    assert fields.validate_nfc_id("XYZ12345").error == "NFC ID must be a valid hexadecimal string"
    assert fields.validate_card_number("1234 5678 9012 3456")
    assert fields.validate_card_number("1234").error == "Card number must be exactly 16 digits"


def test_password_rules():
    assert fields.validate_password("Abcdefg1")
    assert fields.validate_password("abcdefg1").error == "Password must contain at least one uppercase letter"
    assert fields.validate_password("Short1").error == "Password must be at least 8 characters"
    assert fields.validate_password("Password1").error == "Password is too common. Please choose a stronger password"


def test_password_strength():
    strong = fields.validate_password_strength("Tr0ub4dor&Horse")
    assert strong.result
    assert strong.strength == "strong"

    weak = fields.validate_password_strength("adminAdmin1")
    assert not weak.result
    assert weak.strength == "weak"


def test_otp_and_username():
    assert fields.validate_otp("123456")
    assert fields.validate_otp("12345").error == "OTP must be exactly 6 digits"
    assert fields.validate_username("juan_23")
    assert not fields.validate_username("1juan")


def test_spreadsheet_upload_checks_size_then_type_then_name():
    ok = FileInfo(filename="attendance.xlsx", size=1024, content_type=XLSX)
    assert fields.validate_spreadsheet_file(ok)

    too_big = FileInfo(filename="../x.exe", size=11 * 1024 * 1024, content_type="image/png")
    assert fields.validate_spreadsheet_file(too_big).error == "File size must be under 10MB. Current size: 11.00MB"

    wrong_type = FileInfo(filename="../x.exe", size=10, content_type="image/png")
    assert fields.validate_spreadsheet_file(wrong_type).error.startswith("File type 'image/png' is not allowed")

    bad_name = FileInfo(filename="../x.xlsx", size=10, content_type=XLSX)
    assert fields.validate_spreadsheet_file(bad_name).error == "Filename contains invalid path characters"


def test_date_range(today):
    assert fields.validate_date_range("2025-01-01", "2025-03-01", today=today)
    assert fields.validate_date_range("2025-03-01", "2025-01-01", today=today).error == (
        "Start date must be before or equal to end date"
    )
    assert fields.validate_date_range("2023-01-01", "2025-01-02", today=today).error == "Date range cannot exceed 1 year"


def test_ids():
    assert fields.validate_id(42)
    assert fields.validate_id("42")
    assert fields.validate_id("507f1f77bcf86cd799439011")
    assert fields.validate_id(0).error == "ID must be a positive integer"
    assert fields.validate_id("abc").error == "Invalid ID format"


def test_schedule_times():
    assert fields.validate_schedule_time_range("09:00", "10:30")
    assert fields.validate_schedule_time_range("10:00", "09:00").error == "End time must be after start time"
    assert fields.validate_schedule_time_range("09:00", "09:20").error == (
        "Schedule duration must be at least 30 minutes"
    )
    assert fields.validate_time_format("9am").error == "Time must be in HH:mm format (e.g., 09:00, 14:30)"
    assert fields.validate_day_of_week("monday")
    assert not fields.validate_day_of_week("Funday")


def test_search_term():
    assert fields.validate_search_term("")
    assert fields.validate_search_term("john")
    assert fields.validate_search_term("x" * 300)


@pytest.mark.parametrize("number", ["1-001", "2024-0001", "24-01", "24-00001"])
def test_student_number_shape_is_exact(number, today):
    result = fields.validate_student_number(number, today=today)
    assert not result
    assert result.kind is ErrorKind.FORMAT


def test_capacity_bounds():
    assert fields.validate_capacity(500)
    assert fields.validate_capacity(0).error == "Capacity must be at least 1"
    assert fields.validate_capacity("²").error == "Capacity must be a valid number"


def test_unknown_education_level_fails_instead_of_raising():
    result = fields.validate_year_level(3, "kindergarten")
    assert result.error == 'Unknown education level "kindergarten". Must be one of: highschool, college'
    assert fields.validate_year_level(3, EducationLevel.COLLEGE)


def test_unknown_file_category_fails_instead_of_raising():
    upload = FileInfo(filename="attendance.xlsx", size=10, content_type=XLSX)
    assert fields.validate_file(upload, "archive").error == 'Unknown file category "archive"'
    assert fields.validate_file(upload, "spreadsheet")
