from attendance_console.validation.forms import (
    validate_login_form,
    validate_signup_form,
    validate_student_form,
    validate_subject_form,
)


def test_login_form_reports_each_missing_field():
    result = validate_login_form({})
    assert not result.is_valid
    assert result.errors == {"email": "Email is required", "password": "Password is required"}


def test_login_form_ok():
    assert validate_login_form({"email": "prof@school.edu", "password": "anything"})


def test_signup_form_password_mismatch():
    result = validate_signup_form(
        {"name": "Maria Clara", "email": "maria@school.edu", "password": "Secret123", "confirm_password": "Secret124"}
    )
    assert result.errors == {"confirm_password": "Passwords do not match"}


def test_student_form_accepts_camel_case_keys(today):
    result = validate_student_form(
        {
            "firstName": "John",
            "lastName": "Doe",
            "email": "john.doe@example.com",
            "studentNumber": "24-0001",
            "yearLevel": "2",
            "section": "BSIT-2A",
        },
        today=today,
    )
    assert result.is_valid, result.errors


def test_student_form_checks_optional_fields_only_when_given(today):
    data = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@example.com",
        "student_number": "24-0001",
        "year_level": 2,
        "section": "A",
        "contact": "",
        "nfc_id": "nothex!!",
    }
    result = validate_student_form(data, today=today)
    assert set(result.errors) == {"nfc_id"}


def test_subject_form():
    result = validate_subject_form({"name": "Data Structures", "code": "CS201", "capacity": "0"})
    assert result.errors == {"capacity": "Capacity must be at least 1"}
    assert validate_subject_form({"name": "Data Structures", "subjectCode": "CS201"})
