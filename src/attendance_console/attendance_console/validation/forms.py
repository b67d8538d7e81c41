"""Whole-form checks with no snapshot involved.

These run on the raw form mapping (snake_case or camelCase keys) before any
record is built. Required fields are always checked; optional ones only when
the user typed something.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from ..common.payload import pick
from .fields import (
    validate_birthdate,
    validate_capacity,
    validate_contact,
    validate_description,
    validate_email,
    validate_instructor_name,
    validate_nfc_id,
    validate_password,
    validate_person_name,
    validate_room_number,
    validate_section,
    validate_student_number,
    validate_student_status,
    validate_subject_code,
    validate_subject_name,
    validate_year_level,
)
from .registry import DEFAULT_REGISTRY, ValidationRegistry
from .results import FormErrors, FormValidationResult


def _given(value) -> bool:
    return value is not None and str(value).strip() != ""


def validate_login_form(data: Mapping[str, Any], *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> FormValidationResult:
    errors = FormErrors()
    errors.check("email", validate_email(pick(data, "email"), registry=registry))
    if not pick(data, "password"):
        errors.add("password", "Password is required")
    return errors.result()


def validate_signup_form(data: Mapping[str, Any], *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> FormValidationResult:
    errors = FormErrors()
    errors.check("name", validate_person_name(pick(data, "name"), registry=registry))
    errors.check("email", validate_email(pick(data, "email"), registry=registry))
    password = pick(data, "password")
    errors.check("password", validate_password(password, registry=registry))
    if password != pick(data, "confirm_password"):
        errors.add("confirm_password", "Passwords do not match")
    return errors.result()


def validate_student_form(
    data: Mapping[str, Any],
    *,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> FormValidationResult:
    errors = FormErrors()
    errors.check("first_name", validate_person_name(pick(data, "first_name"), "First name", registry=registry))
    errors.check("last_name", validate_person_name(pick(data, "last_name"), "Last name", registry=registry))
    errors.check("email", validate_email(pick(data, "email"), registry=registry))
    errors.check(
        "student_number",
        validate_student_number(pick(data, "student_number"), today=today, registry=registry),
    )
    errors.check("year_level", validate_year_level(pick(data, "year_level"), registry=registry))
    errors.check("section", validate_section(pick(data, "section"), registry=registry))

    optional = {
        "middle_name": lambda v: validate_person_name(v, "Middle name", registry=registry),
        "contact": lambda v: validate_contact(v, registry=registry),
        "birthdate": lambda v: validate_birthdate(v, today=today, registry=registry),
        "status": validate_student_status,
        "nfc_id": lambda v: validate_nfc_id(v, registry=registry),
        "guardian_contact": lambda v: validate_contact(v, "Guardian contact", registry=registry),
    }
    for name, check in optional.items():
        value = pick(data, name)
        if _given(value):
            errors.check(name, check(value))
    return errors.result()


def validate_subject_form(data: Mapping[str, Any], *, registry: ValidationRegistry = DEFAULT_REGISTRY) -> FormValidationResult:
    errors = FormErrors()
    errors.check("name", validate_subject_name(pick(data, "name"), registry=registry))
    errors.check("code", validate_subject_code(pick(data, "code", "subject_code", "subjectCode"), registry=registry))

    optional = {
        "description": validate_description,
        "instructor": validate_instructor_name,
        "room": validate_room_number,
        "capacity": validate_capacity,
    }
    for name, check in optional.items():
        value = pick(data, name)
        if _given(value):
            errors.check(name, check(value, registry=registry))
    return errors.result()
