from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..common.payload import int_or_raw, pick, require_mapping


@dataclass(frozen=True)
class StudentData:
    """Student record as submitted by a form or held in a snapshot.

    ``student_number`` and ``email`` are required; an empty string means the
    caller left them out and the validators report it.
    """

    student_number: str
    email: str
    id: Optional[Union[int, str]] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    birthdate: Optional[str] = None
    age: Optional[Union[int, str]] = None
    status: Optional[str] = None
    contact: Optional[str] = None
    section: Optional[str] = None
    year_level: Optional[Union[int, str]] = None
    nfc_id: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_contact: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "StudentData":
        data = require_mapping(data, "Student")
        return cls(
            id=pick(data, "id", "_id"),
            student_number=str(pick(data, "student_number", "student_no", default="")),
            email=str(pick(data, "email", default="")),
            first_name=pick(data, "first_name", "firstname"),
            middle_name=pick(data, "middle_name", "middlename"),
            last_name=pick(data, "last_name", "lastname"),
            birthdate=pick(data, "birthdate", "birth_date"),
            age=int_or_raw(pick(data, "age")),
            status=pick(data, "status"),
            contact=pick(data, "contact", "contact_number"),
            section=pick(data, "section"),
            year_level=int_or_raw(pick(data, "year_level")),
            nfc_id=pick(data, "nfc_id"),
            guardian_name=pick(data, "guardian_name"),
            guardian_contact=pick(data, "guardian_contact"),
        )


@dataclass(frozen=True)
class NfcCard:
    """An NFC tag already bound to a student."""

    nfc_id: str
    id: Optional[Union[int, str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "NfcCard":
        data = require_mapping(data, "NFC card")
        return cls(id=pick(data, "id", "_id"), nfc_id=str(pick(data, "nfc_id", "card_id", default="")))
