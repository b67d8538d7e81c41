from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from ..attendance.model import AttendanceData
from ..common.payload import require_mapping
from ..enrollments.model import EnrollmentData
from ..students.model import NfcCard, StudentData
from ..subjects.model import SubjectData
from ..users.model import AuthoredRecord


@dataclass(frozen=True)
class Snapshot:
    """Existing records the caller loaded for one validation call.

    The engine only reads these collections and never keeps them after the
    call returns.
    """

    students: Sequence[StudentData] = ()
    subjects: Sequence[SubjectData] = ()
    attendance: Sequence[AttendanceData] = ()
    enrollments: Sequence[EnrollmentData] = ()
    nfc_cards: Sequence[NfcCard] = ()
    authored_records: Sequence[AuthoredRecord] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Snapshot":
        data: Mapping[str, Any] = require_mapping(data or {}, "Snapshot")

        def _rows(key: str, factory):
            return tuple(factory(row) for row in data.get(key) or ())

        return cls(
            students=_rows("students", StudentData.from_dict),
            subjects=_rows("subjects", SubjectData.from_dict),
            attendance=_rows("attendance", AttendanceData.from_dict),
            enrollments=_rows("enrollments", EnrollmentData.from_dict),
            nfc_cards=_rows("nfc_cards", NfcCard.from_dict),
            authored_records=_rows("authored_records", AuthoredRecord.from_dict),
        )


EMPTY_SNAPSHOT = Snapshot()
