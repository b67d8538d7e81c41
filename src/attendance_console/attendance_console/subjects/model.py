from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..common.payload import int_or_raw, pick, require_mapping


@dataclass(frozen=True)
class SubjectData:
    """Subject (course) record.

    A missing or zero ``capacity`` means the subject has no enrollment limit.
    ``enrolled_count`` is the headcount the caller already knows about; when it
    is None the enrollment snapshot is counted instead.
    """

    code: str
    name: Optional[str] = None
    id: Optional[Union[int, str]] = None
    capacity: Optional[Union[int, str]] = None
    enrolled_count: Optional[int] = None
    description: Optional[str] = None
    instructor: Optional[str] = None
    room: Optional[str] = None
    section: Optional[str] = None
    year_level: Optional[Union[int, str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "SubjectData":
        data = require_mapping(data, "Subject")
        enrolled = int_or_raw(pick(data, "enrolled_count", "enrolled"))
        return cls(
            id=pick(data, "id", "_id"),
            code=str(pick(data, "code", "subject_code", "subjectCode", default="")),
            name=pick(data, "name", "subject_name", "subjectName"),
            capacity=int_or_raw(pick(data, "capacity")),
            enrolled_count=enrolled if isinstance(enrolled, int) and not isinstance(enrolled, bool) else None,
            description=pick(data, "description"),
            instructor=pick(data, "instructor"),
            room=pick(data, "room"),
            section=pick(data, "section"),
            year_level=int_or_raw(pick(data, "year_level")),
        )

    @property
    def has_capacity_limit(self) -> bool:
        return isinstance(self.capacity, int) and not isinstance(self.capacity, bool) and self.capacity > 0
