from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..common.payload import pick, require_mapping


@dataclass(frozen=True)
class EnrollmentData:
    student_id: Union[int, str]
    subject_id: Union[int, str]
    id: Optional[Union[int, str]] = None

    @classmethod
    def from_dict(cls, data: Any) -> "EnrollmentData":
        data = require_mapping(data, "Enrollment")
        return cls(
            id=pick(data, "id", "_id"),
            student_id=pick(data, "student_id", "student", default=""),
            subject_id=pick(data, "subject_id", "subject", "course_id", default=""),
        )
