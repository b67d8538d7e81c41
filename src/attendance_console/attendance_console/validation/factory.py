from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..core.enums import EntityKind
from .results import FormValidationResult
from .snapshot import Snapshot
from .strategies.attendance_strategy import AttendanceValidator
from .strategies.base import EntityValidator, ValidationContext
from .strategies.enrollment_strategy import EnrollmentValidator
from .strategies.student_strategy import StudentValidator
from .strategies.subject_strategy import SubjectValidator


@dataclass
class EntityValidatorFactory:
    """Factory Pattern: one validator per entity kind."""

    def for_kind(self, kind: EntityKind | str) -> EntityValidator:
        kind = EntityKind(kind)
        if kind is EntityKind.STUDENT:
            return StudentValidator()
        if kind is EntityKind.SUBJECT:
            return SubjectValidator()
        if kind is EntityKind.ATTENDANCE:
            return AttendanceValidator()
        return EnrollmentValidator()


def validate_submission(
    kind: EntityKind | str,
    payload: Mapping[str, Any],
    snapshot: Snapshot,
    *,
    is_update: bool = False,
    context: ValidationContext | None = None,
    factory: EntityValidatorFactory | None = None,
) -> FormValidationResult:
    validator = (factory or EntityValidatorFactory()).for_kind(kind)
    return validator.validate(payload, snapshot, is_update=is_update, context=context or ValidationContext())
