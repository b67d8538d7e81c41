from __future__ import annotations

from typing import Any, Mapping

from ...core.enums import EntityKind
from ...students.model import StudentData
from ..composite import validate_student_data
from ..results import FormValidationResult
from ..snapshot import Snapshot
from .base import EntityValidator, ValidationContext


class StudentValidator(EntityValidator):
    kind = EntityKind.STUDENT

    def validate(
        self,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        *,
        is_update: bool,
        context: ValidationContext,
    ) -> FormValidationResult:
        return validate_student_data(
            StudentData.from_dict(payload),
            snapshot.students,
            is_update,
            nfc_cards=snapshot.nfc_cards,
            today=context.now.date(),
            policy=context.policy,
            registry=context.registry,
        )
