from __future__ import annotations

from typing import Any, Mapping

from ...core.enums import EntityKind
from ...subjects.model import SubjectData
from ..composite import validate_subject_data
from ..results import FormValidationResult
from ..snapshot import Snapshot
from .base import EntityValidator, ValidationContext


class SubjectValidator(EntityValidator):
    kind = EntityKind.SUBJECT

    def validate(
        self,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        *,
        is_update: bool,
        context: ValidationContext,
    ) -> FormValidationResult:
        return validate_subject_data(
            SubjectData.from_dict(payload),
            snapshot.subjects,
            is_update,
            enrollments=snapshot.enrollments,
            registry=context.registry,
        )
