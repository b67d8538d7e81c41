from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ...common.identifiers import same_id
from ...core.enums import EntityKind
from ...enrollments.model import EnrollmentData
from ..composite import validate_enrollment_data
from ..results import FormValidationResult
from ..snapshot import Snapshot
from .base import EntityValidator, ValidationContext


def _find(rows: Sequence, wanted) -> Optional[Any]:
    return next((row for row in rows if same_id(row.id, wanted)), None)


class EnrollmentValidator(EntityValidator):
    """Resolves the student and subject from the snapshot before checking."""

    kind = EntityKind.ENROLLMENT

    def validate(
        self,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        *,
        is_update: bool,
        context: ValidationContext,
    ) -> FormValidationResult:
        enrollment = EnrollmentData.from_dict(payload)
        return validate_enrollment_data(
            enrollment,
            _find(snapshot.students, enrollment.student_id),
            _find(snapshot.subjects, enrollment.subject_id),
            snapshot.enrollments,
        )
