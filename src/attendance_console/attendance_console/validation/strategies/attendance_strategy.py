from __future__ import annotations

from typing import Any, Mapping

from ...attendance.model import AttendanceData
from ...core.enums import EntityKind
from ..composite import validate_attendance_data
from ..results import FormValidationResult
from ..snapshot import Snapshot
from .base import EntityValidator, ValidationContext


class AttendanceValidator(EntityValidator):
    kind = EntityKind.ATTENDANCE

    def validate(
        self,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        *,
        is_update: bool,
        context: ValidationContext,
    ) -> FormValidationResult:
        return validate_attendance_data(
            AttendanceData.from_dict(payload),
            snapshot.attendance,
            is_update,
            now=context.now,
            policy=context.policy,
            registry=context.registry,
        )
