from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.enums import EntityKind
from ..users.permissions import Permission, require_permission
from ..validation.factory import EntityValidatorFactory, validate_submission
from ..validation.results import FormValidationResult
from ..validation.snapshot import Snapshot
from ..validation.strategies.base import ValidationContext

logger = logging.getLogger(__name__)


class EnrollmentService:
    def __init__(self, *, factory: EntityValidatorFactory | None = None):
        self._factory = factory or EntityValidatorFactory()

    def validate(self, *, current_role, payload: Mapping[str, Any], snapshot: Snapshot) -> FormValidationResult:
        require_permission(current_role, Permission.MANAGE_ENROLLMENTS)
        # Enrollment checks have no temporal or policy-dependent rules.
        result = validate_submission(
            EntityKind.ENROLLMENT, payload, snapshot, context=ValidationContext(), factory=self._factory
        )
        if not result:
            logger.info(f"Enrollment rejected: {result.errors}")
        return result
