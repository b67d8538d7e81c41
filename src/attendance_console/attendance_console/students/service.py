from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping

from ..common.datetime_utils import now_local
from ..core.enums import EntityKind
from ..users.permissions import Permission, require_permission
from ..validation.deletion import can_delete_student
from ..validation.factory import EntityValidatorFactory, validate_submission
from ..validation.policy import DEFAULT_POLICY, ValidationPolicy
from ..validation.registry import DEFAULT_REGISTRY, ValidationRegistry
from ..validation.results import DeletionCheckResult, FormValidationResult
from ..validation.snapshot import Snapshot
from ..validation.strategies.base import ValidationContext

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(
        self,
        *,
        policy: ValidationPolicy = DEFAULT_POLICY,
        registry: ValidationRegistry = DEFAULT_REGISTRY,
        clock: Callable[[], datetime] = now_local,
        factory: EntityValidatorFactory | None = None,
    ):
        self._policy = policy
        self._registry = registry
        self._clock = clock
        self._factory = factory or EntityValidatorFactory()

    def validate(
        self,
        *,
        current_role,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        is_update: bool = False,
    ) -> FormValidationResult:
        require_permission(current_role, Permission.EDIT_STUDENT if is_update else Permission.CREATE_STUDENT)
        context = ValidationContext(now=self._clock(), policy=self._policy, registry=self._registry)
        result = validate_submission(
            EntityKind.STUDENT, payload, snapshot, is_update=is_update, context=context, factory=self._factory
        )
        if not result:
            logger.info(f"Student submission rejected on fields: {', '.join(result.errors)}")
        return result

    def deletion_check(self, *, current_role, student_id, snapshot: Snapshot) -> DeletionCheckResult:
        require_permission(current_role, Permission.DELETE_STUDENT)
        result = can_delete_student(student_id, snapshot.enrollments, snapshot.attendance)
        if not result:
            logger.info(f"Deletion of student {student_id} blocked: {', '.join(result.related_entities)}")
        return result
