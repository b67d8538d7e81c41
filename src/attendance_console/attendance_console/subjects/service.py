from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping

from ..common.datetime_utils import now_local
from ..core.enums import EntityKind
from ..core.exceptions import ValidationError
from ..users.permissions import Permission, require_permission
from ..validation.business import enrolled_count_for, validate_enrollment_capacity
from ..validation.deletion import can_delete_subject
from ..validation.factory import EntityValidatorFactory, validate_submission
from ..validation.policy import DEFAULT_POLICY, ValidationPolicy
from ..validation.registry import DEFAULT_REGISTRY, ValidationRegistry
from ..validation.results import DeletionCheckResult, FormValidationResult, ValidationResult
from ..validation.snapshot import Snapshot
from ..validation.strategies.base import ValidationContext
from .model import SubjectData

logger = logging.getLogger(__name__)


class SubjectService:
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
        require_permission(current_role, Permission.EDIT_SUBJECT if is_update else Permission.CREATE_SUBJECT)
        context = ValidationContext(now=self._clock(), policy=self._policy, registry=self._registry)
        result = validate_submission(
            EntityKind.SUBJECT, payload, snapshot, is_update=is_update, context=context, factory=self._factory
        )
        if not result:
            logger.info(f"Subject submission rejected on fields: {', '.join(result.errors)}")
        return result

    def deletion_check(self, *, current_role, subject_id, snapshot: Snapshot) -> DeletionCheckResult:
        require_permission(current_role, Permission.DELETE_SUBJECT)
        result = can_delete_subject(subject_id, snapshot.enrollments, snapshot.attendance)
        if not result:
            logger.info(f"Deletion of subject {subject_id} blocked: {', '.join(result.related_entities)}")
        return result

    def capacity_check(
        self,
        *,
        current_role,
        subject: Mapping[str, Any],
        additional: Any = 1,
        snapshot: Snapshot,
    ) -> ValidationResult:
        """Would ``additional`` more enrollments fit? Headcount comes from the snapshot when not given."""
        require_permission(current_role, Permission.MANAGE_ENROLLMENTS)
        if isinstance(additional, bool) or not isinstance(additional, int) or additional < 1:
            raise ValidationError("additional must be a positive whole number")
        record = SubjectData.from_dict(subject)
        headcount = enrolled_count_for(record, snapshot.enrollments)
        return validate_enrollment_capacity(replace(record, enrolled_count=headcount), additional)
