from __future__ import annotations

import logging
from typing import Any, Mapping

from ..validation.deletion import can_delete_user
from ..validation.forms import validate_login_form, validate_signup_form
from ..validation.registry import DEFAULT_REGISTRY, ValidationRegistry
from ..validation.results import DeletionCheckResult, FormValidationResult
from ..validation.snapshot import Snapshot
from .permissions import (
    Permission,
    get_role_display_name,
    get_role_permissions,
    require_permission,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Pre-flight checks for the login and sign-up forms. No credentials are verified here."""

    def __init__(self, *, registry: ValidationRegistry = DEFAULT_REGISTRY):
        self._registry = registry

    def validate_login(self, data: Mapping[str, Any]) -> FormValidationResult:
        return validate_login_form(data, registry=self._registry)

    def validate_signup(self, data: Mapping[str, Any]) -> FormValidationResult:
        result = validate_signup_form(data, registry=self._registry)
        if not result:
            logger.info(f"Sign-up form rejected on fields: {', '.join(result.errors)}")
        return result


class UserService:
    def deletion_check(self, *, current_role, user_id, snapshot: Snapshot) -> DeletionCheckResult:
        require_permission(current_role, Permission.MANAGE_USERS)
        result = can_delete_user(user_id, snapshot.authored_records)
        if not result:
            logger.info(f"Deletion of user {user_id} blocked: {result.reason}")
        return result

    @staticmethod
    def permissions_for(role) -> dict:
        return {
            "role": role,
            "display_name": get_role_display_name(role) if role else None,
            "permissions": [p.value for p in get_role_permissions(role)],
        }
