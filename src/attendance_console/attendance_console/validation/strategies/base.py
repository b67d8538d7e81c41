from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from ...common.datetime_utils import now_local
from ...core.enums import EntityKind
from ..policy import DEFAULT_POLICY, ValidationPolicy
from ..registry import DEFAULT_REGISTRY, ValidationRegistry
from ..results import FormValidationResult
from ..snapshot import Snapshot


@dataclass(frozen=True)
class ValidationContext:
    """Clock, policy and registry shared by every check in one submission."""

    now: datetime = field(default_factory=now_local)
    policy: ValidationPolicy = DEFAULT_POLICY
    registry: ValidationRegistry = DEFAULT_REGISTRY


class EntityValidator(ABC):
    """Strategy Pattern: how one entity kind is validated on submit."""

    kind: EntityKind

    @abstractmethod
    def validate(
        self,
        payload: Mapping[str, Any],
        snapshot: Snapshot,
        *,
        is_update: bool,
        context: ValidationContext,
    ) -> FormValidationResult:
        raise NotImplementedError
