from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Hashable, Iterable, Sequence

from ..common.identifiers import canonical_id
from ..core.constants import DEFAULT_BULK_ATTENDANCE_LIMIT, DEFAULT_BULK_LIMIT
from ..core.enums import ErrorKind
from .fields import validate_attendance_date, validate_attendance_status
from .registry import DEFAULT_REGISTRY, ValidationRegistry
from .results import ValidationResult

OK = ValidationResult.ok
fail = ValidationResult.fail


def validate_bulk_operation_size(count: int, max_allowed: int = DEFAULT_BULK_LIMIT) -> ValidationResult:
    if count <= 0:
        return fail("No items selected for bulk operation", ErrorKind.BATCH_SIZE)
    if count > max_allowed:
        return fail(
            f"Bulk operation limit exceeded. Maximum {max_allowed} items allowed, got {count}",
            ErrorKind.BATCH_SIZE,
        )
    return OK()


def find_batch_duplicates(keys: Iterable[Hashable]) -> list[Hashable]:
    """Keys that occur more than once, in first-seen order."""
    counts = Counter(keys)
    return [key for key, n in counts.items() if n > 1]


def validate_bulk_attendance(
    student_ids: Sequence,
    day,
    status,
    *,
    max_allowed: int = DEFAULT_BULK_ATTENDANCE_LIMIT,
    today: date | None = None,
    registry: ValidationRegistry = DEFAULT_REGISTRY,
) -> ValidationResult:
    """Size limit, then duplicate ids, then the shared status and date.

    Ids are compared in canonical string form, so ``1`` and ``"1"`` collide.
    """
    size = validate_bulk_operation_size(len(student_ids), max_allowed)
    if not size:
        return size
    if find_batch_duplicates(canonical_id(sid) for sid in student_ids):
        return fail("Duplicate student IDs found in bulk operation", ErrorKind.BATCH_DUPLICATE)
    status_result = validate_attendance_status(status)
    if not status_result:
        return status_result
    return validate_attendance_date(day, today=today, registry=registry)
