from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import ErrorKind


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single check.

    ``error`` is the human-readable message shown next to the field; ``kind``
    tells callers which family of rule failed without parsing the text.
    """

    is_valid: bool
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return _OK

    @classmethod
    def fail(cls, error: str, kind: ErrorKind = ErrorKind.FORMAT) -> "ValidationResult":
        return cls(is_valid=False, error=error, kind=kind)

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict:
        data: dict = {"is_valid": self.is_valid}
        if self.error is not None:
            data["error"] = self.error
        if self.kind is not None:
            data["kind"] = self.kind.value
        return data


_OK = ValidationResult(is_valid=True)


@dataclass(frozen=True)
class FormValidationResult:
    """Per-field report produced by the composite validators.

    Every failing message for a field is kept in ``messages`` in the order the
    checks ran. ``errors`` collapses that to the last message per field, which
    is what the existing forms render.
    """

    messages: dict[str, tuple[str, ...]] = field(default_factory=dict)
    kinds: dict[str, ErrorKind] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.messages

    @property
    def errors(self) -> dict[str, str]:
        return {name: items[-1] for name, items in self.messages.items()}

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict:
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "messages": {name: list(items) for name, items in self.messages.items()},
        }


class FormErrors:
    """Mutable collector used while a composite validator runs."""

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}
        self._kinds: dict[str, ErrorKind] = {}

    def add(self, field_name: str, message: str, kind: ErrorKind = ErrorKind.FORMAT) -> None:
        self._messages.setdefault(field_name, []).append(message)
        self._kinds[field_name] = kind

    def check(self, field_name: str, result: ValidationResult) -> ValidationResult:
        if not result.is_valid:
            self.add(field_name, result.error or "Invalid value", result.kind or ErrorKind.FORMAT)
        return result

    def __contains__(self, field_name: str) -> bool:
        return field_name in self._messages

    def result(self) -> FormValidationResult:
        return FormValidationResult(
            messages={name: tuple(items) for name, items in self._messages.items()},
            kinds=dict(self._kinds),
        )


@dataclass(frozen=True)
class DeletionCheckResult:
    can_delete: bool
    reason: Optional[str] = None
    related_entities: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return self.can_delete

    def to_dict(self) -> dict:
        data: dict = {"can_delete": self.can_delete}
        if self.reason is not None:
            data["reason"] = self.reason
        if self.related_entities:
            data["related_entities"] = list(self.related_entities)
        return data


@dataclass(frozen=True)
class SheetValidationResult:
    """Row-level report for an uploaded attendance sheet."""

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}
