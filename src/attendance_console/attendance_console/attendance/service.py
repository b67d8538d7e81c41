from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from ..common.datetime_utils import now_local, try_parse_iso_date
from ..core.enums import EntityKind
from ..core.exceptions import ValidationError
from ..spreadsheets.attendance_sheet import (
    ImportedMark,
    build_import_template,
    export_attendance,
    export_attendance_summary,
    export_filename,
    read_attendance_sheet,
    rows_to_attendance,
    summary_filename,
    validate_attendance_rows,
)
from ..users.permissions import Permission, require_permission
from ..validation.bulk import validate_bulk_attendance
from ..validation.factory import EntityValidatorFactory, validate_submission
from ..validation.fields import FileInfo, validate_spreadsheet_file
from ..validation.policy import DEFAULT_POLICY, ValidationPolicy
from ..validation.registry import DEFAULT_REGISTRY, ValidationRegistry
from ..validation.results import FormValidationResult, SheetValidationResult, ValidationResult
from ..validation.snapshot import Snapshot
from ..validation.strategies.base import ValidationContext
from .model import AttendanceExportRow, DailySummary, StudentSummary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportReport:
    """Outcome of an import pre-flight. ``marks`` is only filled for a clean sheet."""

    result: SheetValidationResult
    marks: tuple[ImportedMark, ...] = field(default_factory=tuple)

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid

    def to_dict(self) -> dict:
        data = self.result.to_dict()
        data["rows"] = [
            {
                "student_number": m.student_number,
                "status": m.status,
                "time_slot": m.time_slot,
                "date": m.date,
                "timestamp": m.timestamp,
                "subject_code": m.subject_code,
                "notes": m.notes,
            }
            for m in self.marks
        ]
        return data


@dataclass(frozen=True)
class ExportedSheet:
    filename: str
    content: bytes
    fmt: str


class AttendanceService:
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
        require_permission(current_role, Permission.MARK_ATTENDANCE)
        context = ValidationContext(now=self._clock(), policy=self._policy, registry=self._registry)
        result = validate_submission(
            EntityKind.ATTENDANCE, payload, snapshot, is_update=is_update, context=context, factory=self._factory
        )
        if not result:
            logger.info(f"Attendance mark rejected on fields: {', '.join(result.errors)}")
        return result

    def validate_bulk(self, *, current_role, student_ids: Any, day: Any, status: Any) -> ValidationResult:
        require_permission(current_role, Permission.MARK_ATTENDANCE)
        if not isinstance(student_ids, (list, tuple)):
            raise ValidationError("student_ids must be a list")
        result = validate_bulk_attendance(
            student_ids,
            day,
            status,
            max_allowed=self._policy.bulk_attendance_limit,
            today=self._clock().date(),
            registry=self._registry,
        )
        if not result:
            logger.info(f"Bulk attendance for {len(student_ids)} student(s) rejected: {result.error}")
        return result

    def validate_import(self, *, current_role, upload: FileInfo, content: bytes) -> ImportReport:
        """File checks, then parsing, then row checks.

        An unreadable sheet raises ``SpreadsheetError``.
        """
        require_permission(current_role, Permission.MARK_ATTENDANCE)
        file_result = validate_spreadsheet_file(upload, registry=self._registry)
        if not file_result:
            logger.info(f"Rejected attendance upload {upload.filename!r}: {file_result.error}")
            return ImportReport(result=SheetValidationResult(errors=(file_result.error,)))

        rows = read_attendance_sheet(content, upload.filename)
        result = validate_attendance_rows(
            rows,
            max_rows=self._policy.import_row_limit,
            key_on_time_slot=self._policy.duplicate_attendance_by_time_slot,
            registry=self._registry,
        )
        if not result:
            logger.info(f"Attendance import {upload.filename!r} has {len(result.errors)} error(s)")
            return ImportReport(result=result)
        return ImportReport(result=result, marks=tuple(rows_to_attendance(rows, registry=self._registry)))

    def export(self, *, current_role, records: Sequence[Mapping[str, Any]], fmt: str = "xlsx") -> ExportedSheet:
        require_permission(current_role, Permission.EXPORT_RECORDS)
        if not isinstance(records, (list, tuple)):
            raise ValidationError("records must be a list")
        rows = [AttendanceExportRow.from_dict(r) for r in records]
        fmt = (fmt or "xlsx").lower()
        content = export_attendance(rows, fmt)
        return ExportedSheet(filename=export_filename(fmt, today=self._clock().date()), content=content, fmt=fmt)

    def summary_report(
        self,
        *,
        current_role,
        daily: Mapping[str, Any],
        students: Sequence[Mapping[str, Any]] = (),
        report_date=None,
    ) -> ExportedSheet:
        """Daily and per-student summary workbook; ``report_date`` defaults to today."""
        require_permission(current_role, Permission.EXPORT_RECORDS)
        if not isinstance(students, (list, tuple)):
            raise ValidationError("students must be a list")
        day = self._clock().date()
        if report_date:
            day = try_parse_iso_date(report_date)
            if day is None:
                raise ValidationError("report_date must be a YYYY-MM-DD date")
        content = export_attendance_summary(
            DailySummary.from_dict(daily),
            [StudentSummary.from_dict(s) for s in students],
            day,
        )
        return ExportedSheet(filename=summary_filename(day), content=content, fmt="xlsx")

    def import_template(self, *, current_role) -> ExportedSheet:
        require_permission(current_role, Permission.VIEW_ATTENDANCE)
        content = build_import_template(today=self._clock().date())
        return ExportedSheet(filename="attendance_import_template.xlsx", content=content, fmt="xlsx")
