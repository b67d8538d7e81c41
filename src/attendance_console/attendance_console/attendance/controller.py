from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.http import body_snapshot, current_role, json_body
from ..container import Container
from ..core.exceptions import ValidationError
from ..spreadsheets.attendance_sheet import sheet_mime_type
from ..validation.fields import FileInfo

logger = logging.getLogger(__name__)


def _upload_info(upload: FileStorage, content: bytes) -> FileInfo:
    return FileInfo(
        filename=upload.filename or "",
        size=len(content),
        content_type=upload.mimetype or "",
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/validate", methods=["POST"], endpoint="validate_attendance")
    def validate_attendance():
        body = json_body()
        result = container.attendance_service.validate(
            current_role=current_role(),
            payload=body.get("data") or {},
            snapshot=body_snapshot(body),
            is_update=bool(body.get("is_update", False)),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/bulk/validate", methods=["POST"], endpoint="validate_bulk_attendance")
    def validate_bulk_attendance():
        body = json_body()
        result = container.attendance_service.validate_bulk(
            current_role=current_role(),
            student_ids=body.get("student_ids", body.get("studentIds")),
            day=body.get("date"),
            status=body.get("status"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/attendance/import/validate", methods=["POST"], endpoint="validate_attendance_import")
    def validate_attendance_import():
        upload = request.files.get("file")
        if upload is None:
            raise ValidationError("No file uploaded")
        content = upload.read()
        logger.info(f"Checking attendance upload {secure_filename(upload.filename or '')!r} ({len(content)} bytes)")
        report = container.attendance_service.validate_import(
            current_role=current_role(),
            upload=_upload_info(upload, content),
            content=content,
        )
        return jsonify(report.to_dict())

    @app.route("/api/attendance/export", methods=["POST"], endpoint="export_attendance")
    def export_attendance():
        body = json_body()
        sheet = container.attendance_service.export(
            current_role=current_role(),
            records=body.get("records") or [],
            fmt=str(body.get("format") or "xlsx"),
        )
        return send_file(
            io.BytesIO(sheet.content),
            mimetype=sheet_mime_type(sheet.fmt),
            as_attachment=True,
            download_name=sheet.filename,
        )

    @app.route("/api/attendance/template", methods=["GET"], endpoint="attendance_import_template")
    def attendance_import_template():
        sheet = container.attendance_service.import_template(current_role=current_role())
        return send_file(
            io.BytesIO(sheet.content),
            mimetype=sheet_mime_type(sheet.fmt),
            as_attachment=True,
            download_name=sheet.filename,
        )

    @app.route("/api/attendance/summary-report", methods=["POST"], endpoint="attendance_summary_report")
    def attendance_summary_report():
        body = json_body()
        sheet = container.attendance_service.summary_report(
            current_role=current_role(),
            daily=body.get("daily") or {},
            students=body.get("students") or [],
            report_date=body.get("report_date"),
        )
        return send_file(
            io.BytesIO(sheet.content),
            mimetype=sheet_mime_type(sheet.fmt),
            as_attachment=True,
            download_name=sheet.filename,
        )
