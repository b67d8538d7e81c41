from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body_snapshot, current_role, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students/validate", methods=["POST"], endpoint="validate_student")
    def validate_student():
        body = json_body()
        result = container.student_service.validate(
            current_role=current_role(),
            payload=body.get("data") or {},
            snapshot=body_snapshot(body),
            is_update=bool(body.get("is_update", False)),
        )
        return jsonify(result.to_dict())

    @app.route("/api/students/<student_id>/deletion-check", methods=["POST"], endpoint="student_deletion_check")
    def student_deletion_check(student_id: str):
        body = json_body()
        result = container.student_service.deletion_check(
            current_role=current_role(),
            student_id=student_id,
            snapshot=body_snapshot(body),
        )
        return jsonify(result.to_dict())
