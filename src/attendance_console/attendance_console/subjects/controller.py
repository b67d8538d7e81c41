from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body_snapshot, current_role, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subjects/validate", methods=["POST"], endpoint="validate_subject")
    def validate_subject():
        body = json_body()
        result = container.subject_service.validate(
            current_role=current_role(),
            payload=body.get("data") or {},
            snapshot=body_snapshot(body),
            is_update=bool(body.get("is_update", False)),
        )
        return jsonify(result.to_dict())

    @app.route("/api/subjects/<subject_id>/deletion-check", methods=["POST"], endpoint="subject_deletion_check")
    def subject_deletion_check(subject_id: str):
        body = json_body()
        result = container.subject_service.deletion_check(
            current_role=current_role(),
            subject_id=subject_id,
            snapshot=body_snapshot(body),
        )
        return jsonify(result.to_dict())

    @app.route("/api/subjects/capacity-check", methods=["POST"], endpoint="subject_capacity_check")
    def subject_capacity_check():
        body = json_body()
        result = container.subject_service.capacity_check(
            current_role=current_role(),
            subject=body.get("subject") or {},
            additional=body.get("additional", 1),
            snapshot=body_snapshot(body),
        )
        return jsonify(result.to_dict())
