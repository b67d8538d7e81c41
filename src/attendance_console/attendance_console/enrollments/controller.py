from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body_snapshot, current_role, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/enrollments/validate", methods=["POST"], endpoint="validate_enrollment")
    def validate_enrollment():
        body = json_body()
        result = container.enrollment_service.validate(
            current_role=current_role(),
            payload=body.get("data") or {},
            snapshot=body_snapshot(body),
        )
        return jsonify(result.to_dict())
