from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import body_snapshot, current_role, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users/<user_id>/deletion-check", methods=["POST"], endpoint="user_deletion_check")
    def user_deletion_check(user_id: str):
        body = json_body()
        result = container.user_service.deletion_check(
            current_role=current_role(),
            user_id=user_id,
            snapshot=body_snapshot(body),
        )
        return jsonify(result.to_dict())

    @app.route("/api/auth/validate-login", methods=["POST"], endpoint="validate_login")
    def validate_login():
        return jsonify(container.auth_service.validate_login(json_body()).to_dict())

    @app.route("/api/auth/validate-signup", methods=["POST"], endpoint="validate_signup")
    def validate_signup():
        return jsonify(container.auth_service.validate_signup(json_body()).to_dict())

    @app.route("/api/me/permissions", methods=["GET"], endpoint="my_permissions")
    def my_permissions():
        return jsonify(container.user_service.permissions_for(current_role()))
