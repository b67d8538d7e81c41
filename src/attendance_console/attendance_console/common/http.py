"""Request helpers shared by the JSON controllers."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request, session

from ..core.exceptions import AuthorizationError, SpreadsheetError, ValidationError
from ..validation.snapshot import Snapshot

logger = logging.getLogger(__name__)


def current_role():
    return session.get("role")


def json_body() -> Mapping[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return data


def body_snapshot(body: Mapping[str, Any]) -> Snapshot:
    return Snapshot.from_dict(body.get("snapshot") or {})


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AuthorizationError)
    def _forbidden(exc: AuthorizationError):
        logger.warning(f"Forbidden {request.method} {request.path}: {exc}")
        return jsonify({"error": str(exc)}), 403

    @app.errorhandler(ValidationError)
    def _bad_payload(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(SpreadsheetError)
    def _bad_sheet(exc: SpreadsheetError):
        return jsonify({"error": str(exc)}), 400
