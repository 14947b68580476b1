from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from ..core.exceptions import ConflictError, DomainError, ValidationError


def ok(data: Any = None, *, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return jsonify(body), status


def fail(e: DomainError):
    """Map a domain error to the JSON envelope and its HTTP status."""

    body: dict[str, Any] = {"success": False, "error": e.error, "message": str(e)}
    if isinstance(e, ValidationError) and e.errors:
        body["errors"] = e.errors
    if isinstance(e, ConflictError) and e.field:
        body["field"] = e.field
        if e.field == "email":
            body["error"] = "Email already registered"
        elif e.field == "mobileNumber":
            body["error"] = "Mobile number already registered"
    return jsonify(body), e.status_code


def unexpected(message: str):
    return jsonify({"success": False, "error": "Internal server error", "message": message}), 500


def json_body() -> dict:
    """JSON object body, falling back to form fields for plain HTML posts."""

    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()
