"""Request parsing shared by the API blueprints."""

from __future__ import annotations

from typing import Any

from flask import request

from cerviscreen.errors import BadRequest


def json_body() -> dict[str, Any]:
    """The request's JSON object, or an empty dict when there is none."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def required_field(data: dict[str, Any], name: str) -> Any:
    value = data.get(name)
    if value is None or value == "":
        raise BadRequest(f"{name} is required")
    return value


def patient_id_param() -> str:
    """Patient id from the query string or the JSON body."""
    patient_id = request.args.get("patient_id") or json_body().get("patient_id")
    if not patient_id:
        raise BadRequest("patient_id is required")
    return patient_id


def string_field(data: dict[str, Any], name: str, default: str | None = None) -> str | None:
    """An optional text field; anything other than a string is a bad request."""
    value = data.get(name)
    if value is None:
        return default
    if not isinstance(value, str):
        raise BadRequest(f"{name} must be a string")
    return value
