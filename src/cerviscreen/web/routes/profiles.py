from __future__ import annotations

import uuid

from flask import Blueprint, current_app, jsonify

from cerviscreen.errors import BadRequest, NotFoundError
from cerviscreen.model.profile import Patient, Physician
from cerviscreen.web.params import json_body, required_field
from cerviscreen.web.serialize import patient_json, physician_json

profiles_bp = Blueprint("profiles", __name__)

_PATIENT_FIELDS = (
    "full_name",
    "email",
    "phone",
    "date_of_birth",
    "address",
    "emergency_contact",
    "emergency_phone",
)


@profiles_bp.route("/physicians")
def list_physicians():
    """List physicians a patient can choose from."""
    physician_repo = current_app.extensions["physician_repo"]
    return jsonify([physician_json(p) for p in physician_repo.list_all()])


@profiles_bp.route("/physicians", methods=["POST"])
def create_physician():
    """Register a physician profile."""
    data = json_body()
    try:
        years = int(data.get("years_of_experience", 0) or 0)
    except (TypeError, ValueError):
        raise BadRequest("years_of_experience must be a number") from None
    physician = Physician(
        id=data.get("id") or uuid.uuid4().hex[:12],
        full_name=required_field(data, "full_name"),
        specialization=data.get("specialization", ""),
        license_number=data.get("license_number", ""),
        phone=data.get("phone", ""),
        years_of_experience=years,
    )
    current_app.extensions["physician_repo"].upsert(physician)
    return jsonify(physician_json(physician)), 201


@profiles_bp.route("/physicians/<physician_id>")
def get_physician(physician_id: str):
    physician = current_app.extensions["physician_repo"].get(physician_id)
    if physician is None:
        raise NotFoundError(f"Physician not found: {physician_id}")
    return jsonify(physician_json(physician))


@profiles_bp.route("/patients/<patient_id>")
def get_patient(patient_id: str):
    patient = current_app.extensions["patient_repo"].get(patient_id)
    if patient is None:
        raise NotFoundError(f"Patient not found: {patient_id}")
    return jsonify(patient_json(patient))


@profiles_bp.route("/patients/<patient_id>", methods=["PUT"])
def update_patient(patient_id: str):
    """Create or update a patient's profile details."""
    patient_repo = current_app.extensions["patient_repo"]
    data = json_body()
    existing = patient_repo.get(patient_id) or Patient(id=patient_id)
    values = {name: str(data.get(name, getattr(existing, name))) for name in _PATIENT_FIELDS}
    patient = Patient(
        id=patient_id,
        assigned_physician_id=existing.assigned_physician_id,
        **values,
    )
    patient_repo.upsert(patient)
    return jsonify(patient_json(patient))


@profiles_bp.route("/patients/<patient_id>/physician", methods=["PUT"])
def select_physician(patient_id: str):
    """Assign the physician who will review the patient's screenings."""
    data = json_body()
    intake = current_app.extensions["intake"]
    physician = intake.select_physician(patient_id, required_field(data, "physician_id"))
    return jsonify({"patient_id": patient_id, "physician": physician_json(physician)})
