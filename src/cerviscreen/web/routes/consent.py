from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from cerviscreen.model.consent import (
    CONSENT_STATEMENTS,
    ELIGIBILITY_CRITERIA,
    ConsentItems,
    EligibilityData,
)
from cerviscreen.store.repositories import ConsentRepository
from cerviscreen.web.params import json_body
from cerviscreen.web.serialize import consent_json

consent_bp = Blueprint("consent", __name__)


@consent_bp.route("/consent/form")
def consent_form():
    """Return the eligibility criteria and consent statements to display."""
    return jsonify({
        "eligibility": ELIGIBILITY_CRITERIA,
        "consent": CONSENT_STATEMENTS,
    })


@consent_bp.route("/patients/<patient_id>/consent", methods=["POST"])
def give_consent(patient_id: str):
    """Record consent once every criterion and statement is confirmed."""
    data = json_body()
    intake = current_app.extensions["intake"]
    record = intake.record_consent(
        patient_id,
        EligibilityData.from_dict(data.get("eligibility") or {}),
        ConsentItems.from_dict(data.get("consent") or {}),
    )
    return jsonify(consent_json(record)), 201


@consent_bp.route("/patients/<patient_id>/consent")
def consent_status(patient_id: str):
    """Report whether the patient has consented, with the latest record."""
    intake = current_app.extensions["intake"]
    record = ConsentRepository(current_app.extensions["store"]).latest_for_patient(patient_id)
    return jsonify({
        "patient_id": patient_id,
        "consented": intake.has_consent(patient_id),
        "record": consent_json(record) if record else None,
    })
