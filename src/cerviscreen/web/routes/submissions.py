from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, current_app, jsonify, request

from cerviscreen.errors import BadRequest, NotFoundError
from cerviscreen.model.submission import SubmissionStatus
from cerviscreen.store.repositories import SubmissionRepository
from cerviscreen.web.params import json_body, required_field, string_field
from cerviscreen.web.serialize import decision_json, notification_json, submission_json

submissions_bp = Blueprint("submissions", __name__)


@submissions_bp.route("/patients/<patient_id>/submissions", methods=["POST"])
def submit_screening(patient_id: str):
    """Send the patient's completed draft for physician review."""
    submission = current_app.extensions["intake"].submit(patient_id)
    return jsonify(submission_json(submission)), 201


@submissions_bp.route("/patients/<patient_id>/submissions")
def patient_submissions(patient_id: str):
    repo = SubmissionRepository(current_app.extensions["store"])
    return jsonify([submission_json(s) for s in repo.list_by_patient(patient_id)])


@submissions_bp.route("/physicians/<physician_id>/submissions")
def review_queue(physician_id: str):
    """List a physician's submissions, newest first, optionally by ``status``."""
    status = request.args.get("status")
    try:
        status_filter = SubmissionStatus(status) if status else None
    except ValueError:
        raise BadRequest(f"Unknown status: {status}") from None
    review = current_app.extensions["review"]
    return jsonify([submission_json(s) for s in review.queue_for(physician_id, status_filter)])


@submissions_bp.route("/physicians/<physician_id>/stats")
def review_stats(physician_id: str):
    """Return the counts shown on the physician dashboard."""
    stats = current_app.extensions["review"].stats(physician_id)
    return jsonify(asdict(stats))


@submissions_bp.route("/submissions/<submission_id>")
def submission_detail(submission_id: str):
    """Return a submission with image previews and its decisions.

    With ``physician_id`` in the query string, the submission must be
    assigned to that physician.
    """
    review = current_app.extensions["review"]
    physician_id = request.args.get("physician_id")
    if physician_id:
        submission = review.submission(physician_id, submission_id)
    else:
        submission = SubmissionRepository(current_app.extensions["store"]).get(submission_id)
        if submission is None:
            raise NotFoundError(f"Submission not found: {submission_id}")

    data = submission_json(submission, include_previews=True)
    data["decisions"] = [decision_json(d) for d in review.decisions(submission_id)]
    return jsonify(data)


@submissions_bp.route("/submissions/<submission_id>/decision", methods=["POST"])
def make_decision(submission_id: str):
    """Record a clinical decision and notify the patient."""
    data = json_body()
    outcome = current_app.extensions["review"].decide(
        submission_id,
        required_field(data, "physician_id"),
        string_field(data, "decision", ""),
        string_field(data, "notes", ""),
        string_field(data, "urgency"),
    )
    return jsonify({
        "decision": decision_json(outcome.decision),
        "notification": notification_json(outcome.notification),
    }), 201
