from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from cerviscreen.web.params import patient_id_param
from cerviscreen.web.serialize import notification_json, physician_json, submission_json

notifications_bp = Blueprint("notifications", __name__)


@notifications_bp.route("/patients/<patient_id>/notifications")
def list_notifications(patient_id: str):
    inbox = current_app.extensions["inbox"]
    return jsonify([notification_json(n) for n in inbox.list_notifications(patient_id)])


@notifications_bp.route("/patients/<patient_id>/notifications/unread-count")
def unread_count(patient_id: str):
    inbox = current_app.extensions["inbox"]
    return jsonify({"patient_id": patient_id, "unread": inbox.unread_count(patient_id)})


@notifications_bp.route("/patients/<patient_id>/notifications/read-all", methods=["POST"])
def mark_all_read(patient_id: str):
    changed = current_app.extensions["inbox"].mark_all_read(patient_id)
    return jsonify({"patient_id": patient_id, "marked_read": changed})


@notifications_bp.route("/notifications/<notification_id>")
def open_notification(notification_id: str):
    """Show a notification with its physician and submission, marking it read."""
    opened = current_app.extensions["inbox"].open(patient_id_param(), notification_id)
    return jsonify({
        "notification": notification_json(opened.notification),
        "physician": physician_json(opened.physician) if opened.physician else None,
        "submission": submission_json(opened.submission) if opened.submission else None,
    })


@notifications_bp.route("/notifications/<notification_id>/read", methods=["POST"])
def mark_read(notification_id: str):
    current_app.extensions["inbox"].mark_read(patient_id_param(), notification_id)
    return "", 204
