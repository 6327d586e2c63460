from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from cerviscreen.errors import BadRequest
from cerviscreen.web.serialize import image_json

images_bp = Blueprint("images", __name__)


@images_bp.route("/patients/<patient_id>/images")
def list_images(patient_id: str):
    """List the images attached to the patient's draft."""
    images = current_app.extensions["intake"].list_images(patient_id)
    return jsonify([image_json(i) for i in images])


@images_bp.route("/patients/<patient_id>/images", methods=["POST"])
def upload_images(patient_id: str):
    """Upload one or more images as multipart ``image`` fields."""
    files = request.files.getlist("image")
    if not files:
        raise BadRequest("image file is required")

    uploaded = current_app.extensions["intake"].upload_images(
        patient_id,
        [(f.filename or "image", f.mimetype or "", f.read()) for f in files],
    )
    return jsonify([image_json(i) for i in uploaded]), 201


@images_bp.route("/patients/<patient_id>/images/<image_id>", methods=["DELETE"])
def remove_image(patient_id: str, image_id: str):
    current_app.extensions["intake"].remove_image(patient_id, image_id)
    return "", 204
