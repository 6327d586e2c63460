from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from cerviscreen.errors import InvalidAnswer, QuestionnaireFinished
from cerviscreen.web.params import json_body
from cerviscreen.web.serialize import answer_json, prompt_json

questionnaire_bp = Blueprint("questionnaire", __name__)


def _state(patient_id: str):
    intake = current_app.extensions["intake"]
    prompt = intake.current_question(patient_id)
    answers = intake.questionnaire_answers(patient_id)
    return jsonify({
        "patient_id": patient_id,
        "complete": prompt is None,
        "question": prompt_json(prompt),
        "answers": [answer_json(a) for a in answers] if answers is not None else None,
    })


@questionnaire_bp.route("/patients/<patient_id>/questionnaire", methods=["POST"])
def start_questionnaire(patient_id: str):
    """Start (or restart) the patient's questionnaire."""
    current_app.extensions["intake"].start_questionnaire(patient_id)
    return _state(patient_id), 201


@questionnaire_bp.route("/patients/<patient_id>/questionnaire")
def questionnaire_status(patient_id: str):
    """Return the question awaiting an answer, or the answers once complete."""
    return _state(patient_id)


@questionnaire_bp.route("/patients/<patient_id>/questionnaire/answer", methods=["POST"])
def answer_question(patient_id: str):
    """Answer the current question with ``{"value": ...}``."""
    intake = current_app.extensions["intake"]
    prompt = intake.current_question(patient_id)
    if prompt is None:
        raise QuestionnaireFinished("The questionnaire is already complete")

    value = json_body().get("value")
    if not prompt.question.accepts(value):
        raise InvalidAnswer(
            f"Answer does not match the options for question {prompt.question.id}"
        )
    intake.answer(patient_id, value)
    return _state(patient_id)


@questionnaire_bp.route("/patients/<patient_id>/questionnaire/skip", methods=["POST"])
def skip_question(patient_id: str):
    """Leave the current optional question unanswered."""
    current_app.extensions["intake"].skip(patient_id)
    return _state(patient_id)


@questionnaire_bp.route("/patients/<patient_id>/questionnaire", methods=["DELETE"])
def abandon_questionnaire(patient_id: str):
    current_app.extensions["intake"].abandon_questionnaire(patient_id)
    return "", 204
