"""JSON shapes returned by the API."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from cerviscreen.imaging.quality import needs_repeat_capture, quality_band
from cerviscreen.model.consent import ConsentRecord
from cerviscreen.model.decision import ClinicalDecision
from cerviscreen.model.notification import Notification
from cerviscreen.model.profile import Patient, Physician
from cerviscreen.model.question import AnswerRecord
from cerviscreen.model.submission import ScreeningImage, Submission
from cerviscreen.questionnaire.sequencer import PresentedQuestion


def physician_json(physician: Physician) -> dict[str, Any]:
    data = asdict(physician)
    data["display_name"] = physician.display_name
    return data


def patient_json(patient: Patient) -> dict[str, Any]:
    return asdict(patient)


def consent_json(record: ConsentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "patient_id": record.patient_id,
        "consent_given": record.consent_given,
        "eligibility": record.eligibility.to_dict(),
        "created_at": record.created_at,
    }


def prompt_json(prompt: PresentedQuestion | None) -> dict[str, Any] | None:
    if prompt is None:
        return None
    question = prompt.question
    return {
        "id": question.id,
        "prompt": question.prompt,
        "kind": question.kind.value,
        "options": list(question.choices),
        "required": question.required,
        "ordinal": prompt.ordinal,
        "total": prompt.total,
        "label": f"Question {prompt.ordinal} of {prompt.total}",
    }


def answer_json(record: AnswerRecord) -> dict[str, Any]:
    value = list(record.value) if isinstance(record.value, tuple) else record.value
    return {
        "question_id": record.question_id,
        "question": record.question_text,
        "answer": value,
        "answered_at": record.answered_at,
    }


def image_json(image: ScreeningImage, *, include_preview: bool = True) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": image.id,
        "file_name": image.file_name,
        "file_size": image.file_size,
        "content_type": image.content_type,
        "quality_score": image.quality_score,
        "quality_feedback": image.quality_feedback,
        "quality_band": quality_band(image.quality_score).value,
        "low_quality": image.low_quality,
    }
    if include_preview:
        data["preview"] = image.preview
    return data


def submission_json(submission: Submission, *, include_previews: bool = False) -> dict[str, Any]:
    primary = submission.primary_quality_score
    return {
        "id": submission.id,
        "patient_id": submission.patient_id,
        "physician_id": submission.physician_id,
        "patient_name": submission.patient_name,
        "status": submission.status.value,
        "submitted_at": submission.submitted_at,
        "reviewed_at": submission.reviewed_at,
        "image_count": submission.image_count,
        "primary_quality_score": primary,
        "quality_band": quality_band(primary).value,
        "needs_repeat_capture": needs_repeat_capture(primary),
        "triage_flags": list(submission.triage_flags),
        "questionnaire_answers": [answer_json(a) for a in submission.questionnaire_answers],
        "images": [image_json(i, include_preview=include_previews) for i in submission.images],
    }


def decision_json(decision: ClinicalDecision) -> dict[str, Any]:
    return {
        "id": decision.id,
        "submission_id": decision.submission_id,
        "physician_id": decision.physician_id,
        "decision_type": decision.decision_type.value,
        "notes": decision.notes,
        "urgency": decision.urgency.value if decision.urgency else None,
        "created_at": decision.created_at,
    }


def notification_json(notification: Notification) -> dict[str, Any]:
    data = asdict(notification)
    data["notification_type"] = notification.notification_type.value
    return data
