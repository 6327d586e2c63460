from __future__ import annotations

from cerviscreen.model.consent import ConsentItems, ConsentRecord, EligibilityData
from cerviscreen.model.decision import ClinicalDecision, DecisionType, Urgency
from cerviscreen.model.notification import Notification, NotificationType
from cerviscreen.model.profile import Patient, Physician
from cerviscreen.model.question import (
    NOT_PROVIDED,
    AnswerRecord,
    AnswerValue,
    Question,
    QuestionKind,
)
from cerviscreen.model.submission import ScreeningImage, Submission, SubmissionStatus

__all__ = [
    # question
    "NOT_PROVIDED",
    "QuestionKind",
    "Question",
    "AnswerValue",
    "AnswerRecord",
    # consent
    "EligibilityData",
    "ConsentItems",
    "ConsentRecord",
    # profile
    "Patient",
    "Physician",
    # submission
    "SubmissionStatus",
    "ScreeningImage",
    "Submission",
    # decision
    "DecisionType",
    "Urgency",
    "ClinicalDecision",
    # notification
    "NotificationType",
    "Notification",
]
