"""Portal workflows built on the store: consent, intake, review, notifications."""

from cerviscreen.workflow.consent import ConsentFlow, ConsentStep, capture_consent
from cerviscreen.workflow.intake import IntakeDraft, PatientIntake
from cerviscreen.workflow.notifications import (
    Inbox,
    OpenedNotification,
    decision_message,
    decision_title,
)
from cerviscreen.workflow.review import ClinicalReview, DecisionOutcome, ReviewStats

__all__ = [
    "ConsentFlow",
    "ConsentStep",
    "capture_consent",
    "IntakeDraft",
    "PatientIntake",
    "Inbox",
    "OpenedNotification",
    "decision_message",
    "decision_title",
    "ClinicalReview",
    "DecisionOutcome",
    "ReviewStats",
]
