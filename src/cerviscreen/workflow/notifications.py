"""Patient notifications for reviewed screenings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cerviscreen.errors import AccessDenied, NotFoundError
from cerviscreen.model.decision import ClinicalDecision, DecisionType, Urgency
from cerviscreen.model.notification import Notification, NotificationType
from cerviscreen.model.profile import Physician
from cerviscreen.model.submission import Submission
from cerviscreen.store.base import TableStore
from cerviscreen.store.repositories import (
    NotificationRepository,
    PhysicianRepository,
    SubmissionRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Screening Results Available"
DEFAULT_RECOMMENDATION = "Please review your results and contact us if you have questions."

_TITLES: dict[DecisionType, str] = {
    DecisionType.REASSURE: "Normal Results - No Action Needed",
    DecisionType.REPEAT: "Repeat Screening Recommended",
    DecisionType.HPV_TEST: "HPV Test Recommended",
    DecisionType.REFER_ROUTINE: "Routine Referral Required",
    DecisionType.REFER_URGENT: "Urgent Referral Required",
}

_RECOMMENDATIONS: dict[DecisionType, str] = {
    DecisionType.REASSURE: (
        "Good news! Your screening results are normal. "
        "Continue with routine screening as recommended."
    ),
    DecisionType.REPEAT: (
        "We recommend repeating your screening. Please schedule a follow-up appointment."
    ),
    DecisionType.HPV_TEST: (
        "An HPV test is recommended as a follow-up. Please contact us to arrange this."
    ),
    DecisionType.REFER_ROUTINE: (
        "A referral to a specialist has been arranged for further evaluation. "
        "You will be contacted with appointment details."
    ),
    DecisionType.REFER_URGENT: (
        "URGENT: A specialist referral has been made. "
        "You will be contacted within 48 hours with appointment details."
    ),
}


def decision_title(decision_type: DecisionType | str) -> str:
    """Notification title for a decision; unknown decisions get a generic title."""
    return _TITLES.get(decision_type, DEFAULT_TITLE)


def decision_message(decision_type: DecisionType | str, physician_name: str, notes: str) -> str:
    """Build the notification body sent to the patient."""
    message = f"Your cervical screening has been reviewed by Dr. {physician_name}.\n\n"
    message += _RECOMMENDATIONS.get(decision_type, DEFAULT_RECOMMENDATION)
    if notes:
        message += f"\n\nPhysician Notes:\n{notes}"
    return message


def notification_type_for(urgency: Urgency | None) -> NotificationType:
    if urgency is Urgency.URGENT:
        return NotificationType.URGENT
    return NotificationType.CLINICAL_DECISION


def build_decision_notification(
    notification_id: str,
    decision: ClinicalDecision,
    patient_id: str,
    physician_name: str,
) -> Notification:
    """Turn a recorded decision into the notification for its patient."""
    return Notification(
        id=notification_id,
        patient_id=patient_id,
        title=decision_title(decision.decision_type),
        message=decision_message(decision.decision_type, physician_name, decision.notes),
        notification_type=notification_type_for(decision.urgency),
        physician_id=decision.physician_id,
        submission_id=decision.submission_id,
        created_at=decision.created_at,
    )


@dataclass(frozen=True)
class OpenedNotification:
    """A notification together with the records it refers to."""

    notification: Notification
    physician: Physician | None
    submission: Submission | None


class Inbox:
    """A patient's view of their notifications."""

    def __init__(self, store: TableStore) -> None:
        self._notifications = NotificationRepository(store)
        self._physicians = PhysicianRepository(store)
        self._submissions = SubmissionRepository(store)

    def list_notifications(self, patient_id: str) -> tuple[Notification, ...]:
        """Newest first."""
        return self._notifications.list_for_patient(patient_id)

    def unread_count(self, patient_id: str) -> int:
        return self._notifications.count_unread(patient_id)

    def open(self, patient_id: str, notification_id: str) -> OpenedNotification:
        """Return a notification with its physician and submission, marking it read."""
        notification = self._owned(patient_id, notification_id)
        if not notification.is_read:
            self._notifications.mark_read(notification_id)
            notification = self._notifications.get(notification_id) or notification

        physician = None
        if notification.physician_id:
            physician = self._physicians.get(notification.physician_id)
        submission = None
        if notification.submission_id:
            submission = self._submissions.get(notification.submission_id)
        return OpenedNotification(notification, physician, submission)

    def mark_read(self, patient_id: str, notification_id: str) -> None:
        self._owned(patient_id, notification_id)
        self._notifications.mark_read(notification_id)

    def mark_all_read(self, patient_id: str) -> int:
        changed = self._notifications.mark_all_read(patient_id)
        logger.info("Marked %d notifications read for patient %s", changed, patient_id)
        return changed

    def _owned(self, patient_id: str, notification_id: str) -> Notification:
        notification = self._notifications.get(notification_id)
        if notification is None:
            raise NotFoundError(f"Notification not found: {notification_id}")
        if notification.patient_id != patient_id:
            raise AccessDenied("Notification belongs to another patient")
        return notification
