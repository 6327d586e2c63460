"""Physician review of screening submissions."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from cerviscreen.errors import AccessDenied, InvalidDecision, NotFoundError
from cerviscreen.model.decision import ClinicalDecision, DecisionType, Urgency
from cerviscreen.model.notification import Notification
from cerviscreen.model.submission import Submission, SubmissionStatus
from cerviscreen.store.base import TableStore
from cerviscreen.store.repositories import (
    DecisionRepository,
    NotificationRepository,
    PhysicianRepository,
    SubmissionRepository,
)
from cerviscreen.workflow.notifications import build_decision_notification

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass(frozen=True)
class ReviewStats:
    total_submissions: int
    pending_review: int
    high_priority: int
    low_quality_images: int


@dataclass(frozen=True)
class DecisionOutcome:
    decision: ClinicalDecision
    notification: Notification


class ClinicalReview:
    """A physician's queue of submissions and the decisions made on them."""

    def __init__(
        self,
        store: TableStore,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _generate_id,
    ) -> None:
        self._submissions = SubmissionRepository(store)
        self._decisions = DecisionRepository(store)
        self._notifications = NotificationRepository(store)
        self._physicians = PhysicianRepository(store)
        self._clock = clock
        self._id_factory = id_factory

    def queue_for(
        self, physician_id: str, status: SubmissionStatus | None = None
    ) -> tuple[Submission, ...]:
        """Submissions assigned to a physician, newest first."""
        return self._submissions.list_by_physician(physician_id, status)

    def stats(self, physician_id: str) -> ReviewStats:
        submissions = self.queue_for(physician_id)
        return ReviewStats(
            total_submissions=len(submissions),
            pending_review=sum(
                1 for s in submissions if s.status is SubmissionStatus.PENDING_REVIEW
            ),
            high_priority=sum(1 for s in submissions if s.triage_flags),
            low_quality_images=sum(
                1 for s in submissions for image in s.images if image.low_quality
            ),
        )

    def submission(self, physician_id: str, submission_id: str) -> Submission:
        """Fetch a submission, checking it is assigned to the physician."""
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise NotFoundError(f"Submission not found: {submission_id}")
        if submission.physician_id != physician_id:
            raise AccessDenied("Submission is assigned to another physician")
        return submission

    def decisions(self, submission_id: str) -> tuple[ClinicalDecision, ...]:
        return self._decisions.list_by_submission(submission_id)

    def decide(
        self,
        submission_id: str,
        physician_id: str,
        decision: str,
        notes: str,
        urgency: str | None = None,
    ) -> DecisionOutcome:
        """Record a clinical decision, close the submission and notify the patient.

        ``urgency`` only applies to referrals and defaults to routine there;
        for any other decision it is dropped.
        """
        if not decision or not isinstance(decision, str):
            raise InvalidDecision("Please select a clinical decision")
        try:
            decision_type = DecisionType(decision)
        except ValueError:
            raise InvalidDecision(f"Unknown clinical decision: {decision}") from None
        if not isinstance(notes, str) or not notes.strip():
            raise InvalidDecision("Please add clinical notes")

        level: Urgency | None = None
        if decision_type.is_referral:
            try:
                level = Urgency(urgency) if urgency else Urgency.ROUTINE
            except (TypeError, ValueError):
                raise InvalidDecision(f"Unknown urgency: {urgency}") from None

        submission = self.submission(physician_id, submission_id)
        physician = self._physicians.get(physician_id)
        physician_name = physician.full_name if physician else ""

        now = self._clock().isoformat()
        record = ClinicalDecision(
            id=self._id_factory(),
            submission_id=submission.id,
            physician_id=physician_id,
            decision_type=decision_type,
            notes=notes.strip(),
            urgency=level,
            created_at=now,
        )
        self._decisions.create(record)
        self._submissions.mark_reviewed(submission.id, now)

        notification = build_decision_notification(
            self._id_factory(), record, submission.patient_id, physician_name
        )
        self._notifications.create(notification)

        logger.info(
            "Decision %s (%s) recorded on submission %s by physician %s",
            record.id,
            decision_type,
            submission.id,
            physician_id,
        )
        return DecisionOutcome(decision=record, notification=notification)
