from __future__ import annotations

import json
from dataclasses import asdict

from cerviscreen.model.consent import ConsentRecord, EligibilityData
from cerviscreen.model.decision import ClinicalDecision, DecisionType, Urgency
from cerviscreen.model.notification import Notification, NotificationType
from cerviscreen.model.profile import Patient, Physician
from cerviscreen.model.question import AnswerRecord
from cerviscreen.model.submission import ScreeningImage, Submission, SubmissionStatus
from cerviscreen.store.base import Row, TableStore


class PhysicianRepository:
    """Repository for Physician profiles."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def upsert(self, physician: Physician) -> None:
        """Insert a physician or update the existing profile."""
        self._store.upsert("physicians", asdict(physician))

    def get(self, physician_id: str) -> Physician | None:
        """Retrieve a physician by ID, or None if not found."""
        rows = self._store.select("physicians", filters={"id": physician_id}, limit=1)
        return _row_to_physician(rows[0]) if rows else None

    def list_all(self) -> tuple[Physician, ...]:
        """List physicians ordered by name."""
        rows = self._store.select("physicians", order_by="full_name")
        return tuple(_row_to_physician(r) for r in rows)


class PatientRepository:
    """Repository for Patient profiles."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def upsert(self, patient: Patient) -> None:
        """Insert a patient or update the existing profile."""
        self._store.upsert("patients", asdict(patient))

    def get(self, patient_id: str) -> Patient | None:
        """Retrieve a patient by ID, or None if not found."""
        rows = self._store.select("patients", filters={"id": patient_id}, limit=1)
        return _row_to_patient(rows[0]) if rows else None

    def assign_physician(self, patient_id: str, physician_id: str) -> None:
        """Set the patient's physician, creating a bare profile if needed."""
        self._store.upsert(
            "patients", {"id": patient_id, "assigned_physician_id": physician_id}
        )


class ConsentRepository:
    """Repository for ConsentRecord persistence."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def create(self, record: ConsentRecord) -> None:
        """Insert a new consent record."""
        self._store.insert(
            "consent_records",
            {
                "id": record.id,
                "patient_id": record.patient_id,
                "consent_given": record.consent_given,
                "eligibility_data": json.dumps(record.eligibility.to_dict()),
                "created_at": record.created_at,
            },
        )

    def latest_for_patient(self, patient_id: str) -> ConsentRecord | None:
        """Get the most recent consent record for a patient."""
        rows = self._store.select(
            "consent_records",
            filters={"patient_id": patient_id},
            order_by="created_at",
            descending=True,
            limit=1,
        )
        return _row_to_consent(rows[0]) if rows else None


class SubmissionRepository:
    """Repository for screening Submission persistence."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def create(self, submission: Submission) -> None:
        """Insert a new submission."""
        self._store.insert(
            "screening_submissions",
            {
                "id": submission.id,
                "patient_id": submission.patient_id,
                "physician_id": submission.physician_id,
                "patient_name": submission.patient_name,
                "questionnaire_answers": json.dumps(
                    [a.to_dict() for a in submission.questionnaire_answers]
                ),
                "image_count": submission.image_count,
                "images": json.dumps([_image_to_dict(i) for i in submission.images]),
                "status": submission.status.value,
                "submitted_at": submission.submitted_at,
                "reviewed_at": submission.reviewed_at,
            },
        )

    def get(self, submission_id: str) -> Submission | None:
        """Retrieve a submission by ID, or None if not found."""
        rows = self._store.select(
            "screening_submissions", filters={"id": submission_id}, limit=1
        )
        return _row_to_submission(rows[0]) if rows else None

    def list_by_physician(
        self, physician_id: str, status: SubmissionStatus | None = None
    ) -> tuple[Submission, ...]:
        """List a physician's submissions, newest first."""
        filters: Row = {"physician_id": physician_id}
        if status is not None:
            filters["status"] = status.value
        rows = self._store.select(
            "screening_submissions",
            filters=filters,
            order_by="submitted_at",
            descending=True,
        )
        return tuple(_row_to_submission(r) for r in rows)

    def list_by_patient(self, patient_id: str) -> tuple[Submission, ...]:
        """List a patient's submissions, newest first."""
        rows = self._store.select(
            "screening_submissions",
            filters={"patient_id": patient_id},
            order_by="submitted_at",
            descending=True,
        )
        return tuple(_row_to_submission(r) for r in rows)

    def mark_reviewed(self, submission_id: str, reviewed_at: str) -> None:
        """Set a submission's status to reviewed."""
        self._store.update(
            "screening_submissions",
            {"status": SubmissionStatus.REVIEWED.value, "reviewed_at": reviewed_at},
            filters={"id": submission_id},
        )


class DecisionRepository:
    """Repository for ClinicalDecision persistence."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def create(self, decision: ClinicalDecision) -> None:
        """Insert a new clinical decision."""
        self._store.insert(
            "clinical_decisions",
            {
                "id": decision.id,
                "submission_id": decision.submission_id,
                "physician_id": decision.physician_id,
                "decision_type": decision.decision_type.value,
                "notes": decision.notes,
                "urgency": decision.urgency.value if decision.urgency else None,
                "created_at": decision.created_at,
            },
        )

    def list_by_submission(self, submission_id: str) -> tuple[ClinicalDecision, ...]:
        """List all decisions recorded for a submission, newest first."""
        rows = self._store.select(
            "clinical_decisions",
            filters={"submission_id": submission_id},
            order_by="created_at",
            descending=True,
        )
        return tuple(_row_to_decision(r) for r in rows)


class NotificationRepository:
    """Repository for patient Notification persistence."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    def create(self, notification: Notification) -> None:
        """Insert a new notification."""
        self._store.insert(
            "notifications",
            {
                "id": notification.id,
                "patient_id": notification.patient_id,
                "physician_id": notification.physician_id,
                "submission_id": notification.submission_id,
                "title": notification.title,
                "message": notification.message,
                "notification_type": notification.notification_type.value,
                "is_read": notification.is_read,
                "created_at": notification.created_at,
            },
        )

    def get(self, notification_id: str) -> Notification | None:
        """Retrieve a notification by ID, or None if not found."""
        rows = self._store.select("notifications", filters={"id": notification_id}, limit=1)
        return _row_to_notification(rows[0]) if rows else None

    def list_for_patient(self, patient_id: str) -> tuple[Notification, ...]:
        """List a patient's notifications, newest first."""
        rows = self._store.select(
            "notifications",
            filters={"patient_id": patient_id},
            order_by="created_at",
            descending=True,
        )
        return tuple(_row_to_notification(r) for r in rows)

    def count_unread(self, patient_id: str) -> int:
        """Return the number of unread notifications for a patient."""
        return self._store.count(
            "notifications", filters={"patient_id": patient_id, "is_read": False}
        )

    def mark_read(self, notification_id: str) -> None:
        """Mark one notification as read."""
        self._store.update("notifications", {"is_read": True}, filters={"id": notification_id})

    def mark_all_read(self, patient_id: str) -> int:
        """Mark every unread notification of a patient as read."""
        return self._store.update(
            "notifications",
            {"is_read": True},
            filters={"patient_id": patient_id, "is_read": False},
        )


# ---------------------------------------------------------------------------
# Row -> model converters
# ---------------------------------------------------------------------------


def _loads(value, default):
    """Decode a JSON text column; the hosted backend may already return objects."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return json.loads(value)
    return value


def _image_to_dict(image: ScreeningImage) -> dict:
    return {
        "id": image.id,
        "fileName": image.file_name,
        "fileSize": image.file_size,
        "contentType": image.content_type,
        "qualityScore": image.quality_score,
        "qualityFeedback": image.quality_feedback,
        "preview": image.preview,
    }


def _dict_to_image(data: dict) -> ScreeningImage:
    return ScreeningImage(
        id=data.get("id", ""),
        file_name=data["fileName"],
        file_size=data.get("fileSize", 0),
        content_type=data.get("contentType", ""),
        quality_score=data["qualityScore"],
        quality_feedback=data.get("qualityFeedback", ""),
        preview=data.get("preview", ""),
    )


def _row_to_physician(row: Row) -> Physician:
    return Physician(
        id=row["id"],
        full_name=row["full_name"],
        specialization=row.get("specialization") or "",
        license_number=row.get("license_number") or "",
        phone=row.get("phone") or "",
        years_of_experience=row.get("years_of_experience") or 0,
    )


def _row_to_patient(row: Row) -> Patient:
    return Patient(
        id=row["id"],
        full_name=row.get("full_name") or "",
        email=row.get("email") or "",
        phone=row.get("phone") or "",
        date_of_birth=row.get("date_of_birth") or "",
        address=row.get("address") or "",
        emergency_contact=row.get("emergency_contact") or "",
        emergency_phone=row.get("emergency_phone") or "",
        assigned_physician_id=row.get("assigned_physician_id") or "",
    )


def _row_to_consent(row: Row) -> ConsentRecord:
    return ConsentRecord(
        id=row["id"],
        patient_id=row["patient_id"],
        consent_given=bool(row["consent_given"]),
        eligibility=EligibilityData.from_dict(_loads(row.get("eligibility_data"), {})),
        created_at=row.get("created_at") or "",
    )


def _row_to_submission(row: Row) -> Submission:
    answers = _loads(row.get("questionnaire_answers"), [])
    images = _loads(row.get("images"), [])
    return Submission(
        id=row["id"],
        patient_id=row["patient_id"],
        physician_id=row["physician_id"],
        patient_name=row.get("patient_name") or "",
        questionnaire_answers=tuple(AnswerRecord.from_dict(a) for a in answers),
        images=tuple(_dict_to_image(i) for i in images),
        status=SubmissionStatus(row["status"]),
        submitted_at=row.get("submitted_at") or "",
        reviewed_at=row.get("reviewed_at") or "",
    )


def _row_to_decision(row: Row) -> ClinicalDecision:
    return ClinicalDecision(
        id=row["id"],
        submission_id=row["submission_id"],
        physician_id=row["physician_id"],
        decision_type=DecisionType(row["decision_type"]),
        notes=row.get("notes") or "",
        urgency=Urgency(row["urgency"]) if row.get("urgency") else None,
        created_at=row.get("created_at") or "",
    )


def _row_to_notification(row: Row) -> Notification:
    return Notification(
        id=row["id"],
        patient_id=row["patient_id"],
        title=row["title"],
        message=row["message"],
        notification_type=NotificationType(row["notification_type"]),
        physician_id=row.get("physician_id") or "",
        submission_id=row.get("submission_id") or "",
        is_read=bool(row["is_read"]),
        created_at=row.get("created_at") or "",
    )
