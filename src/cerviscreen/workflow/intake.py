"""Patient-side screening intake: consent, physician, questionnaire, images."""

from __future__ import annotations

import base64
import logging
import threading
import uuid
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cerviscreen.errors import (
    ConsentNotGiven,
    NoActiveQuestionnaire,
    NotFoundError,
    QuestionnaireFinished,
    SubmissionIncomplete,
    UnsupportedImage,
)
from cerviscreen.imaging.quality import QualityAssessor
from cerviscreen.model.consent import ConsentItems, ConsentRecord, EligibilityData
from cerviscreen.model.profile import Physician
from cerviscreen.model.question import AnswerRecord
from cerviscreen.model.submission import ScreeningImage, Submission, SubmissionStatus
from cerviscreen.questionnaire.catalog import SCREENING_CATALOG, QuestionCatalog
from cerviscreen.questionnaire.rules import DEFAULT_SKIP_RULES, SkipRule
from cerviscreen.questionnaire.sequencer import PresentedQuestion, Sequencer
from cerviscreen.store.base import TableStore
from cerviscreen.store.repositories import (
    ConsentRepository,
    PatientRepository,
    PhysicianRepository,
    SubmissionRepository,
)
from cerviscreen.workflow.consent import capture_consent

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


@dataclass
class IntakeDraft:
    """Work in progress for one patient's next submission. Never persisted."""

    patient_id: str
    consented: bool = False
    sequencer: Sequencer | None = None
    answers: tuple[AnswerRecord, ...] | None = None
    images: list[ScreeningImage] = field(default_factory=list)

    @property
    def questionnaire_completed(self) -> bool:
        return self.answers is not None


class PatientIntake:
    """Collects everything a screening submission needs, one patient at a time.

    Drafts are keyed by patient and replaced, never accumulated, on submit.
    Every read-modify-write of a draft holds the intake lock so concurrent
    requests for one patient cannot interleave.
    """

    def __init__(
        self,
        store: TableStore,
        *,
        assessor: QualityAssessor | None = None,
        catalog: QuestionCatalog = SCREENING_CATALOG,
        skip_rules: Iterable[SkipRule] = DEFAULT_SKIP_RULES,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _generate_id,
    ) -> None:
        self._patients = PatientRepository(store)
        self._physicians = PhysicianRepository(store)
        self._consents = ConsentRepository(store)
        self._submissions = SubmissionRepository(store)
        self._assessor = assessor or QualityAssessor()
        self._catalog = catalog
        self._skip_rules = tuple(skip_rules)
        self._clock = clock
        self._id_factory = id_factory
        self._drafts: dict[str, IntakeDraft] = {}
        self._lock = threading.RLock()

    def draft(self, patient_id: str) -> IntakeDraft:
        with self._lock:
            if patient_id not in self._drafts:
                self._drafts[patient_id] = IntakeDraft(patient_id=patient_id)
            return self._drafts[patient_id]

    # --- consent and physician ------------------------------------------------

    def record_consent(
        self,
        patient_id: str,
        eligibility: EligibilityData,
        consent: ConsentItems,
    ) -> ConsentRecord:
        """Validate and store the patient's consent.

        Raises EligibilityNotMet or ConsentNotGiven without storing anything.
        """
        record = capture_consent(
            patient_id, eligibility, consent, clock=self._clock, id_factory=self._id_factory
        )
        self._consents.create(record)
        with self._lock:
            self.draft(patient_id).consented = True
        logger.info("Consent recorded for patient %s", patient_id)
        return record

    def has_consent(self, patient_id: str) -> bool:
        if self.draft(patient_id).consented:
            return True
        record = self._consents.latest_for_patient(patient_id)
        return record is not None and record.consent_given

    def select_physician(self, patient_id: str, physician_id: str) -> Physician:
        physician = self._physicians.get(physician_id)
        if physician is None:
            raise NotFoundError(f"Physician not found: {physician_id}")
        self._patients.assign_physician(patient_id, physician_id)
        logger.info("Patient %s assigned to physician %s", patient_id, physician_id)
        return physician

    # --- questionnaire --------------------------------------------------------

    def start_questionnaire(self, patient_id: str) -> PresentedQuestion:
        """Begin a fresh questionnaire, replacing any session in progress."""
        if not self.has_consent(patient_id):
            raise ConsentNotGiven(ConsentItems().missing)

        with self._lock:
            draft = self.draft(patient_id)
            draft.answers = None

            def on_complete(answers: list[AnswerRecord]) -> None:
                draft.answers = tuple(answers)
                draft.sequencer = None
                logger.info(
                    "Questionnaire completed for patient %s (%d answers)",
                    patient_id,
                    len(answers),
                )

            draft.sequencer = Sequencer(
                self._catalog,
                skip_rules=self._skip_rules,
                on_complete=on_complete,
                clock=self._clock,
            )
            prompt = draft.sequencer.current_prompt()
        assert prompt is not None
        return prompt

    def current_question(self, patient_id: str) -> PresentedQuestion | None:
        """The question awaiting an answer, or None once the questionnaire is done."""
        with self._lock:
            draft = self.draft(patient_id)
            if draft.sequencer is None:
                if draft.questionnaire_completed:
                    return None
                raise NoActiveQuestionnaire("No questionnaire in progress")
            return draft.sequencer.current_prompt()

    def answer(self, patient_id: str, value: Any) -> PresentedQuestion | None:
        """Answer the current question and return the next one, if any.

        Raises QuestionnaireFinished once every question has been resolved.
        """
        with self._lock:
            self._active_sequencer(patient_id).submit(value)
            return self.current_question(patient_id)

    def skip(self, patient_id: str) -> PresentedQuestion | None:
        with self._lock:
            self._active_sequencer(patient_id).skip()
            return self.current_question(patient_id)

    def abandon_questionnaire(self, patient_id: str) -> None:
        """Drop the session in progress; nothing answered so far is kept."""
        with self._lock:
            draft = self.draft(patient_id)
            draft.sequencer = None
            draft.answers = None

    def questionnaire_answers(self, patient_id: str) -> tuple[AnswerRecord, ...] | None:
        return self.draft(patient_id).answers

    def _active_sequencer(self, patient_id: str) -> Sequencer:
        draft = self.draft(patient_id)
        if draft.sequencer is None:
            if draft.questionnaire_completed:
                raise QuestionnaireFinished("The questionnaire is already complete")
            raise NoActiveQuestionnaire("No questionnaire in progress")
        return draft.sequencer

    # --- images ---------------------------------------------------------------

    def upload_image(
        self, patient_id: str, file_name: str, content_type: str, data: bytes
    ) -> ScreeningImage:
        """Score an uploaded image and attach it to the draft."""
        return self.upload_images(patient_id, [(file_name, content_type, data)])[0]

    def upload_images(
        self, patient_id: str, files: Sequence[tuple[str, str, bytes]]
    ) -> list[ScreeningImage]:
        """Score a batch of ``(file_name, content_type, data)`` uploads.

        The batch is all or nothing: if any file is not an image, none of
        them is attached.
        """
        for file_name, content_type, _ in files:
            if not content_type.startswith("image/"):
                raise UnsupportedImage(f"Not an image: {file_name} ({content_type})")

        with self._lock:
            draft = self.draft(patient_id)
            if not draft.questionnaire_completed:
                raise SubmissionIncomplete(
                    "Please complete the questionnaire before capturing images"
                )
            images = [self._score(name, content_type, data) for name, content_type, data in files]
            draft.images.extend(images)

        for image in images:
            if image.low_quality:
                logger.warning(
                    "Low quality image %s for patient %s (score %d)",
                    image.id,
                    patient_id,
                    image.quality_score,
                )
        return images

    def _score(self, file_name: str, content_type: str, data: bytes) -> ScreeningImage:
        assessment = self._assessor.assess(data)
        encoded = base64.b64encode(data).decode("ascii")
        return ScreeningImage(
            id=self._id_factory(),
            file_name=file_name,
            file_size=len(data),
            content_type=content_type,
            quality_score=assessment.score,
            quality_feedback=assessment.feedback,
            preview=f"data:{content_type};base64,{encoded}",
        )

    def remove_image(self, patient_id: str, image_id: str) -> None:
        with self._lock:
            draft = self.draft(patient_id)
            remaining = [image for image in draft.images if image.id != image_id]
            if len(remaining) == len(draft.images):
                raise NotFoundError(f"Image not found: {image_id}")
            draft.images = remaining

    def list_images(self, patient_id: str) -> tuple[ScreeningImage, ...]:
        return tuple(self.draft(patient_id).images)

    # --- submission -----------------------------------------------------------

    def submit(self, patient_id: str) -> Submission:
        """Persist the draft as a submission awaiting review and start over.

        Raises SubmissionIncomplete naming the first missing part.
        """
        with self._lock:
            draft = self.draft(patient_id)
            if not self.has_consent(patient_id):
                raise SubmissionIncomplete("Please complete the consent form before submitting")
            if draft.answers is None:
                raise SubmissionIncomplete("Please complete the questionnaire before submitting")
            if not draft.images:
                raise SubmissionIncomplete("Please upload at least one image before submitting")
            patient = self._patients.get(patient_id)
            if patient is None or not patient.assigned_physician_id:
                raise SubmissionIncomplete("Please select a physician first")

            submission = Submission(
                id=self._id_factory(),
                patient_id=patient_id,
                physician_id=patient.assigned_physician_id,
                patient_name=patient.full_name,
                questionnaire_answers=draft.answers,
                images=tuple(draft.images),
                status=SubmissionStatus.PENDING_REVIEW,
                submitted_at=self._clock().isoformat(),
            )
            self._submissions.create(submission)
            self._drafts[patient_id] = IntakeDraft(patient_id=patient_id, consented=True)

        logger.info(
            "Submission %s created for patient %s (%d images)",
            submission.id,
            patient_id,
            submission.image_count,
        )
        return submission
