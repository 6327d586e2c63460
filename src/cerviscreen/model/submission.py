from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from cerviscreen.imaging.quality import is_low_quality
from cerviscreen.model.question import AnswerRecord

LOW_QUALITY_FLAG = "Low image quality detected"


class SubmissionStatus(StrEnum):
    PENDING_REVIEW = "pending_review"
    REVIEWED = "reviewed"


@dataclass(frozen=True)
class ScreeningImage:
    id: str
    file_name: str
    file_size: int
    content_type: str
    quality_score: int
    quality_feedback: str
    preview: str = ""  # data URL

    @property
    def low_quality(self) -> bool:
        return is_low_quality(self.quality_score)


@dataclass(frozen=True)
class Submission:
    id: str
    patient_id: str
    physician_id: str
    patient_name: str
    questionnaire_answers: tuple[AnswerRecord, ...] = ()
    images: tuple[ScreeningImage, ...] = ()
    status: SubmissionStatus = SubmissionStatus.PENDING_REVIEW
    submitted_at: str = ""
    reviewed_at: str = ""

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def primary_quality_score(self) -> int | None:
        """Quality score of the first image, shown on the review card."""
        if not self.images:
            return None
        return self.images[0].quality_score

    @property
    def triage_flags(self) -> tuple[str, ...]:
        if any(image.low_quality for image in self.images):
            return (LOW_QUALITY_FLAG,)
        return ()
