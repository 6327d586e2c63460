"""Simulated image quality assessment.

The score is a placeholder drawn at random; no image analysis happens here.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum

MIN_SCORE = 70
MAX_SCORE = 99

EXCELLENT_THRESHOLD = 85
GOOD_THRESHOLD = 75

# Physician-facing bands use their own cut-offs.
GREEN_THRESHOLD = 80
YELLOW_THRESHOLD = 60
REPEAT_CAPTURE_THRESHOLD = 70


class QualityBand(StrEnum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    GRAY = "gray"


@dataclass(frozen=True)
class QualityAssessment:
    score: int
    feedback: str

    @property
    def low_quality(self) -> bool:
        return is_low_quality(self.score)


def feedback_for(score: int) -> str:
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent quality - Clear and well-focused"
    if score >= GOOD_THRESHOLD:
        return "Good quality - Suitable for assessment"
    return "Fair quality - May need repeat capture"


def is_low_quality(score: int | None) -> bool:
    return score is not None and score < GOOD_THRESHOLD


def quality_band(score: int | None) -> QualityBand:
    """Colour band shown next to a score on the decision screen."""
    if not score:
        return QualityBand.GRAY
    if score >= GREEN_THRESHOLD:
        return QualityBand.GREEN
    if score >= YELLOW_THRESHOLD:
        return QualityBand.YELLOW
    return QualityBand.RED


def needs_repeat_capture(score: int | None) -> bool:
    return bool(score) and score < REPEAT_CAPTURE_THRESHOLD


class QualityAssessor:
    """Assigns a random score in [MIN_SCORE, MAX_SCORE] to each upload."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def assess(self, data: bytes) -> QualityAssessment:
        score = self._rng.randint(MIN_SCORE, MAX_SCORE)
        return QualityAssessment(score=score, feedback=feedback_for(score))
