from __future__ import annotations

import random

import pytest

from cerviscreen.imaging.quality import (
    MAX_SCORE,
    MIN_SCORE,
    QualityAssessor,
    QualityBand,
    feedback_for,
    is_low_quality,
    needs_repeat_capture,
    quality_band,
)


class TestFeedback:
    @pytest.mark.parametrize(
        ("score", "prefix"),
        [(99, "Excellent"), (85, "Excellent"), (84, "Good"), (75, "Good"), (74, "Fair"), (70, "Fair")],
    )
    def test_feedback_thresholds(self, score: int, prefix: str) -> None:
        assert feedback_for(score).startswith(prefix)

    def test_low_quality_below_75(self) -> None:
        assert is_low_quality(74)
        assert not is_low_quality(75)
        assert not is_low_quality(None)


class TestBands:
    @pytest.mark.parametrize(
        ("score", "band"),
        [
            (80, QualityBand.GREEN),
            (79, QualityBand.YELLOW),
            (60, QualityBand.YELLOW),
            (59, QualityBand.RED),
            (None, QualityBand.GRAY),
            (0, QualityBand.GRAY),
        ],
    )
    def test_quality_band(self, score, band) -> None:
        assert quality_band(score) is band

    def test_repeat_capture_below_70(self) -> None:
        assert needs_repeat_capture(69)
        assert not needs_repeat_capture(70)
        assert not needs_repeat_capture(None)


class TestQualityAssessor:
    def test_scores_stay_in_range(self) -> None:
        assessor = QualityAssessor(rng=random.Random(1234))
        scores = [assessor.assess(b"\x89PNG").score for _ in range(200)]
        assert min(scores) >= MIN_SCORE
        assert max(scores) <= MAX_SCORE

    def test_feedback_matches_score(self, fixed_random) -> None:
        assessment = QualityAssessor(rng=fixed_random(72)).assess(b"data")
        assert assessment.score == 72
        assert assessment.feedback == "Fair quality - May need repeat capture"
        assert assessment.low_quality
