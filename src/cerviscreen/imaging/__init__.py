from cerviscreen.imaging.quality import (
    QualityAssessment,
    QualityAssessor,
    QualityBand,
    feedback_for,
    is_low_quality,
    needs_repeat_capture,
    quality_band,
)

__all__ = [
    "QualityAssessment",
    "QualityAssessor",
    "QualityBand",
    "feedback_for",
    "is_low_quality",
    "needs_repeat_capture",
    "quality_band",
]
