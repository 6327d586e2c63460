"""Intake questionnaire: catalog, skip rules and the session sequencer."""

from cerviscreen.questionnaire.catalog import (
    PRIOR_SCREENING_ID,
    SCREENING_CATALOG,
    QuestionCatalog,
)
from cerviscreen.questionnaire.rules import DEFAULT_SKIP_RULES, SkipRule
from cerviscreen.questionnaire.sequencer import PresentedQuestion, Sequencer, SequencerState

__all__ = [
    "PRIOR_SCREENING_ID",
    "SCREENING_CATALOG",
    "QuestionCatalog",
    "DEFAULT_SKIP_RULES",
    "SkipRule",
    "PresentedQuestion",
    "Sequencer",
    "SequencerState",
]
