"""Declarative skip rules evaluated by the sequencer."""

from __future__ import annotations

from dataclasses import dataclass

from cerviscreen.model.question import AnswerValue
from cerviscreen.questionnaire.catalog import PRIOR_SCREENING_ID


@dataclass(frozen=True)
class SkipRule:
    """Omit the next ``skip_count`` catalog entries when a question gets a given answer."""

    trigger_question_id: str
    trigger_value: str
    skip_count: int = 1

    def matches(self, question_id: str, value: AnswerValue) -> bool:
        return question_id == self.trigger_question_id and value == self.trigger_value


# Nobody asks about abnormal results from a screening that never happened.
DEFAULT_SKIP_RULES: tuple[SkipRule, ...] = (
    SkipRule(trigger_question_id=PRIOR_SCREENING_ID, trigger_value="No", skip_count=1),
)
