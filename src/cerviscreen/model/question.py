"""Question model: questionnaire definitions and captured answers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union

NOT_PROVIDED = "Not provided"
YES_NO_OPTIONS: tuple[str, ...] = ("Yes", "No")

AnswerValue = Union[str, tuple[str, ...]]


class QuestionKind(StrEnum):
    """How a question is answered."""

    SINGLE_SELECT = "single_select"
    MULTI_SELECT = "multi_select"
    FREE_TEXT = "free_text"
    YES_NO = "yes_no"


@dataclass(frozen=True)
class Question:
    """A single entry of the intake questionnaire."""

    id: str
    prompt: str
    kind: QuestionKind
    options: tuple[str, ...] = ()
    required: bool = False

    @property
    def choices(self) -> tuple[str, ...]:
        """Selectable options; yes-no questions always offer Yes/No."""
        if self.kind is QuestionKind.YES_NO:
            return YES_NO_OPTIONS
        if self.kind in (QuestionKind.SINGLE_SELECT, QuestionKind.MULTI_SELECT):
            return self.options
        return ()

    def accepts(self, value: Any) -> bool:
        """Return True if ``value`` has the right shape for this question.

        Empty values are accepted here; whether they are allowed is decided
        by ``required`` when the answer is submitted.
        """
        if is_empty(value):
            return True
        if self.kind is QuestionKind.MULTI_SELECT:
            if isinstance(value, str) or not isinstance(value, (list, tuple)):
                return False
            return all(v in self.choices for v in value)
        if not isinstance(value, str):
            return False
        if self.kind is QuestionKind.FREE_TEXT:
            return True
        return value in self.choices


def is_empty(value: Any) -> bool:
    """None, blank strings and empty sequences count as no answer."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class AnswerRecord:
    """One captured response, or explicit non-response, to a question.

    ``question_text`` is copied at answer time so the record does not depend
    on the catalog afterwards.
    """

    question_id: str
    question_text: str
    value: AnswerValue
    answered_at: str  # ISO 8601

    @property
    def display_value(self) -> str:
        if isinstance(self.value, tuple):
            return ", ".join(self.value)
        return self.value

    def to_dict(self) -> dict[str, Any]:
        value = list(self.value) if isinstance(self.value, tuple) else self.value
        return {
            "questionId": self.question_id,
            "question": self.question_text,
            "answer": value,
            "timestamp": self.answered_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnswerRecord:
        value = data["answer"]
        if isinstance(value, list):
            value = tuple(value)
        return cls(
            question_id=data["questionId"],
            question_text=data["question"],
            value=value,
            answered_at=data.get("timestamp", ""),
        )
