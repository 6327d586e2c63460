"""Sequencer: drives one questionnaire session a question at a time."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from cerviscreen.errors import QuestionnaireFinished, RequiredAnswerMissing
from cerviscreen.model.question import (
    NOT_PROVIDED,
    AnswerRecord,
    AnswerValue,
    Question,
    is_empty,
)
from cerviscreen.questionnaire.catalog import SCREENING_CATALOG, QuestionCatalog
from cerviscreen.questionnaire.rules import DEFAULT_SKIP_RULES, SkipRule

CompletionCallback = Callable[[list[AnswerRecord]], None]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SequencerState:
    """Mutable position of one session.

    ``current_index`` points into the catalog; ``displayed_ordinal`` is the
    1-based number shown to the user and grows by one per resolved question
    even when catalog entries are skipped.
    """

    current_index: int = 0
    displayed_ordinal: int = 1
    effective_total: int = 0
    fired_rules: set[SkipRule] = field(default_factory=set)


@dataclass(frozen=True)
class PresentedQuestion:
    """A question as shown to the user: "Question {ordinal} of {total}"."""

    question: Question
    ordinal: int
    total: int


class Sequencer:
    """Walks a question catalog, applying skip rules and collecting answers.

    One instance belongs to one session. ``on_complete`` receives the ordered
    answer list exactly once, when the last question is resolved.
    """

    def __init__(
        self,
        catalog: QuestionCatalog = SCREENING_CATALOG,
        *,
        skip_rules: Iterable[SkipRule] = DEFAULT_SKIP_RULES,
        on_complete: CompletionCallback | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._catalog = catalog
        self._skip_rules = tuple(skip_rules)
        self._on_complete = on_complete
        self._clock = clock
        self._state = SequencerState(effective_total=len(catalog))
        self._answers: list[AnswerRecord] = []
        self._completed = False

    # --- queries --------------------------------------------------------------

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state.current_index >= len(self._catalog)

    @property
    def answers(self) -> tuple[AnswerRecord, ...]:
        return tuple(self._answers)

    def current_question(self) -> Question | None:
        if self.is_complete:
            return None
        return self._catalog[self._state.current_index]

    def current_prompt(self) -> PresentedQuestion | None:
        question = self.current_question()
        if question is None:
            return None
        return PresentedQuestion(
            question=question,
            ordinal=self._state.displayed_ordinal,
            total=self._state.effective_total,
        )

    # --- transitions ----------------------------------------------------------

    def submit(self, value: Any) -> AnswerRecord:
        """Record an answer for the current question and advance.

        Raises RequiredAnswerMissing, leaving the session untouched, when a
        required question receives an empty value.
        """
        question = self.current_question()
        if question is None:
            raise QuestionnaireFinished("The questionnaire has already been completed.")

        if is_empty(value):
            if question.required:
                raise RequiredAnswerMissing(question.id)
            stored: AnswerValue = NOT_PROVIDED
        elif isinstance(value, (list, tuple)):
            stored = tuple(value)
        else:
            stored = value

        record = AnswerRecord(
            question_id=question.id,
            question_text=question.prompt,
            value=stored,
            answered_at=self._clock().isoformat(),
        )
        self._answers.append(record)

        next_index = self._state.current_index + 1
        for rule in self._skip_rules:
            if rule.matches(question.id, stored):
                next_index += rule.skip_count
                if rule not in self._state.fired_rules:
                    self._state.fired_rules.add(rule)
                    self._state.effective_total = len(self._catalog) - sum(
                        r.skip_count for r in self._state.fired_rules
                    )

        self._state.displayed_ordinal += 1
        self._state.current_index = min(next_index, len(self._catalog))

        if self.is_complete:
            self._finish()
        return record

    def skip(self) -> AnswerRecord:
        """Leave the current question unanswered; only optional questions allow this."""
        return self.submit(None)

    def _finish(self) -> None:
        if self._completed:
            return
        self._completed = True
        if self._on_complete is not None:
            self._on_complete(list(self._answers))
