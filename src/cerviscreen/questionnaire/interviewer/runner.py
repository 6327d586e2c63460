from __future__ import annotations

from cerviscreen.errors import RequiredAnswerMissing
from cerviscreen.model.question import AnswerRecord
from cerviscreen.questionnaire.interviewer.base import Interviewer
from cerviscreen.questionnaire.sequencer import Sequencer


def run_questionnaire(sequencer: Sequencer, interviewer: Interviewer) -> tuple[AnswerRecord, ...]:
    """Ask every remaining question until the sequencer completes.

    A required question answered with nothing is reported through
    ``interviewer.inform`` and asked again.
    """
    while not sequencer.is_complete:
        prompt = sequencer.current_prompt()
        assert prompt is not None
        value = interviewer.ask(prompt)
        try:
            sequencer.submit(value)
        except RequiredAnswerMissing as exc:
            interviewer.inform(str(exc))
    return sequencer.answers
