"""Interviewer protocol definition."""

from __future__ import annotations

from typing import Any, Protocol

from cerviscreen.questionnaire.sequencer import PresentedQuestion


class Interviewer(Protocol):
    """Protocol for objects that present a question and collect the patient's answer.

    ``ask`` returns the raw value (None to skip). ``inform`` relays a message,
    such as a validation failure, before the same question is asked again.
    """

    def ask(self, prompt: PresentedQuestion) -> Any: ...

    def inform(self, message: str) -> None: ...
