"""CallbackInterviewer: delegates to a user-supplied callback function."""

from __future__ import annotations

from typing import Any, Callable

from cerviscreen.questionnaire.sequencer import PresentedQuestion


class CallbackInterviewer:
    """Interviewer that delegates answering to a callback.

    The callback receives the presented question and returns the answer
    value. Messages passed to ``inform`` are collected in ``messages``.
    """

    def __init__(self, callback: Callable[[PresentedQuestion], Any]) -> None:
        self._callback = callback
        self.messages: list[str] = []

    def ask(self, prompt: PresentedQuestion) -> Any:
        return self._callback(prompt)

    def inform(self, message: str) -> None:
        self.messages.append(message)
