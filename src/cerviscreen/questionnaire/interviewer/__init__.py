"""Interviewers that put questionnaire prompts in front of a patient."""

from cerviscreen.questionnaire.interviewer.base import Interviewer
from cerviscreen.questionnaire.interviewer.callback import CallbackInterviewer
from cerviscreen.questionnaire.interviewer.console import ConsoleInterviewer
from cerviscreen.questionnaire.interviewer.runner import run_questionnaire

__all__ = [
    "Interviewer",
    "CallbackInterviewer",
    "ConsoleInterviewer",
    "run_questionnaire",
]
