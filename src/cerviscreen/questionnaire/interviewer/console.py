"""ConsoleInterviewer: prompts the patient at the terminal via input()."""

from __future__ import annotations

from cerviscreen.model.question import AnswerValue, Question, QuestionKind
from cerviscreen.questionnaire.sequencer import PresentedQuestion


class ConsoleInterviewer:
    """Interviewer that uses stdin/stdout for interactive prompts.

    Displays the question with its running number and options, reads input
    and parses it into an answer value. A blank line means "skip"; input
    that matches no option is asked for again.
    """

    def ask(self, prompt: PresentedQuestion) -> AnswerValue | None:
        question = prompt.question
        print(f"\n{'=' * 60}")
        print(f"  Question {prompt.ordinal} of {prompt.total}")
        print(f"  {question.prompt}")
        print(f"{'=' * 60}")

        if question.kind is QuestionKind.YES_NO:
            return self._ask_yes_no(question)
        elif question.kind is QuestionKind.SINGLE_SELECT:
            return self._ask_single_select(question)
        elif question.kind is QuestionKind.MULTI_SELECT:
            return self._ask_multi_select(question)
        else:
            return self._ask_freeform(question)

    def inform(self, message: str) -> None:
        print(f"  ! {message}")

    def _ask_yes_no(self, question: Question) -> str | None:
        prompt = "  [Y]es / [N]o" + self._skip_hint(question) + ": "
        while True:
            raw = self._get_input(prompt).strip().lower()
            if raw in ("y", "yes"):
                return "Yes"
            if raw in ("n", "no"):
                return "No"
            if raw == "":
                return None
            self.inform("Please answer yes or no.")

    def _ask_single_select(self, question: Question) -> str | None:
        self._print_options(question)
        prompt = "  Choice" + self._skip_hint(question) + ": "
        while True:
            raw = self._get_input(prompt).strip()
            if raw == "":
                return None
            option = self._match_option(question, raw)
            if option is not None:
                return option
            self.inform("Please pick one of the listed options.")

    def _ask_multi_select(self, question: Question) -> tuple[str, ...] | None:
        self._print_options(question)
        prompt = "  Choices, comma separated" + self._skip_hint(question) + ": "
        while True:
            raw = self._get_input(prompt).strip()
            if raw == "":
                return None
            picked: list[str] = []
            for part in raw.split(","):
                option = self._match_option(question, part.strip())
                if option is None:
                    picked = []
                    break
                if option not in picked:
                    picked.append(option)
            if picked:
                return tuple(picked)
            self.inform("Please pick from the listed options.")

    def _ask_freeform(self, question: Question) -> str | None:
        raw = self._get_input("  >" + self._skip_hint(question) + " ").strip()
        return raw or None

    @staticmethod
    def _print_options(question: Question) -> None:
        for number, option in enumerate(question.choices, start=1):
            print(f"  [{number}] {option}")

    @staticmethod
    def _match_option(question: Question, raw: str) -> str | None:
        """Match by 1-based number, then by label (case-insensitive)."""
        choices = question.choices
        if raw.isdigit() and 1 <= int(raw) <= len(choices):
            return choices[int(raw) - 1]
        for option in choices:
            if option.lower() == raw.lower():
                return option
        return None

    @staticmethod
    def _skip_hint(question: Question) -> str:
        return "" if question.required else " (Enter to skip)"

    @staticmethod
    def _get_input(prompt: str) -> str:
        return input(prompt)
