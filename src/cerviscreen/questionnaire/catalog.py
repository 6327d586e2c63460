"""The fixed, ordered screening questionnaire."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from cerviscreen.model.question import Question, QuestionKind

PRIOR_SCREENING_ID = "previous-screening"


class QuestionCatalog:
    """Read-only ordered sequence of questions.

    Catalog order is the default traversal order. Question ids must be
    unique; a duplicate is rejected at construction.
    """

    def __init__(self, questions: Iterable[Question]) -> None:
        self._questions: tuple[Question, ...] = tuple(questions)
        self._index: dict[str, int] = {}
        for position, question in enumerate(self._questions):
            if question.id in self._index:
                raise ValueError(f"Duplicate question id in catalog: {question.id!r}")
            self._index[question.id] = position

    def __len__(self) -> int:
        return len(self._questions)

    def __getitem__(self, index: int) -> Question:
        return self._questions[index]

    def __iter__(self) -> Iterator[Question]:
        return iter(self._questions)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._index

    def get(self, question_id: str) -> Question | None:
        position = self._index.get(question_id)
        return None if position is None else self._questions[position]

    def index_of(self, question_id: str) -> int:
        """Position of a question id; raises KeyError if absent."""
        return self._index[question_id]

    @property
    def ids(self) -> tuple[str, ...]:
        return tuple(q.id for q in self._questions)


SCREENING_CATALOG = QuestionCatalog(
    [
        Question(
            id="symptoms",
            prompt="Are you currently experiencing any of the following symptoms? (Select all that apply)",
            kind=QuestionKind.MULTI_SELECT,
            options=(
                "Unusual vaginal bleeding (between periods or after menopause)",
                "Abnormal vaginal discharge",
                "Pelvic pain or discomfort",
                "Pain during intercourse",
                "No symptoms - routine screening",
            ),
            required=True,
        ),
        Question(
            id="bleeding-details",
            prompt="If you selected unusual bleeding, when did you first notice this?",
            kind=QuestionKind.FREE_TEXT,
            required=False,
        ),
        Question(
            id=PRIOR_SCREENING_ID,
            prompt="Have you had cervical screening before?",
            kind=QuestionKind.YES_NO,
            required=True,
        ),
        Question(
            id="previous-abnormal",
            prompt="Have you ever had an abnormal cervical screening result?",
            kind=QuestionKind.YES_NO,
            required=True,
        ),
        Question(
            id="hpv-vaccine",
            prompt="Have you received the HPV vaccine?",
            kind=QuestionKind.YES_NO,
            required=True,
        ),
        Question(
            id="sexual-activity",
            prompt="How would you describe your sexual activity?",
            kind=QuestionKind.SINGLE_SELECT,
            options=(
                "Currently sexually active",
                "Not currently sexually active",
                "Prefer not to say",
            ),
            required=False,
        ),
        Question(
            id="contraception",
            prompt="Are you currently using any form of contraception?",
            kind=QuestionKind.MULTI_SELECT,
            options=(
                "Combined pill",
                "Progestogen-only pill",
                "IUD/Coil",
                "Implant",
                "Condoms",
                "None",
                "Prefer not to say",
            ),
            required=False,
        ),
        Question(
            id="additional-info",
            prompt="Is there anything else you would like to tell us about your health or symptoms?",
            kind=QuestionKind.FREE_TEXT,
            required=False,
        ),
    ]
)
