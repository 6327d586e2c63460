"""Error hierarchy for the screening portal."""
from __future__ import annotations

from typing import Any


class PortalError(Exception):
    """Base error for all cerviscreen errors.

    ``status_code`` and ``code`` describe how the web layer reports the error.
    """

    status_code: int = 400
    code: str = "portal_error"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


# ---------------------------------------------------------------------------
# Questionnaire errors
# ---------------------------------------------------------------------------


class RequiredAnswerMissing(PortalError):
    """A required question was submitted without an answer.

    Recoverable: the caller re-presents the same question.
    """

    status_code = 422
    code = "required_answer_missing"

    def __init__(self, question_id: str, message: str | None = None) -> None:
        super().__init__(
            message or "This question is required. Please provide an answer."
        )
        self.question_id = question_id


class QuestionnaireFinished(PortalError):
    """An answer was submitted after the last question was resolved."""

    status_code = 409
    code = "questionnaire_finished"


class NoActiveQuestionnaire(PortalError):
    """The patient has no questionnaire session in progress."""

    status_code = 409
    code = "no_active_questionnaire"


class BadRequest(PortalError):
    """A request is missing a field or is not valid JSON."""

    status_code = 400
    code = "bad_request"


class InvalidAnswer(PortalError):
    """An answer does not fit the question's kind or option set."""

    status_code = 422
    code = "invalid_answer"


# ---------------------------------------------------------------------------
# Intake errors
# ---------------------------------------------------------------------------


class EligibilityNotMet(PortalError):
    """One or more eligibility criteria were not confirmed."""

    status_code = 422
    code = "eligibility_not_met"

    def __init__(self, unmet: tuple[str, ...]) -> None:
        super().__init__(f"Eligibility criteria not met: {', '.join(unmet)}")
        self.unmet = unmet


class ConsentNotGiven(PortalError):
    """One or more consent items were not agreed to."""

    status_code = 422
    code = "consent_not_given"

    def __init__(self, missing: tuple[str, ...]) -> None:
        super().__init__(f"Consent items not agreed: {', '.join(missing)}")
        self.missing = missing


class SubmissionIncomplete(PortalError):
    """A screening was submitted before all of its parts were ready."""

    status_code = 422
    code = "submission_incomplete"


class UnsupportedImage(PortalError):
    """An uploaded file is not an image."""

    status_code = 415
    code = "unsupported_image"


# ---------------------------------------------------------------------------
# Review errors
# ---------------------------------------------------------------------------


class InvalidDecision(PortalError):
    """A clinical decision is missing its type or notes, or is malformed."""

    status_code = 422
    code = "invalid_decision"


class NotFoundError(PortalError):
    """A referenced record does not exist."""

    status_code = 404
    code = "not_found"


class AccessDenied(PortalError):
    """A record belongs to a different patient or physician."""

    status_code = 403
    code = "access_denied"


# ---------------------------------------------------------------------------
# Backend errors
# ---------------------------------------------------------------------------


class BackendError(PortalError):
    """Error reported by the hosted data backend."""

    status_code = 502
    code = "backend_error"

    def __init__(
        self,
        message: str,
        *,
        upstream_status: int | None = None,
        retryable: bool = False,
        raw: Any = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.upstream_status = upstream_status
        self.retryable = retryable
        self.raw = raw


class BackendAuthError(BackendError):
    """The backend rejected the configured API key."""

    code = "backend_auth_error"


class BackendConflict(BackendError):
    """The backend refused a write because of a uniqueness conflict."""

    status_code = 409
    code = "backend_conflict"


class BackendTimeout(BackendError):
    """A request to the backend timed out."""

    status_code = 504
    code = "backend_timeout"


class BackendUnavailable(BackendError):
    """The backend could not be reached."""

    status_code = 503
    code = "backend_unavailable"


def error_from_status_code(
    status_code: int,
    message: str,
    *,
    raw: Any = None,
) -> BackendError:
    """Map a backend HTTP status code to the appropriate error type."""
    common = dict(upstream_status=status_code, raw=raw)

    if status_code in (401, 403):
        return BackendAuthError(message, **common)
    if status_code == 409:
        return BackendConflict(message, **common)
    if status_code in (408, 429) or 500 <= status_code <= 599:
        return BackendError(message, retryable=True, **common)
    return BackendError(message, **common)
