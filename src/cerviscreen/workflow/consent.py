"""Consent and eligibility capture ahead of a screening."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from enum import StrEnum

from cerviscreen.errors import ConsentNotGiven, EligibilityNotMet
from cerviscreen.model.consent import ConsentItems, ConsentRecord, EligibilityData


class ConsentStep(StrEnum):
    WELCOME = "welcome"
    ELIGIBILITY = "eligibility"
    CONSENT = "consent"
    COMPLETE = "complete"


_PROGRESS: dict[ConsentStep, int] = {
    ConsentStep.WELCOME: 33,
    ConsentStep.ELIGIBILITY: 66,
    ConsentStep.CONSENT: 100,
    ConsentStep.COMPLETE: 100,
}


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _generate_id() -> str:
    return uuid.uuid4().hex[:12]


class ConsentFlow:
    """Three-step consent form: welcome, eligibility criteria, consent items.

    Each ``advance`` moves one step forward. Eligibility must be fully met to
    leave the eligibility step and every consent item must be agreed to to
    leave the consent step; otherwise the flow stays where it is.
    """

    def __init__(
        self,
        patient_id: str,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _generate_id,
    ) -> None:
        self._patient_id = patient_id
        self._clock = clock
        self._id_factory = id_factory
        self._step = ConsentStep.WELCOME
        self._eligibility = EligibilityData()
        self._record: ConsentRecord | None = None

    @property
    def step(self) -> ConsentStep:
        return self._step

    @property
    def progress(self) -> int:
        """Percentage shown on the progress bar."""
        return _PROGRESS[self._step]

    @property
    def record(self) -> ConsentRecord | None:
        """The consent record, once the flow is complete."""
        return self._record

    def advance(
        self,
        eligibility: EligibilityData | None = None,
        consent: ConsentItems | None = None,
    ) -> ConsentStep:
        if self._step is ConsentStep.WELCOME:
            self._step = ConsentStep.ELIGIBILITY
        elif self._step is ConsentStep.ELIGIBILITY:
            eligibility = eligibility or EligibilityData()
            if not eligibility.all_met:
                raise EligibilityNotMet(eligibility.unmet)
            self._eligibility = eligibility
            self._step = ConsentStep.CONSENT
        elif self._step is ConsentStep.CONSENT:
            consent = consent or ConsentItems()
            if not consent.all_given:
                raise ConsentNotGiven(consent.missing)
            self._record = ConsentRecord(
                id=self._id_factory(),
                patient_id=self._patient_id,
                consent_given=True,
                eligibility=self._eligibility,
                created_at=self._clock().isoformat(),
            )
            self._step = ConsentStep.COMPLETE
        return self._step


def capture_consent(
    patient_id: str,
    eligibility: EligibilityData,
    consent: ConsentItems,
    *,
    clock: Callable[[], datetime] = _utc_now,
    id_factory: Callable[[], str] = _generate_id,
) -> ConsentRecord:
    """Run the whole flow in one go for callers that collect every answer up front."""
    flow = ConsentFlow(patient_id, clock=clock, id_factory=id_factory)
    flow.advance()
    flow.advance(eligibility=eligibility)
    flow.advance(consent=consent)
    assert flow.record is not None
    return flow.record
