from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DecisionType(StrEnum):
    REASSURE = "reassure"
    REPEAT = "repeat"
    HPV_TEST = "hpv-test"
    REFER_ROUTINE = "refer-routine"
    REFER_URGENT = "refer-urgent"

    @property
    def is_referral(self) -> bool:
        return self in (DecisionType.REFER_ROUTINE, DecisionType.REFER_URGENT)


class Urgency(StrEnum):
    ROUTINE = "routine"
    TWO_WEEK = "two-week"
    URGENT = "urgent"


@dataclass(frozen=True)
class ClinicalDecision:
    id: str
    submission_id: str
    physician_id: str
    decision_type: DecisionType
    notes: str
    urgency: Urgency | None = None  # referrals only
    created_at: str = ""
