from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

# Wire keys match the consent screen's field ids.
ELIGIBILITY_CRITERIA: dict[str, str] = {
    "ageConfirmed": "I am between 25 and 64 years old",
    "hasCervix": "I have a cervix",
    "notPregnant": "I am not currently pregnant",
    "noRecentScreening": "I have not had cervical screening in the past 12 months",
}

CONSENT_STATEMENTS: dict[str, str] = {
    "understandPurpose": "I understand the purpose of this screening",
    "agreeDataStorage": "I consent to secure storage of my data and images",
    "agreeImageCapture": "I consent to capturing and transmitting cervical images",
    "understandNotDiagnostic": "I understand this is decision-support, not autonomous diagnosis",
    "canWithdraw": "I understand I can withdraw consent at any time",
}


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class EligibilityData:
    age_confirmed: bool = False
    has_cervix: bool = False
    not_pregnant: bool = False
    no_recent_screening: bool = False

    @property
    def unmet(self) -> tuple[str, ...]:
        return tuple(_camel(f.name) for f in fields(self) if not getattr(self, f.name))

    @property
    def all_met(self) -> bool:
        return not self.unmet

    def to_dict(self) -> dict[str, bool]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EligibilityData:
        return cls(**{f.name: bool(data.get(_camel(f.name), False)) for f in fields(cls)})


@dataclass(frozen=True)
class ConsentItems:
    understand_purpose: bool = False
    agree_data_storage: bool = False
    agree_image_capture: bool = False
    understand_not_diagnostic: bool = False
    can_withdraw: bool = False

    @property
    def missing(self) -> tuple[str, ...]:
        return tuple(_camel(f.name) for f in fields(self) if not getattr(self, f.name))

    @property
    def all_given(self) -> bool:
        return not self.missing

    def to_dict(self) -> dict[str, bool]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConsentItems:
        return cls(**{f.name: bool(data.get(_camel(f.name), False)) for f in fields(cls)})


@dataclass(frozen=True)
class ConsentRecord:
    id: str
    patient_id: str
    consent_given: bool
    eligibility: EligibilityData
    created_at: str = ""
