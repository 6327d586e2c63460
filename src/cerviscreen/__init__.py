"""CerviScreen: cervical screening portal backend."""
from __future__ import annotations

from cerviscreen.config import PortalConfig
from cerviscreen.questionnaire import SCREENING_CATALOG, Sequencer
from cerviscreen.workflow import ClinicalReview, Inbox, PatientIntake

__all__ = [
    "PortalConfig",
    "SCREENING_CATALOG",
    "Sequencer",
    "ClinicalReview",
    "Inbox",
    "PatientIntake",
]
