from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class NotificationType(StrEnum):
    CLINICAL_DECISION = "clinical_decision"
    URGENT = "urgent"


@dataclass(frozen=True)
class Notification:
    id: str
    patient_id: str
    title: str
    message: str
    notification_type: NotificationType = NotificationType.CLINICAL_DECISION
    physician_id: str = ""
    submission_id: str = ""
    is_read: bool = False
    created_at: str = ""
