from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Patient:
    id: str
    full_name: str = ""
    email: str = ""
    phone: str = ""
    date_of_birth: str = ""
    address: str = ""
    emergency_contact: str = ""
    emergency_phone: str = ""
    assigned_physician_id: str = ""


@dataclass(frozen=True)
class Physician:
    id: str
    full_name: str
    specialization: str = ""
    license_number: str = ""
    phone: str = ""
    years_of_experience: int = 0

    @property
    def display_name(self) -> str:
        return f"Dr. {self.full_name}"
