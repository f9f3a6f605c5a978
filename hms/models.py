from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

# Field widths of the save format. A stored value holds at most width - 1 characters.
NAME_LEN = 100
SPECIALIZATION_LEN = 100
DISEASE_LEN = 100
SYMPTOMS_LEN = 200
TREATMENT_LEN = 200
PHONE_LEN = 20
GENDER_LEN = 10
DATE_LEN = 20
TIME_LEN = 10

UNASSIGNED = 0


def clip(value: str, width: int) -> str:
    """Truncate `value` to fit a field of the given width."""
    return value[: width - 1]


class ErrorKind(enum.Enum):
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    INVALID_REFERENCE = "INVALID_REFERENCE"
    IO_FAILURE = "IO_FAILURE"
    INSUFFICIENT_DATA = "INSUFFICIENT_DATA"


@dataclass(frozen=True)
class Outcome:
    ok: bool
    error: ErrorKind | None = None
    record_id: int | None = None
    message: str = ""
    records: tuple[Any, ...] = field(default_factory=tuple)


@dataclass
class Patient:
    id: int
    name: str
    age: int
    gender: str
    phone: str
    disease: str
    doctor_id: int = UNASSIGNED

    @property
    def has_doctor(self) -> bool:
        return self.doctor_id != UNASSIGNED


@dataclass
class Doctor:
    id: int
    name: str
    specialization: str
    phone: str


@dataclass
class Disease:
    id: int
    name: str
    symptoms: str
    treatment: str


@dataclass
class Appointment:
    id: int
    patient_id: int
    doctor_id: int
    date: str  # YYYY-MM-DD, not validated
    time: str  # HH:MM, not validated
