from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

from .models import Appointment, Disease, Doctor, Patient

MAX_PATIENTS = 500
MAX_DISEASES = 200
MAX_DOCTORS = 100
MAX_APPOINTMENTS = 1000

R = TypeVar("R")

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold(text: str) -> str:
    """Lower-case ASCII letters only, leaving every other character as is."""
    return text.translate(_ASCII_FOLD)


@dataclass
class Table(Generic[R]):
    """
    Ordered, bounded table of records with its own id counter.
    - rows keep insertion order (or the last sort order)
    - removal shifts later rows one position earlier
    - next_id only ever grows
    """
    label: str
    capacity: int
    rows: list[R] = field(default_factory=list)
    next_id: int = 1

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[R]:
        return iter(self.rows)

    @property
    def is_full(self) -> bool:
        return len(self.rows) >= self.capacity

    def issue_id(self) -> int:
        new_id = self.next_id
        self.next_id += 1
        return new_id

    def append(self, record: R) -> None:
        if self.is_full:
            raise OverflowError(f"{self.label} table is full ({self.capacity})")
        self.rows.append(record)

    def find_index(self, record_id: int) -> int | None:
        for i, record in enumerate(self.rows):
            if record.id == record_id:
                return i
        return None

    def get(self, record_id: int) -> R | None:
        i = self.find_index(record_id)
        return None if i is None else self.rows[i]

    def remove(self, record_id: int) -> R | None:
        i = self.find_index(record_id)
        if i is None:
            return None
        return self.rows.pop(i)

    def find_by_name(self, name: str) -> list[R]:
        """All records whose name equals `name` ignoring ASCII case, in table order."""
        key = fold(name)
        return [r for r in self.rows if fold(r.name) == key]


def _patients() -> Table[Patient]:
    return Table("patient", MAX_PATIENTS)


def _diseases() -> Table[Disease]:
    return Table("disease", MAX_DISEASES)


def _doctors() -> Table[Doctor]:
    return Table("doctor", MAX_DOCTORS)


def _appointments() -> Table[Appointment]:
    return Table("appointment", MAX_APPOINTMENTS)


@dataclass
class ClinicStore:
    """All clinic state: the four tables and their id counters."""
    patients: Table[Patient] = field(default_factory=_patients)
    diseases: Table[Disease] = field(default_factory=_diseases)
    doctors: Table[Doctor] = field(default_factory=_doctors)
    appointments: Table[Appointment] = field(default_factory=_appointments)

    def tables(self) -> tuple[Table, Table, Table, Table]:
        """Tables in save-file order."""
        return (self.patients, self.diseases, self.doctors, self.appointments)

    def counts(self) -> dict[str, int]:
        return {t.label: len(t) for t in self.tables()}
