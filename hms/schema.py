"""
Save-file schema.

Each row class lists its record fields explicitly (FIELDS, in column order) so the
on-disk layout does not depend on the in-memory dataclasses. `slot` is the row's
position in its table; rows are read back in slot order.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base
from .models import (
    DATE_LEN,
    DISEASE_LEN,
    GENDER_LEN,
    NAME_LEN,
    PHONE_LEN,
    SPECIALIZATION_LEN,
    SYMPTOMS_LEN,
    TIME_LEN,
    TREATMENT_LEN,
    Appointment,
    Disease,
    Doctor,
    Patient,
)


class StoreHeader(Base):
    """Single row: the four table counts, then the four next-id counters."""
    __tablename__ = "store_header"

    FIELDS = (
        "patient_count",
        "disease_count",
        "doctor_count",
        "appointment_count",
        "next_patient_id",
        "next_disease_id",
        "next_doctor_id",
        "next_appointment_id",
    )

    slot: Mapped[int] = mapped_column(Integer, primary_key=True, default=0)

    patient_count: Mapped[int] = mapped_column(Integer, nullable=False)
    disease_count: Mapped[int] = mapped_column(Integer, nullable=False)
    doctor_count: Mapped[int] = mapped_column(Integer, nullable=False)
    appointment_count: Mapped[int] = mapped_column(Integer, nullable=False)

    next_patient_id: Mapped[int] = mapped_column(Integer, nullable=False)
    next_disease_id: Mapped[int] = mapped_column(Integer, nullable=False)
    next_doctor_id: Mapped[int] = mapped_column(Integer, nullable=False)
    next_appointment_id: Mapped[int] = mapped_column(Integer, nullable=False)

    def values(self) -> tuple[int, ...]:
        return tuple(getattr(self, f) for f in self.FIELDS)


class _RecordRow:
    FIELDS = ()
    RECORD = object

    @classmethod
    def from_record(cls, slot: int, record: Any) -> "_RecordRow":
        return cls(slot=slot, **{f: getattr(record, f) for f in cls.FIELDS})

    def to_record(self) -> Any:
        return self.RECORD(**{f: getattr(self, f) for f in self.FIELDS})


class PatientRow(_RecordRow, Base):
    __tablename__ = "patients"

    FIELDS = ("id", "name", "age", "gender", "phone", "disease", "doctor_id")
    RECORD = Patient

    slot: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(NAME_LEN), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    gender: Mapped[str] = mapped_column(String(GENDER_LEN), nullable=False)
    phone: Mapped[str] = mapped_column(String(PHONE_LEN), nullable=False)
    disease: Mapped[str] = mapped_column(String(DISEASE_LEN), nullable=False)
    # no FK: doctors are read after patients and references are only checked on creation
    doctor_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class DiseaseRow(_RecordRow, Base):
    __tablename__ = "diseases"

    FIELDS = ("id", "name", "symptoms", "treatment")
    RECORD = Disease

    slot: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(NAME_LEN), nullable=False)
    symptoms: Mapped[str] = mapped_column(String(SYMPTOMS_LEN), nullable=False)
    treatment: Mapped[str] = mapped_column(String(TREATMENT_LEN), nullable=False)


class DoctorRow(_RecordRow, Base):
    __tablename__ = "doctors"

    FIELDS = ("id", "name", "specialization", "phone")
    RECORD = Doctor

    slot: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(NAME_LEN), nullable=False)
    specialization: Mapped[str] = mapped_column(String(SPECIALIZATION_LEN), nullable=False)
    phone: Mapped[str] = mapped_column(String(PHONE_LEN), nullable=False)


class AppointmentRow(_RecordRow, Base):
    __tablename__ = "appointments"

    FIELDS = ("id", "patient_id", "doctor_id", "date", "time")
    RECORD = Appointment

    slot: Mapped[int] = mapped_column(Integer, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    patient_id: Mapped[int] = mapped_column(Integer, nullable=False)
    doctor_id: Mapped[int] = mapped_column(Integer, nullable=False)
    date: Mapped[str] = mapped_column(String(DATE_LEN), nullable=False)
    time: Mapped[str] = mapped_column(String(TIME_LEN), nullable=False)


# Table rows in save-file order, matching ClinicStore.tables()
RECORD_ROWS: tuple[type[_RecordRow], ...] = (PatientRow, DiseaseRow, DoctorRow, AppointmentRow)
