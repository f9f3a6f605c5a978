from __future__ import annotations

import logging

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
    UNASSIGNED,
    Appointment,
    Disease,
    Doctor,
    ErrorKind,
    Outcome,
    Patient,
    clip,
)
from .store import ClinicStore, Table, fold

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
NOT_ASSIGNED = "Not Assigned"


# =========================
# Helpers
# =========================
def _fit(value: str, width: int) -> str:
    clipped = clip(value, width)
    if clipped != value:
        logger.debug("Truncated %r to %d characters", value, width - 1)
    return clipped


def _table_full(table: Table) -> Outcome:
    logger.warning("Rejected new %s: capacity %d reached", table.label, table.capacity)
    return Outcome(False, ErrorKind.CAPACITY_EXCEEDED, message=f"Max {table.label}s reached.")


def patient_name(store: ClinicStore, patient_id: int) -> str:
    p = store.patients.get(patient_id)
    return p.name if p else UNKNOWN


def doctor_name(store: ClinicStore, doctor_id: int) -> str:
    d = store.doctors.get(doctor_id)
    return d.name if d else UNKNOWN


# =========================
# Registration
# =========================
def add_doctor(store: ClinicStore, name: str, specialization: str, phone: str) -> Outcome:
    table = store.doctors
    if table.is_full:
        return _table_full(table)

    d = Doctor(
        id=table.issue_id(),
        name=_fit(name.strip(), NAME_LEN),
        specialization=_fit(specialization.strip(), SPECIALIZATION_LEN),
        phone=_fit(phone.strip(), PHONE_LEN),
    )
    table.append(d)
    logger.info("Doctor %d added", d.id)
    return Outcome(True, record_id=d.id, message=f"Doctor added successfully! (ID: {d.id})", records=(d,))


def add_disease(store: ClinicStore, name: str, symptoms: str, treatment: str) -> Outcome:
    table = store.diseases
    if table.is_full:
        return _table_full(table)

    d = Disease(
        id=table.issue_id(),
        name=_fit(name.strip(), NAME_LEN),
        symptoms=_fit(symptoms.strip(), SYMPTOMS_LEN),
        treatment=_fit(treatment.strip(), TREATMENT_LEN),
    )
    table.append(d)
    logger.info("Disease reference %d added", d.id)
    return Outcome(
        True, record_id=d.id, message=f"Disease reference added successfully! (ID: {d.id})", records=(d,)
    )


def add_patient(
    store: ClinicStore,
    name: str,
    age: int,
    gender: str,
    phone: str,
    disease: str,
    doctor_id: int = UNASSIGNED,
) -> Outcome:
    """
    Patient intake.
    - a doctor_id that matches no doctor leaves the patient unassigned
      (the intake still succeeds, the message says so)
    """
    table = store.patients
    if table.is_full:
        return _table_full(table)

    notes = []
    if doctor_id != UNASSIGNED and store.doctors.find_index(doctor_id) is None:
        notes.append(f"No doctor found with ID {doctor_id}. Patient assigned 'None'.")
        doctor_id = UNASSIGNED

    p = Patient(
        id=table.issue_id(),
        name=_fit(name.strip(), NAME_LEN),
        age=age,
        gender=_fit(gender.strip(), GENDER_LEN),
        phone=_fit(phone.strip(), PHONE_LEN),
        disease=_fit(disease.strip(), DISEASE_LEN),
        doctor_id=doctor_id,
    )
    table.append(p)
    logger.info("Patient %d added (doctor %d)", p.id, p.doctor_id)

    notes.append(f"Patient added successfully! (ID: {p.id})")
    return Outcome(True, record_id=p.id, message=" ".join(notes), records=(p,))


def delete_patient(store: ClinicStore, patient_id: int) -> Outcome:
    p = store.patients.remove(patient_id)
    if p is None:
        return Outcome(False, ErrorKind.NOT_FOUND, message=f"No patient found with ID {patient_id}.")
    logger.info("Patient %d deleted", p.id)
    return Outcome(True, record_id=p.id, message="Patient deleted successfully.", records=(p,))


# =========================
# Scheduling
# =========================
def schedule_appointment(
    store: ClinicStore,
    patient_id: int,
    doctor_id: int,
    date: str,
    time: str,
) -> Outcome:
    """
    Book an appointment between an existing patient and an existing doctor.
    If the patient has no primary doctor yet, the appointment's doctor becomes it.
    """
    table = store.appointments
    if table.is_full:
        return _table_full(table)

    p = store.patients.get(patient_id)
    d = store.doctors.get(doctor_id)
    if p is None or d is None:
        logger.warning("Rejected appointment: patient %d / doctor %d", patient_id, doctor_id)
        return Outcome(False, ErrorKind.INVALID_REFERENCE, message="Invalid patient or doctor ID.")

    a = Appointment(
        id=table.issue_id(),
        patient_id=p.id,
        doctor_id=d.id,
        date=_fit(date.strip(), DATE_LEN),
        time=_fit(time.strip(), TIME_LEN),
    )
    table.append(a)

    notes = []
    if not p.has_doctor:
        p.doctor_id = d.id
        notes.append(f"Note: {d.name} has been set as the primary doctor for {p.name}.")

    logger.info("Appointment %d scheduled (patient %d, doctor %d)", a.id, p.id, d.id)
    notes.append(f"Appointment scheduled (ID: {a.id}) for patient {p.name} with {d.name} on {a.date} {a.time}")
    return Outcome(True, record_id=a.id, message=" ".join(notes), records=(a,))


def cancel_appointment(store: ClinicStore, appointment_id: int) -> Outcome:
    a = store.appointments.remove(appointment_id)
    if a is None:
        return Outcome(False, ErrorKind.NOT_FOUND, message=f"No appointment found with ID {appointment_id}.")
    logger.info("Appointment %d canceled", a.id)
    return Outcome(True, record_id=a.id, message="Appointment canceled.", records=(a,))


# =========================
# Search / sort
# =========================
def search_patient_by_id(store: ClinicStore, patient_id: int) -> Outcome:
    p = store.patients.get(patient_id)
    if p is None:
        return Outcome(False, ErrorKind.NOT_FOUND, message=f"Patient with ID {patient_id} not found.")
    return Outcome(True, record_id=p.id, message="Patient found.", records=(p,))


def search_patient_by_name(store: ClinicStore, name: str) -> Outcome:
    """Exact, ASCII case-insensitive name match. Returns every match in table order."""
    matches = store.patients.find_by_name(name.strip())
    if not matches:
        return Outcome(False, ErrorKind.NOT_FOUND, message=f"No patient named '{name}' found.")
    return Outcome(True, message=f"{len(matches)} match(es).", records=tuple(matches))


def sort_patients_by_name(store: ClinicStore) -> Outcome:
    rows = store.patients.rows
    if len(rows) < 2:
        return Outcome(False, ErrorKind.INSUFFICIENT_DATA, message="Not enough patients to sort.")
    rows.sort(key=lambda p: fold(p.name))
    return Outcome(True, message="Patients sorted by name.")


# =========================
# Flat listings (for display)
# =========================
def patients_flat(store: ClinicStore) -> list[dict]:
    out = []
    for p in store.patients:
        doctor = doctor_name(store, p.doctor_id) if p.has_doctor else NOT_ASSIGNED
        out.append(
            {
                "id": p.id,
                "name": p.name,
                "age": p.age,
                "gender": p.gender,
                "phone": p.phone,
                "disease": p.disease,
                "doctor_id": p.doctor_id,
                "doctor": doctor,
            }
        )
    return out


def doctors_flat(store: ClinicStore) -> list[dict]:
    return [
        {"id": d.id, "name": d.name, "specialization": d.specialization, "phone": d.phone}
        for d in store.doctors
    ]


def diseases_flat(store: ClinicStore) -> list[dict]:
    return [
        {"id": d.id, "name": d.name, "symptoms": d.symptoms, "treatment": d.treatment}
        for d in store.diseases
    ]


def appointments_flat(store: ClinicStore) -> list[dict]:
    return [
        {
            "id": a.id,
            "patient_id": a.patient_id,
            "patient": patient_name(store, a.patient_id),
            "doctor_id": a.doctor_id,
            "doctor": doctor_name(store, a.doctor_id),
            "date": a.date,
            "time": a.time,
        }
        for a in store.appointments
    ]
