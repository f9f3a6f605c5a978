from __future__ import annotations

from .models import Outcome
from .services import add_disease, add_doctor
from .store import ClinicStore

DOCTORS = [
    ("Dr. Mario Rossi", "General Medicine", "555-0101"),
    ("Dr. Laura Bianchi", "Cardiology", "555-0102"),
]

DISEASES = [
    ("Influenza", "Fever, cough, sore throat, body aches", "Rest, fluids, antipyretics"),
    ("Hypertension", "Often none; headache, dizziness", "Lifestyle changes, antihypertensives"),
    ("Gastroenteritis", "Diarrhea, vomiting, abdominal cramps", "Oral rehydration, rest"),
]


def seed_base(store: ClinicStore) -> list[Outcome]:
    """
    Add starter data (idempotent, matched by name ignoring case):
    - doctors
    - disease references
    """
    added = []
    for name, spec, phone in DOCTORS:
        if not store.doctors.find_by_name(name):
            added.append(add_doctor(store, name, spec, phone))

    for name, symptoms, treatment in DISEASES:
        if not store.diseases.find_by_name(name):
            added.append(add_disease(store, name, symptoms, treatment))
    return added
