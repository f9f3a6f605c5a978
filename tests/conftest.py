import pytest

from hms.services import add_doctor, add_patient
from hms.store import ClinicStore


@pytest.fixture
def store():
    return ClinicStore()


@pytest.fixture
def clinic(store):
    """Store with two doctors and three patients (the first one unassigned)."""
    add_doctor(store, "Dr. House", "Diagnostics", "555-0001")
    add_doctor(store, "Dr. Grey", "Surgery", "555-0002")
    add_patient(store, "Bob", 40, "M", "555-1001", "Flu")
    add_patient(store, "alice", 29, "F", "555-1002", "Migraine", doctor_id=2)
    add_patient(store, "Charlie", 61, "M", "555-1003", "Hypertension", doctor_id=1)
    return store
