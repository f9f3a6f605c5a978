"""Test saving and loading the whole store to a SQLite save file."""
import sqlite3

from hms.models import ErrorKind
from hms.persistence import load_store, read_header, save_store
from hms.services import (
    add_disease,
    add_doctor,
    add_patient,
    delete_patient,
    schedule_appointment,
    sort_patients_by_name,
)
from hms.store import ClinicStore


def _populated(clinic):
    add_disease(clinic, "Influenza", "Fever, cough", "Rest")
    add_disease(clinic, "Asthma", "Wheezing", "Inhalers")
    schedule_appointment(clinic, 1, 2, "2024-05-01", "09:30")
    schedule_appointment(clinic, 3, 1, "2024-05-02", "11:00")
    schedule_appointment(clinic, 2, 1, "2024-05-03", "12:15")
    sort_patients_by_name(clinic)
    delete_patient(clinic, 3)
    return clinic


def test_missing_file_is_empty_database(tmp_path):
    store = load_store(tmp_path / "nope.sqlite")
    assert store == ClinicStore()
    assert not (tmp_path / "nope.sqlite").exists()


def test_round_trip(tmp_path, clinic):
    store = _populated(clinic)
    path = tmp_path / "hospital.sqlite"

    outcome = save_store(store, path)
    assert outcome.ok
    loaded = load_store(path)

    assert loaded == store
    assert [p.name for p in loaded.patients] == ["alice", "Bob"]
    assert [t.next_id for t in loaded.tables()] == [4, 3, 3, 4]


def test_round_trip_empty_store(tmp_path):
    path = tmp_path / "empty.sqlite"
    assert save_store(ClinicStore(), path).ok
    assert load_store(path) == ClinicStore()


def test_header_order(tmp_path, clinic):
    store = _populated(clinic)
    path = tmp_path / "hospital.sqlite"
    save_store(store, path)

    # patient, disease, doctor, appointment counts, then the next ids in the same order
    assert read_header(path) == (2, 2, 2, 3, 4, 3, 3, 4)
    assert read_header(tmp_path / "missing.sqlite") is None


def test_only_live_rows_are_written(tmp_path, clinic):
    path = tmp_path / "hospital.sqlite"
    delete_patient(clinic, 2)
    save_store(clinic, path)

    conn = sqlite3.connect(str(path))
    rows = conn.execute("SELECT slot, id, name FROM patients ORDER BY slot").fetchall()
    conn.close()
    assert rows == [(0, 1, "Bob"), (1, 3, "Charlie")]


def test_save_overwrites_previous_file(tmp_path, clinic):
    path = tmp_path / "hospital.sqlite"
    save_store(clinic, path)
    save_store(ClinicStore(), path)
    assert load_store(path) == ClinicStore()
    assert not (tmp_path / "hospital.sqlite.tmp").exists()


def test_corrupt_file_loads_as_empty(tmp_path):
    path = tmp_path / "garbage.sqlite"
    path.write_bytes(b"this is not a database" * 64)
    assert load_store(path) == ClinicStore()
    assert read_header(path) is None


def test_save_to_unwritable_location(tmp_path, clinic):
    outcome = save_store(clinic, tmp_path / "no" / "such" / "dir" / "data.sqlite")
    assert not outcome.ok
    assert outcome.error is ErrorKind.IO_FAILURE


def test_unbindable_value_reports_io_failure_and_cleans_up(tmp_path, store):
    add_patient(store, "Huge", 10**20, "M", "1", "x")
    path = tmp_path / "hospital.sqlite"

    outcome = save_store(store, path)
    assert outcome.error is ErrorKind.IO_FAILURE
    assert not path.exists()
    assert not (tmp_path / "hospital.sqlite.tmp").exists()


def test_file_names_are_not_parsed_as_urls(tmp_path, clinic):
    for name in ("data?.sqlite", "a%41.sqlite", "x?mode=ro.sqlite"):
        path = tmp_path / name
        assert save_store(clinic, path).ok
        assert path.exists()
        assert load_store(path) == clinic
    assert not [p for p in tmp_path.iterdir() if p.name.endswith(".tmp")]
    assert not (tmp_path / "aA.sqlite").exists()


def test_round_trip_non_ascii_and_clipped_strings(tmp_path, store):
    add_doctor(store, "Dr. Émile Ørsted", "Médecine générale", "+33 1 23 45 67 89")
    add_patient(store, "José Ñúñez 李小龙", 44, "Ωmega", "☎ 555", "Grippe " * 30, doctor_id=1)
    add_disease(store, "Grippe", "Fièvre, toux", "Repos " * 50)
    schedule_appointment(store, 1, 1, "2024-12-31 (fin d'année)", "23:59 ⏰ late")

    p = store.patients.get(1)
    assert len(p.disease) == 99
    assert len(store.diseases.get(1).treatment) == 199
    assert len(store.appointments.get(1).time) == 9

    path = tmp_path / "hospital.sqlite"
    assert save_store(store, path).ok
    loaded = load_store(path)
    assert loaded == store
    assert loaded.patients.get(1).name == "José Ñúñez 李小龙"
