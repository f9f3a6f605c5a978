"""Test scripted sessions of the interactive menu."""
from hms.persistence import load_store
from hms.shell import INT_MAX, INT_MIN, Shell, parse_int, run_menu
from hms.store import ClinicStore


def scripted(*lines):
    it = iter(lines)

    def _input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return _input


def capture():
    out = []
    return out, lambda *a, **k: out.append(" ".join(str(x) for x in a))


def test_parse_int():
    assert parse_int(" 42 ") == (42, "")
    assert parse_int("-7") == (-7, "")
    assert parse_int(str(INT_MAX)) == (INT_MAX, "")
    assert parse_int(str(INT_MIN)) == (INT_MIN, "")
    assert parse_int("")[0] is None
    assert parse_int("abc") == (None, "Invalid input. Please enter a number.")
    assert parse_int("12abc") == (None, "Invalid input. Please enter only a number.")
    assert parse_int(str(INT_MAX + 1)) == (None, "Number is out of range.")


def test_full_session_saves_on_exit(tmp_path):
    path = tmp_path / "data.sqlite"
    out, print_fn = capture()
    code = run_menu(
        ClinicStore(),
        path,
        input_fn=scripted(
            "7", "Dr. House", "Diagnostics", "555-0001",
            "1", "Alice", "abc", "30", "F", "555-1001", "Flu", "0",
            "11", "1", "1", "2024-01-01", "10:00",
            "15",
        ),
        print_fn=print_fn,
    )
    assert code == 0
    assert "Invalid input. Please enter a number." in out

    store = load_store(path)
    assert [d.name for d in store.doctors] == ["Dr. House"]
    (patient,) = store.patients
    assert patient.age == 30
    assert patient.doctor_id == 1
    (appt,) = store.appointments
    assert (appt.patient_id, appt.doctor_id, appt.date, appt.time) == (1, 1, "2024-01-01", "10:00")
    assert any("primary doctor" in line for line in out)


def test_empty_text_is_asked_again(tmp_path):
    out, print_fn = capture()
    shell = Shell(ClinicStore(), tmp_path / "d.sqlite", input_fn=scripted("", "  ", "Cardio Doc", "Cardiology", "1"), print_fn=print_fn)
    shell.add_doctor()
    assert out.count("This field cannot be empty.") == 2
    assert shell.store.doctors.get(1).name == "Cardio Doc"


def test_delete_asks_for_confirmation(tmp_path, clinic):
    out, print_fn = capture()
    shell = Shell(clinic, tmp_path / "d.sqlite", input_fn=scripted("2", "n", "2", "y", "99"), print_fn=print_fn)

    shell.delete_patient()
    assert "Deletion canceled." in out
    assert len(clinic.patients) == 3

    shell.delete_patient()
    assert "Patient deleted successfully." in out
    assert [p.id for p in clinic.patients] == [1, 3]

    shell.delete_patient()
    assert "No patient found with ID 99." in out


def test_schedule_requires_patients_and_doctors(tmp_path):
    out, print_fn = capture()
    shell = Shell(ClinicStore(), tmp_path / "d.sqlite", input_fn=scripted(), print_fn=print_fn)
    shell.schedule()
    assert out == ["Need at least one patient and one doctor to schedule."]


def test_schedule_with_invalid_ids(tmp_path, clinic):
    out, print_fn = capture()
    shell = Shell(clinic, tmp_path / "d.sqlite", input_fn=scripted("1", "99"), print_fn=print_fn)
    shell.schedule()
    assert "Invalid patient or doctor ID." in out
    assert len(clinic.appointments) == 0


def test_search_and_sort_from_menu(tmp_path, clinic):
    out, print_fn = capture()
    shell = Shell(clinic, tmp_path / "d.sqlite", input_fn=scripted("ALICE", "5"), print_fn=print_fn)

    shell.search_by_name()
    assert "ID: 2 | Name: alice | Disease: Migraine" in out

    shell.search_by_id()
    assert "Patient with ID 5 not found." in out

    shell.sort_patients()
    assert [p.name for p in clinic.patients] == ["alice", "Bob", "Charlie"]


def test_end_of_input_exits_and_saves(tmp_path, clinic):
    path = tmp_path / "d.sqlite"
    out, print_fn = capture()
    code = Shell(clinic, path, input_fn=scripted("99", "2"), print_fn=print_fn).run()
    assert code == 0
    assert "Invalid choice. Try again." in out
    assert "Exiting. Goodbye!" in out
    assert load_store(path) == clinic


def test_failed_exit_save_still_terminates(tmp_path, clinic):
    out, print_fn = capture()
    code = run_menu(clinic, tmp_path / "missing" / "d.sqlite", input_fn=scripted("15"), print_fn=print_fn)
    assert code == 1
    assert out[-1] == "Exiting. Goodbye!"


def test_parse_int_accepts_ascii_digits_only():
    assert parse_int("+15") == (15, "")
    assert parse_int("1_000") == (None, "Invalid input. Please enter only a number.")
    assert parse_int("١٢")[0] is None
    assert parse_int("１２")[0] is None
    assert parse_int("- 3")[0] is None
    assert parse_int("0x1F") == (None, "Invalid input. Please enter only a number.")
