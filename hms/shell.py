from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

from .models import UNASSIGNED, Outcome
from .persistence import save_store
from .services import (
    add_disease,
    add_doctor,
    add_patient,
    appointments_flat,
    cancel_appointment,
    delete_patient,
    diseases_flat,
    doctors_flat,
    patient_name,
    patients_flat,
    schedule_appointment,
    search_patient_by_id,
    search_patient_by_name,
    sort_patients_by_name,
)
from .store import ClinicStore

logger = logging.getLogger(__name__)

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

SEPARATOR = "-" * 34

MENU = """
============================================
    Hospital Management System
============================================

Patient Management
 1. Add Patient (Full Intake)
 2. View All Patients
 3. Search Patient by ID
 4. Search Patient by Name
 5. Delete Patient
 6. Sort Patients by Name

Staff & Reference
 7. Add Doctor
 8. View Doctors
 9. Add Disease (Reference)
 10. View Diseases (Reference)

Scheduling
 11. Schedule Appointment
 12. View Appointments
 13. Cancel Appointment

System
 14. Save Data Now
 15. Exit"""

EXIT_CHOICE = 15

# ASCII digits only: no underscores, no other scripts' digits
_INT_RE = re.compile(r"[+-]?[0-9]+")
_LEADING_DIGITS_RE = re.compile(r"[+-]?[0-9]")


def parse_int(text: str) -> tuple[int | None, str]:
    """Return (value, "") for a valid 32-bit integer, else (None, reason)."""
    s = text.strip()
    if not s:
        return None, "Invalid input. Please enter a number."
    if not _INT_RE.fullmatch(s):
        if _LEADING_DIGITS_RE.match(s):
            return None, "Invalid input. Please enter only a number."
        return None, "Invalid input. Please enter a number."
    value = int(s)
    if value < INT_MIN or value > INT_MAX:
        return None, "Number is out of range."
    return value, ""


class Shell:
    """
    Interactive menu over a ClinicStore.
    input_fn / print_fn are injectable so sessions can be scripted.
    """

    def __init__(
        self,
        store: ClinicStore,
        data_file: str | Path,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
    ) -> None:
        self.store = store
        self.data_file = Path(data_file)
        self._input = input_fn
        self._print = print_fn

    # -------------------------
    # Input helpers
    # -------------------------
    def read_line(self, prompt: str, required: bool = True) -> str:
        while True:
            value = self._input(prompt).strip()
            if value or not required:
                return value
            self._print("This field cannot be empty.")

    def read_int(self, prompt: str) -> int:
        while True:
            value, error = parse_int(self._input(prompt))
            if value is not None:
                return value
            self._print(error)

    def confirm(self, prompt: str) -> bool:
        answer = self.read_line(prompt, required=False)
        return answer[:1] in ("y", "Y")

    def report(self, outcome: Outcome) -> None:
        self._print(outcome.message)

    # -------------------------
    # Patients
    # -------------------------
    def add_patient(self) -> None:
        if self.store.patients.is_full:
            self.report(add_patient(self.store, "", 0, "", "", ""))
            return

        self._print("\n--- New Patient Registration ---")
        name = self.read_line("Enter patient name: ")
        age = self.read_int("Enter age: ")
        gender = self.read_line("Enter gender: ")
        phone = self.read_line("Enter phone number: ")

        self._print("\n--- Diagnosis & Assignment ---")
        disease = self.read_line("Enter patient's disease/condition: ")

        doctor_id = UNASSIGNED
        if len(self.store.doctors):
            self._print("\n--- Assign a Doctor ---")
            self.view_doctors()
            doctor_id = self.read_int("Enter Doctor ID to assign (or 0 for none): ")
        else:
            self._print("No doctors in system. Patient assigned 'None'.")

        self.report(add_patient(self.store, name, age, gender, phone, disease, doctor_id))

    def _print_patient(self, p: dict) -> None:
        self._print(f"ID: {p['id']}")
        self._print(f"Name: {p['name']}")
        self._print(f"Age: {p['age']}")
        self._print(f"Gender: {p['gender']}")
        self._print(f"Phone: {p['phone']}")
        self._print(f"Disease: {p['disease']}")
        if p["doctor_id"] != UNASSIGNED:
            self._print(f"Doctor: {p['doctor']} (ID: {p['doctor_id']})")
        else:
            self._print(f"Doctor: {p['doctor']}")

    def view_patients(self) -> None:
        rows = patients_flat(self.store)
        if not rows:
            self._print("No patients available.")
            return
        self._print("\n========== PATIENT LIST ==========")
        for p in rows:
            self._print_patient(p)
            self._print(SEPARATOR)

    def search_by_id(self) -> None:
        outcome = search_patient_by_id(self.store, self.read_int("\nEnter patient ID to search: "))
        if not outcome.ok:
            self.report(outcome)
            return
        self._print("\nPatient Found!")
        pid = outcome.record_id
        self._print_patient(next(p for p in patients_flat(self.store) if p["id"] == pid))

    def search_by_name(self) -> None:
        outcome = search_patient_by_name(self.store, self.read_line("\nEnter patient name to search: "))
        if not outcome.ok:
            self.report(outcome)
            return
        self._print("\nMatches:")
        for p in outcome.records:
            self._print(f"ID: {p.id} | Name: {p.name} | Disease: {p.disease}")

    def delete_patient(self) -> None:
        pid = self.read_int("\nEnter patient ID to delete: ")
        p = self.store.patients.get(pid)
        if p is None:
            self.report(delete_patient(self.store, pid))
            return
        if self.confirm(f"Found: {p.name}. Are you sure you want to delete? (y/n): "):
            self.report(delete_patient(self.store, pid))
        else:
            self._print("Deletion canceled.")

    def sort_patients(self) -> None:
        outcome = sort_patients_by_name(self.store)
        self.report(outcome)
        if outcome.ok:
            self._print("Please use 'View All Patients' to see the new order.")

    # -------------------------
    # Staff & reference
    # -------------------------
    def add_doctor(self) -> None:
        if self.store.doctors.is_full:
            self.report(add_doctor(self.store, "", "", ""))
            return
        self._print("\n--- New Doctor Registration ---")
        name = self.read_line("Enter doctor name (e.g., Dr. Smith): ")
        spec = self.read_line("Enter specialization: ")
        phone = self.read_line("Enter phone: ")
        self.report(add_doctor(self.store, name, spec, phone))

    def view_doctors(self) -> None:
        rows = doctors_flat(self.store)
        if not rows:
            self._print("No doctors added yet.")
            return
        self._print("\n========== DOCTOR LIST ==========")
        for d in rows:
            self._print(f"ID: {d['id']} | Name: {d['name']} | Specialization: {d['specialization']}")
            self._print(SEPARATOR)

    def add_disease(self) -> None:
        if self.store.diseases.is_full:
            self.report(add_disease(self.store, "", "", ""))
            return
        self._print("\n--- Add to Disease Reference Database ---")
        name = self.read_line("Enter disease name: ")
        symptoms = self.read_line("Enter common symptoms: ")
        treatment = self.read_line("Enter common treatment: ")
        self.report(add_disease(self.store, name, symptoms, treatment))

    def view_diseases(self) -> None:
        rows = diseases_flat(self.store)
        if not rows:
            self._print("No diseases recorded in reference database.")
            return
        self._print("\n========== DISEASE REFERENCE DATABASE ==========")
        for d in rows:
            self._print(f"ID: {d['id']}\nName: {d['name']}")
            self._print(f"Symptoms: {d['symptoms']}\nTreatment: {d['treatment']}")
            self._print(SEPARATOR)

    # -------------------------
    # Scheduling
    # -------------------------
    def schedule(self) -> None:
        if self.store.appointments.is_full:
            self.report(schedule_appointment(self.store, 0, 0, "", ""))
            return
        if not len(self.store.patients) or not len(self.store.doctors):
            self._print("Need at least one patient and one doctor to schedule.")
            return

        self._print("\n--- Schedule New Appointment ---")
        pid = self.read_int("Enter patient ID: ")
        did = self.read_int("Enter doctor ID: ")
        if self.store.patients.get(pid) is None or self.store.doctors.get(did) is None:
            self.report(schedule_appointment(self.store, pid, did, "", ""))
            return

        date = self.read_line("Enter date (YYYY-MM-DD): ")
        time = self.read_line("Enter time (HH:MM): ")
        self.report(schedule_appointment(self.store, pid, did, date, time))

    def view_appointments(self) -> None:
        rows = appointments_flat(self.store)
        if not rows:
            self._print("No appointments scheduled.")
            return
        self._print("\n========== APPOINTMENTS ==========")
        for a in rows:
            self._print(f"Appointment ID: {a['id']}")
            self._print(f"Patient: {a['patient']} (ID: {a['patient_id']})")
            self._print(f"Doctor: {a['doctor']} (ID: {a['doctor_id']})")
            self._print(f"Date: {a['date']}\nTime: {a['time']}")
            self._print(SEPARATOR)

    def cancel(self) -> None:
        aid = self.read_int("\nEnter appointment ID to cancel: ")
        a = self.store.appointments.get(aid)
        if a is None:
            self.report(cancel_appointment(self.store, aid))
            return
        who = patient_name(self.store, a.patient_id)
        if self.confirm(f"Found appointment for {who}. Are you sure? (y/n): "):
            self.report(cancel_appointment(self.store, aid))
        else:
            self._print("Canceled.")

    # -------------------------
    # System
    # -------------------------
    def save(self) -> Outcome:
        outcome = save_store(self.store, self.data_file)
        self.report(outcome)
        return outcome

    def run(self) -> int:
        """Menu loop. Saves on exit (also on end of input); returns 1 if that save failed."""
        actions: dict[int, Callable[[], object]] = {
            1: self.add_patient,
            2: self.view_patients,
            3: self.search_by_id,
            4: self.search_by_name,
            5: self.delete_patient,
            6: self.sort_patients,
            7: self.add_doctor,
            8: self.view_doctors,
            9: self.add_disease,
            10: self.view_diseases,
            11: self.schedule,
            12: self.view_appointments,
            13: self.cancel,
            14: self.save,
        }
        try:
            while True:
                self._print(MENU)
                choice = self.read_int("\nEnter your choice: ")
                if choice == EXIT_CHOICE:
                    break
                action = actions.get(choice)
                if action is None:
                    self._print("Invalid choice. Try again.")
                    continue
                action()
        except EOFError:
            logger.info("End of input, exiting")

        outcome = self.save()
        self._print("Exiting. Goodbye!")
        return 0 if outcome.ok else 1


def run_menu(
    store: ClinicStore,
    data_file: str | Path,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
) -> int:
    return Shell(store, data_file, input_fn=input_fn, print_fn=print_fn).run()
