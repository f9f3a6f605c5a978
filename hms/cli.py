from __future__ import annotations

import argparse
from pathlib import Path

from . import config
from .logging_config import setup_logging
from .models import Outcome
from .persistence import load_store, read_header, save_store
from .schema import StoreHeader
from .seed import seed_base
from .services import (
    add_disease,
    add_doctor,
    add_patient,
    appointments_flat,
    cancel_appointment,
    delete_patient,
    diseases_flat,
    doctors_flat,
    patients_flat,
    schedule_appointment,
    search_patient_by_id,
    search_patient_by_name,
    sort_patients_by_name,
)
from .shell import parse_int, run_menu
from .store import ClinicStore


def int32(text: str) -> int:
    """argparse type: the same integers the interactive prompts accept."""
    value, error = parse_int(text)
    if value is None:
        raise argparse.ArgumentTypeError(error)
    return value


def _finish(outcome: Outcome, store: ClinicStore, data_file: Path) -> int:
    """Print the outcome; on success persist the change."""
    print(outcome.message)
    if not outcome.ok:
        return 1
    saved = save_store(store, data_file)
    if not saved.ok:
        print(saved.message)
        return 1
    return 0


def cmd_menu(args: argparse.Namespace) -> int:
    return run_menu(load_store(args.data_file), args.data_file)


def cmd_list(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    if args.entity == "patients":
        for p in patients_flat(store):
            print(f"{p['id']} | {p['name']} | {p['age']} | {p['gender']} | {p['disease']} | {p['doctor']}")
    elif args.entity == "doctors":
        for d in doctors_flat(store):
            print(f"{d['id']} | {d['name']} | {d['specialization']} | {d['phone'] or '-'}")
    elif args.entity == "diseases":
        for d in diseases_flat(store):
            print(f"{d['id']} | {d['name']} | {d['symptoms']} | {d['treatment']}")
    elif args.entity == "appointments":
        for a in appointments_flat(store):
            print(f"{a['id']} | {a['date']} {a['time']} | {a['patient']} ({a['patient_id']}) | {a['doctor']} ({a['doctor_id']})")
    return 0


def cmd_add_patient(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    outcome = add_patient(store, args.name, args.age, args.gender, args.phone, args.disease, args.doctor_id)
    return _finish(outcome, store, args.data_file)


def cmd_add_doctor(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    outcome = add_doctor(store, args.name, args.specialization, args.phone)
    return _finish(outcome, store, args.data_file)


def cmd_add_disease(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    outcome = add_disease(store, args.name, args.symptoms, args.treatment)
    return _finish(outcome, store, args.data_file)


def cmd_book(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    outcome = schedule_appointment(store, args.patient_id, args.doctor_id, args.date, args.time)
    return _finish(outcome, store, args.data_file)


def cmd_cancel(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    return _finish(cancel_appointment(store, args.appointment_id), store, args.data_file)


def cmd_delete_patient(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    return _finish(delete_patient(store, args.patient_id), store, args.data_file)


def cmd_search(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    if args.id is not None:
        outcome = search_patient_by_id(store, args.id)
    else:
        outcome = search_patient_by_name(store, args.name)

    print(outcome.message)
    for p in outcome.records:
        print(f"ID: {p.id} | Name: {p.name} | Disease: {p.disease}")
    return 0 if outcome.ok else 1


def cmd_sort(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    return _finish(sort_patients_by_name(store), store, args.data_file)


def cmd_seed(args: argparse.Namespace) -> int:
    store = load_store(args.data_file)
    added = seed_base(store)
    failed = [o for o in added if not o.ok]
    for o in failed:
        print(o.message)
    outcome = save_store(store, args.data_file)
    print(f"Seed completed: {len(added) - len(failed)} record(s) added.")
    if not outcome.ok:
        print(outcome.message)
    return 0 if outcome.ok and not failed else 1


def cmd_info(args: argparse.Namespace) -> int:
    print("DATA FILE :", Path(args.data_file).resolve())
    header = read_header(args.data_file)
    if header is None:
        print("No readable save file.")
        return 0
    for name, value in zip(StoreHeader.FIELDS, header):
        print(f"{name:<20}: {value}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hms", description="Clinic records manager")
    p.add_argument("--data-file", type=Path, default=config.DATA_FILE, help="Save file (SQLite)")
    p.set_defaults(func=cmd_menu)
    sub = p.add_subparsers()

    p_menu = sub.add_parser("menu", help="Interactive menu (default)")
    p_menu.set_defaults(func=cmd_menu)

    p_list = sub.add_parser("list", help="List entities")
    p_list.add_argument("entity", choices=["patients", "doctors", "diseases", "appointments"])
    p_list.set_defaults(func=cmd_list)

    p_addp = sub.add_parser("add-patient", help="Patient intake")
    p_addp.add_argument("--name", required=True)
    p_addp.add_argument("--age", type=int32, required=True)
    p_addp.add_argument("--gender", required=True)
    p_addp.add_argument("--phone", required=True)
    p_addp.add_argument("--disease", required=True)
    p_addp.add_argument("--doctor-id", type=int32, default=0, help="Primary doctor (0 = none)")
    p_addp.set_defaults(func=cmd_add_patient)

    p_addd = sub.add_parser("add-doctor", help="Register a doctor")
    p_addd.add_argument("--name", required=True)
    p_addd.add_argument("--specialization", required=True)
    p_addd.add_argument("--phone", default="")
    p_addd.set_defaults(func=cmd_add_doctor)

    p_dis = sub.add_parser("add-disease", help="Add a disease reference")
    p_dis.add_argument("--name", required=True)
    p_dis.add_argument("--symptoms", default="")
    p_dis.add_argument("--treatment", default="")
    p_dis.set_defaults(func=cmd_add_disease)

    p_book = sub.add_parser("book", help="Schedule an appointment")
    p_book.add_argument("--patient-id", type=int32, required=True)
    p_book.add_argument("--doctor-id", type=int32, required=True)
    p_book.add_argument("--date", required=True, help="YYYY-MM-DD")
    p_book.add_argument("--time", required=True, help="HH:MM")
    p_book.set_defaults(func=cmd_book)

    p_cancel = sub.add_parser("cancel", help="Cancel an appointment")
    p_cancel.add_argument("--appointment-id", type=int32, required=True)
    p_cancel.set_defaults(func=cmd_cancel)

    p_del = sub.add_parser("delete-patient", help="Delete a patient")
    p_del.add_argument("--patient-id", type=int32, required=True)
    p_del.set_defaults(func=cmd_delete_patient)

    p_search = sub.add_parser("search", help="Search patients by id or name")
    group = p_search.add_mutually_exclusive_group(required=True)
    group.add_argument("--id", type=int32)
    group.add_argument("--name")
    p_search.set_defaults(func=cmd_search)

    p_sort = sub.add_parser("sort", help="Sort patients by name")
    p_sort.set_defaults(func=cmd_sort)

    p_seed = sub.add_parser("seed", help="Add starter doctors and disease references")
    p_seed.set_defaults(func=cmd_seed)

    p_info = sub.add_parser("info", help="Show save file path and header")
    p_info.set_defaults(func=cmd_info)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging()
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
