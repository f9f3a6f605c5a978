from __future__ import annotations

import logging
import os
from contextlib import suppress
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .db import save_file_session
from .models import ErrorKind, Outcome
from .schema import RECORD_ROWS, StoreHeader
from .store import ClinicStore

logger = logging.getLogger(__name__)

# OverflowError / ValueError: values sqlite3 cannot bind (e.g. ints wider than 64 bits)
WRITE_ERRORS = (OSError, SQLAlchemyError, OverflowError, ValueError)


def save_store(store: ClinicStore, path: str | Path) -> Outcome:
    """
    Write the whole store to `path`, replacing any previous save file.
    Order: header (counts, then next ids), then patients, diseases, doctors, appointments.
    """
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    tables = store.tables()
    header = [len(t) for t in tables] + [t.next_id for t in tables]

    try:
        tmp.unlink(missing_ok=True)
        with save_file_session(tmp, create=True) as s:
            s.add(StoreHeader(slot=0, **dict(zip(StoreHeader.FIELDS, header))))
            for table, row_cls in zip(tables, RECORD_ROWS):
                s.add_all(row_cls.from_record(slot, rec) for slot, rec in enumerate(table))
        os.replace(tmp, path)
    except WRITE_ERRORS as e:
        logger.error("Could not write save file %s: %s", path, e)
        with suppress(OSError):
            tmp.unlink(missing_ok=True)
        return Outcome(False, ErrorKind.IO_FAILURE, message=f"Error: could not write save file {path}.")

    logger.info("Saved %s to %s", store.counts(), path)
    return Outcome(True, message="Data saved successfully.")


def read_header(path: str | Path) -> tuple[int, ...] | None:
    """The eight header integers of a save file, or None if it is missing or unreadable."""
    path = Path(path)
    if not path.exists():
        return None

    try:
        with save_file_session(path) as s:
            return s.scalars(select(StoreHeader)).one().values()
    except SQLAlchemyError as e:
        logger.warning("Could not read header of %s: %s", path, e)
        return None


def load_store(path: str | Path) -> ClinicStore:
    """
    Read a store saved by save_store.
    - missing file: empty database, not an error
    - unreadable file: logged, treated as no prior data
    """
    path = Path(path)
    if not path.exists():
        logger.info("No save file at %s, starting new database", path)
        return ClinicStore()

    store = ClinicStore()
    tables = store.tables()
    try:
        with save_file_session(path) as s:
            header = s.scalars(select(StoreHeader)).one().values()
            counts, next_ids = header[:4], header[4:]

            for table, next_id in zip(tables, next_ids):
                table.next_id = next_id

            for table, row_cls, count in zip(tables, RECORD_ROWS, counts):
                if count <= 0:
                    continue
                rows = s.scalars(select(row_cls).order_by(row_cls.slot).limit(count))
                table.rows = [row.to_record() for row in rows]
    except SQLAlchemyError as e:
        logger.warning("Could not read save file %s (%s), starting new database", path, e)
        return ClinicStore()

    logger.info("Loaded %s from %s", store.counts(), path)
    return store
