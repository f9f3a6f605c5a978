from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.orm import DeclarativeBase, Session


class Base(DeclarativeBase):
    """ORM base for the save-file schema."""
    pass


def sqlite_url(path: str | Path) -> URL:
    # built from parts: '?' and '%' in file names stay literal
    return URL.create("sqlite", database=str(Path(path)))


def make_engine(path: str | Path, echo: bool = False) -> Engine:
    """SQLite engine on the given save file (created on first write)."""
    return create_engine(sqlite_url(path), echo=echo, future=True)


@contextmanager
def save_file_session(path: str | Path, create: bool = False) -> Iterator[Session]:
    """
    One transaction on one save file, engine included.
    - create=True builds the schema first (write path)
    - commits when the block succeeds, rolls back otherwise
    - the engine is always disposed, releasing the file
    """
    engine = make_engine(path)
    try:
        if create:
            Base.metadata.create_all(bind=engine)
        with Session(engine, expire_on_commit=False) as session, session.begin():
            yield session
    finally:
        engine.dispose()
