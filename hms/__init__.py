"""
HMS: clinic records manager (patients, doctors, disease reference, appointments).

Structure:
- models.py          : record dataclasses, field widths, Outcome / ErrorKind
- store.py           : in-memory tables with capacities and monotonic id counters
- services.py        : domain logic (intake, scheduling, search, sort, listings)
- db.py              : SQLAlchemy engine and sessions for the save file
- schema.py          : ORM schema of the save file
- persistence.py     : save/load of the whole store
- seed.py            : starter data (doctors, disease references)
- shell.py           : interactive terminal menu
- cli.py             : one-shot commands via argparse
- config.py          : settings from environment / .env
- logging_config.py  : file logging setup
"""
