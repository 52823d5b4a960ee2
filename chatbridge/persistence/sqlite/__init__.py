from __future__ import annotations

import sqlite3
from typing import Optional

from .engine import MEMORY_DB, create_connection, init_schema
from .repos import UnitOfWorkSqlite


def get_uow(db_path: Optional[str] = None) -> UnitOfWorkSqlite:
    """Open a connection, ensure the schema and wrap it in a Unit of Work."""
    conn: sqlite3.Connection = create_connection(db_path)
    init_schema(conn)
    return UnitOfWorkSqlite(conn)


__all__ = [
    "MEMORY_DB",
    "create_connection",
    "init_schema",
    "UnitOfWorkSqlite",
    "get_uow",
]
