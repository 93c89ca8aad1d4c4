"""Request-scoped database access for the HTTP layer."""

import sqlite3
from collections.abc import Generator

from db.client import get_connection

_db_path: str = ""


def set_db_path(path: str) -> None:
    """Point every later request at the SQLite file ``path``."""
    global _db_path  # noqa: PLW0603
    _db_path = path


def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Open a connection for one request and close it when the response is done."""
    conn = get_connection(_db_path)
    try:
        yield conn
    finally:
        conn.close()
