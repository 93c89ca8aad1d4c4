"""Database connection helpers for av-config.

Every connection enables WAL mode and foreign keys. Multi-step writes go
through ``transaction()`` so a failure part-way leaves no partial rows behind.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """Create a new SQLite connection with WAL mode and foreign keys enabled."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    # FastAPI may open the connection and run the handler on different
    # threadpool workers; each connection is still used by one request only.
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Commit everything written inside the block, or roll all of it back.

    Any exception raised inside the block is re-raised after the rollback.
    """
    try:
        yield conn
    except BaseException:
        logger.warning("Rolling back transaction")
        conn.rollback()
        raise
    conn.commit()
