"""Building lookups and creation."""

import logging
import sqlite3

from accessors.errors import NotFoundError
from accessors.models import Building

logger = logging.getLogger(__name__)

_SELECT = "SELECT buildingID, name, shortName, description FROM Buildings"


def _row_to_building(row: sqlite3.Row) -> Building:
    return Building(
        id=row["buildingID"],
        name=row["name"],
        shortname=row["shortName"],
        description=row["description"],
    )


def _fetch_one(conn: sqlite3.Connection, clause: str, value: object, label: str) -> Building:
    row = conn.execute(f"{_SELECT} {clause}", (value,)).fetchone()  # noqa: S608
    if row is None:
        raise NotFoundError(f"No building found with {label} {value!r}")
    return _row_to_building(row)


def get_all_buildings(conn: sqlite3.Connection) -> list[Building]:
    """Return every building ordered by id."""
    rows = conn.execute(f"{_SELECT} ORDER BY buildingID").fetchall()  # noqa: S608
    return [_row_to_building(row) for row in rows]


def get_building_by_id(conn: sqlite3.Connection, building_id: int) -> Building:
    return _fetch_one(conn, "WHERE buildingID = ?", building_id, "id")


def get_building_by_name(conn: sqlite3.Connection, name: str) -> Building:
    return _fetch_one(conn, "WHERE name = ? ORDER BY buildingID", name, "name")


def get_building_by_shortname(conn: sqlite3.Connection, shortname: str) -> Building:
    return _fetch_one(conn, "WHERE shortName = ?", shortname, "shortname")


def lookup_building(conn: sqlite3.Connection, key: str) -> Building:
    """Resolve a building from an id, a shortname or a name, in that order."""
    if key.isdigit():
        return get_building_by_id(conn, int(key))
    try:
        return get_building_by_shortname(conn, key)
    except NotFoundError:
        return get_building_by_name(conn, key)


def make_building(
    conn: sqlite3.Connection,
    name: str,
    shortname: str,
    description: str | None = None,
) -> Building:
    """Insert a building and return it as re-read by name.

    There is no existence pre-check; a duplicate shortname fails on the
    UNIQUE constraint with ``sqlite3.IntegrityError``.
    """
    logger.info("Adding building %s (%s)", name, shortname)
    conn.execute(
        "INSERT INTO Buildings (name, shortName, description) VALUES (?, ?, ?)",
        (name, shortname, description),
    )
    conn.commit()
    return get_building_by_name(conn, name)
