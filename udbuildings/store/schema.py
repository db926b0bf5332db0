from __future__ import annotations

"""Schema bootstrap + version-gated upgrade for the buildings database.

There is no field-level migration path: when the expected version rises above
the stored one the ``buildings`` table is dropped and recreated empty.
"""

import logging
import sqlite3
from typing import Optional

from .errors import SchemaVersionError

log = logging.getLogger(__name__)

# Increment whenever the buildings table changes. Bumping it WIPES stored rows.
SCHEMA_VERSION = 3

TABLE_NAME = "buildings"
COLUMNS = ("id", "code", "name", "latitude", "longitude")

# -- DDL statements ---------------------------------------------------------
META_DDL = """
CREATE TABLE IF NOT EXISTS schema_meta (
    key TEXT PRIMARY KEY,
    value TEXT
);
"""

# Each coordinate column is unique on its own, not just per pair.
BUILDINGS_DDL = f"""
CREATE TABLE {TABLE_NAME} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    code TEXT UNIQUE,
    name TEXT UNIQUE,
    latitude TEXT UNIQUE,
    longitude TEXT UNIQUE
);
"""


def get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    """Return current schema version (int) or None if unreadable."""
    cur = conn.cursor()
    try:
        cur.execute("SELECT value FROM schema_meta WHERE key='version'")
        row = cur.fetchone()
        if row and row[0] is not None:
            return int(row[0])
    except (sqlite3.Error, ValueError):
        return None
    return None


def set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    """Stamp ``version`` into the metadata table (caller commits)."""
    conn.execute(
        "INSERT OR REPLACE INTO schema_meta(key, value) VALUES('version', ?)",
        (str(version),),
    )


def table_exists(conn: sqlite3.Connection) -> bool:
    row = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type='table' AND name=?",
        (TABLE_NAME,),
    ).fetchone()
    return row is not None


def ensure_schema(
    conn: sqlite3.Connection,
    current_version: Optional[int],
    expected_version: int = SCHEMA_VERSION,
) -> None:
    """Guarantee a ``buildings`` table matching ``expected_version`` exists.

    * no table            -> create it
    * stored < expected   -> DROP and recreate (all rows are lost)
    * stored == expected  -> nothing to do
    * stored > expected   -> :class:`SchemaVersionError`, nothing touched

    A database that was never stamped counts as version 0. Runs as a single
    transaction and stamps ``expected_version`` on success.
    """
    current = current_version or 0
    if current > expected_version:
        raise SchemaVersionError(current, expected_version)

    cur = conn.cursor()
    cur.execute("BEGIN")
    try:
        cur.execute(META_DDL)
        if not table_exists(conn):
            log.info("Creating %s table (schema version %d)", TABLE_NAME, expected_version)
            cur.execute(BUILDINGS_DDL)
        elif current < expected_version:
            (doomed,) = cur.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()
            log.warning(
                "Upgrading database from version %d to %d, which will destroy all old data "
                "(%d %s rows dropped)",
                current, expected_version, doomed, TABLE_NAME,
            )
            cur.execute(f"DROP TABLE IF EXISTS {TABLE_NAME}")
            cur.execute(BUILDINGS_DDL)
        if current != expected_version:
            set_schema_version(conn, expected_version)
        conn.commit()
    except BaseException:
        conn.rollback()
        raise
