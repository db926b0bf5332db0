from __future__ import annotations

"""
UDBuildings Store – High-Level API
==================================

A single facade over the SQLite file that holds building locations. It owns
the connection between ``open()`` and ``close()`` and exposes:

    • Lifecycle (`open`, `close`, context manager)
    • First-run seeding from a flat file (see `udbuildings.store.seed`)
    • CRUD: `create_note`, `fetch_all_notes`, `fetch_note`, `update_note`,
      `delete_note`

Every one of code, name, latitude and longitude is unique on its own; writes
that would duplicate any of them raise `ConstraintViolation` and change
nothing.

Usage (quick):
    from udbuildings.config import load_settings
    from udbuildings.store import BuildingStore

    with BuildingStore(load_settings()) as store:
        rid = store.create_note("B7", "Library", "39.68", "-75.75")
        print(store.fetch_note(rid))

See also:
    udbuildings/store/schema.py   -> DDL + version-gated recreate
    udbuildings/store/seed.py     -> seed file reader
    udbuildings/store/records.py  -> BuildingRecord dataclass
"""

import sqlite3
import threading
from typing import TYPE_CHECKING, Iterable, List, Optional

from udbuildings.logging_utils import get_logger
from .errors import (
    ConstraintViolation,
    NotFound,
    SeedParseFailure,
    StorageUnavailable,
    StoreStateError,
)
from .records import BuildingRecord
from .schema import COLUMNS, SCHEMA_VERSION, TABLE_NAME, ensure_schema, get_schema_version
from .seed import FileSeedSource

if TYPE_CHECKING:
    from udbuildings.config import Settings

_SELECT = f"SELECT {', '.join(COLUMNS)} FROM {TABLE_NAME}"


def _is_unique_failure(exc: sqlite3.IntegrityError) -> bool:
    return str(exc).startswith("UNIQUE constraint failed")


def _constraint_violation(exc: sqlite3.IntegrityError) -> ConstraintViolation:
    """Translate e.g. ``UNIQUE constraint failed: buildings.code``."""
    message = str(exc)
    fields: List[str] = []
    if ":" in message:
        for part in message.split(":", 1)[1].split(","):
            column = part.strip().rsplit(".", 1)[-1]
            if column:
                fields.append(column)
    return ConstraintViolation(fields, message)


# ---------------------------------------------------------------------------
# Store Facade
# ---------------------------------------------------------------------------
class BuildingStore:
    """
    CRUD facade over the buildings table.

    Parameters
    ----------
    settings:
        UDBuildings Settings object (provides db_path, seed_path, etc.).
    seed_source:
        Iterable of :class:`BuildingRecord` used to fill an empty table.
        Defaults to a :class:`FileSeedSource` over ``settings.seed_path``.

    Notes
    -----
    * Closed until ``open()``; every CRUD call on a closed store raises
      :class:`StoreStateError`.
    * One connection per open store, guarded by an RLock.
    """

    def __init__(
        self,
        settings: "Settings",
        *,
        seed_source: Optional[Iterable[BuildingRecord]] = None,
    ) -> None:
        self.settings = settings
        self.db_path = settings.db_path
        self.expected_version = (
            settings.schema_version if settings.schema_version is not None else SCHEMA_VERSION
        )
        if seed_source is None:
            seed_source = FileSeedSource(settings.seed_path, encoding=settings.seed_encoding)
        self.seed_source = seed_source
        self.log = get_logger("udbuildings", log_dir=settings.log_dir, level=settings.log_level)

        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None
        self._opened_by_context = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _connect(self) -> sqlite3.Connection:
        """Open and return a sqlite3 connection."""
        try:
            return sqlite3.connect(self.db_path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise StorageUnavailable(f"Cannot open database {self.db_path}: {exc}") from exc

    def open(self) -> "BuildingStore":
        """Open the database, bring the schema up to date, seed if empty.

        Returns ``self`` so construction and opening can be chained. If any
        step fails the connection is closed again and the store stays closed.
        """
        with self._lock:
            if self._conn is not None:
                raise StoreStateError("Store is already open")

            conn = self._connect()
            try:
                try:
                    stored = get_schema_version(conn)
                    ensure_schema(conn, stored, self.expected_version)
                except sqlite3.Error as exc:
                    raise StorageUnavailable(f"Cannot prepare database {self.db_path}: {exc}") from exc

                self._conn = conn
                if self.count_notes() == 0:
                    self._seed()
            except BaseException:
                self._conn = None
                conn.close()
                raise

        self.log.info("Opened %s (schema version %d)", self.db_path, self.expected_version)
        return self

    def close(self) -> None:
        """Close the underlying sqlite connection."""
        with self._lock:
            if self._conn is None:
                raise StoreStateError("Store is not open")
            conn, self._conn = self._conn, None
            conn.close()
        self.log.info("Closed %s", self.db_path)

    def __enter__(self) -> "BuildingStore":
        # a store opened before the with-block stays open after it
        self._opened_by_context = not self.is_open
        if self._opened_by_context:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._opened_by_context and self.is_open:
            self.close()
        self._opened_by_context = False

    def _require_open(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreStateError("Store is not open; call open() first")
        return self._conn

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def _seed(self) -> None:
        """Insert every seed record in one transaction (all or nothing)."""
        conn = self._require_open()
        inserted = 0
        try:
            with conn:
                cur = conn.cursor()
                for record in self.seed_source:
                    self._insert(cur, *record.fields)
                    inserted += 1
        except (SeedParseFailure, ConstraintViolation) as exc:
            self.log.error("Seeding from %r aborted, nothing kept: %s", self.seed_source, exc)
            raise
        if inserted:
            self.log.info("Seeded %d buildings from %r", inserted, self.seed_source)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    @staticmethod
    def _insert(cur: sqlite3.Cursor, code: str, name: str, latitude: str, longitude: str) -> int:
        try:
            cur.execute(
                f"INSERT INTO {TABLE_NAME}(code, name, latitude, longitude) VALUES(?,?,?,?)",
                (code, name, latitude, longitude),
            )
        except sqlite3.IntegrityError as exc:
            if not _is_unique_failure(exc):
                raise
            raise _constraint_violation(exc) from exc
        return cur.lastrowid

    def create_note(self, code: str, name: str, latitude: str, longitude: str) -> int:
        """Insert a building and return its new id (always > 0)."""
        with self._lock:
            conn = self._require_open()
            with conn:
                return self._insert(conn.cursor(), code, name, latitude, longitude)

    def delete_note(self, identifier: int) -> bool:
        """Delete the building with ``identifier``; False if there was none."""
        with self._lock:
            conn = self._require_open()
            with conn:
                cur = conn.execute(f"DELETE FROM {TABLE_NAME} WHERE id=?", (identifier,))
            return cur.rowcount > 0

    def fetch_all_notes(self) -> List[BuildingRecord]:
        """Return every building in table order."""
        with self._lock:
            conn = self._require_open()
            rows = conn.execute(f"{_SELECT} ORDER BY id").fetchall()
        return [BuildingRecord(*row) for row in rows]

    def fetch_note(self, identifier: int) -> BuildingRecord:
        """Return the building with ``identifier`` or raise :class:`NotFound`."""
        with self._lock:
            conn = self._require_open()
            row = conn.execute(f"{_SELECT} WHERE id=?", (identifier,)).fetchone()
        if not row:
            raise NotFound(identifier)
        return BuildingRecord(*row)

    def update_note(self, identifier: int, code: str, name: str, latitude: str, longitude: str) -> bool:
        """Replace all four fields of a building; False if ``identifier`` is unknown."""
        with self._lock:
            conn = self._require_open()
            try:
                with conn:
                    cur = conn.execute(
                        f"UPDATE {TABLE_NAME} SET code=?, name=?, latitude=?, longitude=? WHERE id=?",
                        (code, name, latitude, longitude, identifier),
                    )
            except sqlite3.IntegrityError as exc:
                if not _is_unique_failure(exc):
                    raise
                raise _constraint_violation(exc) from exc
            return cur.rowcount > 0

    def count_notes(self) -> int:
        with self._lock:
            conn = self._require_open()
            (count,) = conn.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}").fetchone()
        return count
