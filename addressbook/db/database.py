"""SQLite store lifecycle and read/write connection handles."""

from __future__ import annotations

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional

from addressbook.config import DATABASE_VERSION, StoreConfig, get_store_config
from addressbook.db.schema import DROP_STATEMENTS, SCHEMA_STATEMENTS
from addressbook.errors import StorageInitError

logger = logging.getLogger(__name__)


class Database:
    """
    Owns one SQLite file: creates it, upgrades it and hands out connections.

    The file is opened in WAL mode. Writers share a single connection behind
    a lock, so writes are serialised. Every read opens its own connection and
    closes it when done, so reads run alongside each other and alongside the
    writer and only ever observe committed data.

    The schema version lives in ``PRAGMA user_version``. A stale store is
    upgraded destructively: both tables are dropped and recreated.
    """

    def __init__(
        self,
        path: Optional[Path | str] = None,
        version: int = DATABASE_VERSION,
        busy_timeout: float = 5.0,
    ):
        if path is None:
            self.path: Path = get_store_config().path
        else:
            self.path = Path(path)
        if str(self.path) == ":memory:":
            raise StorageInitError(self.path, "an in-memory store cannot be shared between handles")
        if version < 1:
            raise StorageInitError(self.path, f"invalid schema version {version}")
        self.version = version
        self.busy_timeout = busy_timeout

        self._write_lock = threading.RLock()
        self._writer: Optional[sqlite3.Connection] = None

    @classmethod
    def open(cls, config: StoreConfig) -> "Database":
        """Return a ready handle, creating or upgrading the store first."""
        db = cls(path=config.path, version=config.version, busy_timeout=config.busy_timeout)
        db.init()
        return db

    # -- connection lifecycle --------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.path), timeout=self.busy_timeout, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _write_connection(self) -> sqlite3.Connection:
        if self._writer is None:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = self._connect()
            try:
                conn.execute("PRAGMA journal_mode = WAL")
            except sqlite3.Error:
                conn.close()
                raise
            self._writer = conn
        return self._writer

    def open_reader(self) -> sqlite3.Connection:
        """A private read connection; the caller closes it.

        Long-lived cursors need one: an unfinished statement pins its
        connection to the snapshot it started on.
        """
        return self._connect()

    def close(self) -> None:
        with self._write_lock:
            if self._writer is not None:
                self._writer.close()
                self._writer = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -- schema lifecycle ------------------------------------------------------

    def init(self) -> None:
        """Create the store if absent, upgrade it if stale (idempotent)."""
        try:
            with self._write_lock:
                conn = self._write_connection()
                current = conn.execute("PRAGMA user_version").fetchone()[0]
                if current == 0:
                    logger.info(f"Creating store at {self.path} (version {self.version})")
                    self._rebuild(conn, drop_first=False)
                elif current < self.version:
                    logger.info(
                        f"Upgrading store at {self.path} from version {current} to {self.version}; "
                        "existing rows are discarded"
                    )
                    self._rebuild(conn, drop_first=True)
                elif current > self.version:
                    logger.warning(
                        f"Store at {self.path} is at version {current}, newer than {self.version}; "
                        "opening as is"
                    )
                else:
                    logger.debug(f"Using existing store at {self.path} (version {current})")
        except (sqlite3.Error, OSError) as exc:
            raise StorageInitError(self.path, str(exc)) from exc

    def _rebuild(self, conn: sqlite3.Connection, drop_first: bool) -> None:
        conn.execute("BEGIN IMMEDIATE")
        try:
            if drop_first:
                for statement in DROP_STATEMENTS:
                    conn.execute(statement)
            for statement in SCHEMA_STATEMENTS:
                conn.execute(statement)
            conn.execute(f"PRAGMA user_version = {int(self.version)}")
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    @property
    def stored_version(self) -> int:
        with self.acquire_for_read() as conn:
            return conn.execute("PRAGMA user_version").fetchone()[0]

    def table_names(self) -> set[str]:
        rows = self.fetchall(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
        )
        return {r["name"] for r in rows}

    # -- handle acquisition ----------------------------------------------------

    @contextmanager
    def acquire_for_write(self) -> Generator[sqlite3.Connection, None, None]:
        """Exclusive write handle: commits on success, rolls back on exception."""
        with self._write_lock:
            conn = self._write_connection()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    @contextmanager
    def acquire_for_read(self) -> Generator[sqlite3.Connection, None, None]:
        """Read handle for one short read; closed on exit."""
        conn = self.open_reader()
        try:
            yield conn
        finally:
            conn.close()

    # -- low-level query helpers -----------------------------------------------

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        with self.acquire_for_read() as conn:
            row = conn.execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        with self.acquire_for_read() as conn:
            rows = conn.execute(sql, params).fetchall()
        return [dict(r) for r in rows]


def open_store(config: Optional[StoreConfig] = None) -> Database:
    """Open the store described by ``config`` (defaults to the settings)."""
    return Database.open(config or get_store_config())
