"""Query results: lazy, forward-only rows that know when they go stale."""

from __future__ import annotations

import sqlite3
from typing import Any, Callable, Iterator, Optional

from addressbook.errors import StorageExecutionError
from addressbook.provider.observers import ObserverRegistry


class QueryResult:
    """
    Rows of one query, fetched from the store as they are consumed.

    Iteration is forward-only: rows already yielded are not replayed, and
    once the rows run out the underlying cursor is closed. When a mutation
    touches the watched path, ``stale`` flips to True and every listener
    added with ``add_listener`` is called with the changed path; re-run the
    query to see fresh data.
    """

    def __init__(
        self,
        cursor: sqlite3.Cursor,
        path: str,
        connection: Optional[sqlite3.Connection] = None,
    ):
        self._cursor: Optional[sqlite3.Cursor] = cursor
        # Closed together with the cursor when given.
        self._connection = connection
        self.path = path
        self.columns: tuple[str, ...] = tuple(d[0] for d in cursor.description or ())
        self._stale = False
        self._listeners: list[Callable[[str], Any]] = []
        self._registry: Optional[ObserverRegistry] = None

    # -- change tracking -------------------------------------------------------

    def set_notification_path(self, registry: ObserverRegistry, path: str) -> None:
        registry.register(path, self.on_change)
        self._registry = registry

    def on_change(self, path: str) -> None:
        self._stale = True
        for listener in list(self._listeners):
            listener(path)

    def add_listener(self, listener: Callable[[str], Any]) -> None:
        self._listeners.append(listener)

    @property
    def stale(self) -> bool:
        return self._stale

    # -- row access ------------------------------------------------------------

    def __iter__(self) -> Iterator[dict[str, Any]]:
        return self

    def __next__(self) -> dict[str, Any]:
        row = self.fetchone()
        if row is None:
            raise StopIteration
        return row

    def fetchone(self) -> Optional[dict[str, Any]]:
        if self._cursor is None:
            return None
        try:
            row = self._cursor.fetchone()
        except sqlite3.Error as exc:
            self.close()
            raise StorageExecutionError(f"Reading {self.path} failed: {exc}") from exc
        if row is None:
            self.close()
            return None
        return dict(row)

    def fetchall(self) -> list[dict[str, Any]]:
        return list(self)

    @property
    def closed(self) -> bool:
        return self._cursor is None

    def close(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def unregister(self) -> None:
        """Stop watching for changes."""
        if self._registry is not None:
            self._registry.unregister(self.on_change)
            self._registry = None

    def __enter__(self) -> "QueryResult":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
        self.unregister()
