"""Resource-addressed CRUD over the address book store.

``/users``, ``/contacts`` and ``/contacts/{id}`` are mapped to the two
tables; every operation is checked against the kind of resource it
addresses before any SQL is built. Ids and caller arguments are always
bound as parameters.
"""

from __future__ import annotations

import logging
import re
import sqlite3
from typing import Any, Mapping, Optional, Sequence

from addressbook.db.database import Database
from addressbook.db.schema import TABLE_COLUMNS
from addressbook.errors import (
    InsertFailedError,
    NoActiveSessionError,
    OperationNotAllowedError,
    StorageExecutionError,
)
from addressbook.models.columns import ContactColumns
from addressbook.provider.cursor import QueryResult
from addressbook.provider.observers import ObserverRegistry
from addressbook.provider.routing import ResourceKind, ResourceMatch, RoutingTable
from addressbook.session import Session

logger = logging.getLogger(__name__)

QUERY = "query"
INSERT = "insert"
UPDATE = "update"
DELETE = "delete"

ALLOWED_KINDS: dict[str, frozenset[ResourceKind]] = {
    QUERY: frozenset({ResourceKind.ONE_CONTACT, ResourceKind.CONTACTS, ResourceKind.USERS}),
    INSERT: frozenset({ResourceKind.CONTACTS, ResourceKind.USERS}),
    # Mutations never address a whole collection.
    UPDATE: frozenset({ResourceKind.ONE_CONTACT}),
    DELETE: frozenset({ResourceKind.ONE_CONTACT}),
}

_SORT_TERM = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)(?:\s+(ASC|DESC))?\s*$", re.IGNORECASE)


class AddressBookProvider:
    """
    CRUD dispatcher for the address book.

    Dependencies are injected so tests can swap the routing table or observe
    notifications directly.
    """

    def __init__(
        self,
        db: Database,
        routes: Optional[RoutingTable] = None,
        observers: Optional[ObserverRegistry] = None,
    ):
        self._db = db
        self._routes = routes or RoutingTable.default()
        self._observers = observers if observers is not None else ObserverRegistry()

    @property
    def observers(self) -> ObserverRegistry:
        return self._observers

    @property
    def routes(self) -> RoutingTable:
        return self._routes

    # -- Query -----------------------------------------------------------------

    def query(
        self,
        path: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Sequence[Any] = (),
        sort_order: Optional[str] = None,
        session: Optional[Session] = None,
    ) -> QueryResult:
        match = self._resolve(QUERY, path)
        columns = TABLE_COLUMNS[match.table]

        clauses: list[str] = []
        params: list[Any] = []
        if match.kind == ResourceKind.ONE_CONTACT:
            clauses.append(f"{ContactColumns.ID} = ?")
            params.append(match.instance_id)
        elif match.kind == ResourceKind.CONTACTS:
            clauses.append(f"{ContactColumns.USER_ID} = ?")
            params.append(self._require_session(match, session).user_id)
        if selection:
            clauses.append(f"({selection})")
        params.extend(selection_args)

        select = ", ".join(self._check_columns(projection, columns)) if projection else "*"
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        order = f" ORDER BY {self._check_sort_order(sort_order, columns)}" if sort_order else ""
        sql = f"SELECT {select} FROM {match.table}{where}{order}"

        conn = self._db.open_reader()
        try:
            cursor = conn.execute(sql, tuple(params))
        except sqlite3.Error as exc:
            conn.close()
            logger.warning(f"Query on {match.path} failed: {exc}")
            raise StorageExecutionError(f"Query on {match.path} failed: {exc}") from exc

        result = QueryResult(cursor, match.path, connection=conn)
        result.set_notification_path(self._observers, match.path)
        return result

    # -- Insert ----------------------------------------------------------------

    def insert(
        self,
        path: str,
        values: Optional[Mapping[str, Any]] = None,
        session: Optional[Session] = None,
    ) -> str:
        """Insert one row; returns the path of the new row."""
        match = self._resolve(INSERT, path)
        values = dict(values or {})

        if match.kind == ResourceKind.CONTACTS:
            user_id = self._require_session(match, session).user_id
            owner = values.get(ContactColumns.USER_ID)
            if owner is None:
                values[ContactColumns.USER_ID] = user_id
            elif owner != user_id:
                raise OperationNotAllowedError(
                    INSERT, match.path, match.kind.value,
                    reason="contact owner differs from the session user",
                )

        unknown = set(values) - set(TABLE_COLUMNS[match.table])
        if unknown:
            raise InsertFailedError(match.path, f"unknown columns: {', '.join(sorted(unknown))}")

        if values:
            names = ", ".join(values)
            marks = ", ".join("?" for _ in values)
            sql = f"INSERT INTO {match.table} ({names}) VALUES ({marks})"
        else:
            sql = f"INSERT INTO {match.table} DEFAULT VALUES"

        try:
            with self._db.acquire_for_write() as conn:
                row_id = conn.execute(sql, tuple(values.values())).lastrowid
                if not row_id or row_id <= 0:
                    raise InsertFailedError(match.path)
        except sqlite3.Error as exc:
            logger.warning(f"Insert into {match.path} failed: {exc}")
            raise InsertFailedError(match.path, str(exc)) from exc

        new_path = f"{match.path}/{row_id}"
        logger.debug(f"Inserted {new_path}")
        self._observers.notify_change(match.path)
        return new_path

    # -- Update ----------------------------------------------------------------

    def update(
        self,
        path: str,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        """Update the addressed row; returns the number of rows changed."""
        match = self._resolve(UPDATE, path)
        if not values:
            raise StorageExecutionError(f"Update of {match.path} has no values")
        names = self._check_columns(list(values), TABLE_COLUMNS[match.table])

        where, params = self._row_filter(match, selection, selection_args)
        assignments = ", ".join(f"{name} = ?" for name in names)
        sql = f"UPDATE {match.table} SET {assignments} WHERE {where}"
        count = self._execute_write(match, sql, tuple(values.values()) + params)

        logger.debug(f"Updated {count} row(s) at {match.path}")
        if count > 0:
            self._observers.notify_change(match.path)
        return count

    # -- Delete ----------------------------------------------------------------

    def delete(
        self,
        path: str,
        selection: Optional[str] = None,
        selection_args: Sequence[Any] = (),
    ) -> int:
        """Delete the addressed row; returns the number of rows removed."""
        match = self._resolve(DELETE, path)
        where, params = self._row_filter(match, selection, selection_args)
        count = self._execute_write(match, f"DELETE FROM {match.table} WHERE {where}", params)

        logger.debug(f"Deleted {count} row(s) at {match.path}")
        if count > 0:
            self._observers.notify_change(match.path)
        return count

    # -- internal --------------------------------------------------------------

    def _resolve(self, operation: str, path: str) -> ResourceMatch:
        match = self._routes.classify(path)
        if match.kind not in ALLOWED_KINDS[operation]:
            logger.warning(f"Refused {operation} on {match.path} ({match.kind.value})")
            raise OperationNotAllowedError(operation, match.path, match.kind.value)
        return match

    @staticmethod
    def _require_session(match: ResourceMatch, session: Optional[Session]) -> Session:
        if session is None:
            raise NoActiveSessionError(match.path)
        return session

    @staticmethod
    def _row_filter(
        match: ResourceMatch, selection: Optional[str], selection_args: Sequence[Any]
    ) -> tuple[str, tuple[Any, ...]]:
        where = f"{ContactColumns.ID} = ?"
        if selection:
            where = f"{where} AND ({selection})"
        return where, (match.instance_id, *selection_args)

    def _execute_write(self, match: ResourceMatch, sql: str, params: tuple[Any, ...]) -> int:
        try:
            with self._db.acquire_for_write() as conn:
                return conn.execute(sql, params).rowcount
        except sqlite3.Error as exc:
            logger.warning(f"Write to {match.path} failed: {exc}")
            raise StorageExecutionError(f"Write to {match.path} failed: {exc}") from exc

    @staticmethod
    def _check_columns(names: Sequence[str], columns: Sequence[str]) -> list[str]:
        unknown = [n for n in names if n not in columns]
        if unknown:
            raise StorageExecutionError(f"Unknown columns: {', '.join(unknown)}")
        return list(names)

    @staticmethod
    def _check_sort_order(sort_order: str, columns: Sequence[str]) -> str:
        terms = []
        for term in sort_order.split(","):
            found = _SORT_TERM.match(term)
            if not found or found.group(1) not in columns:
                raise StorageExecutionError(f"Invalid sort order: {sort_order!r}")
            direction = (found.group(2) or "ASC").upper()
            terms.append(f"{found.group(1)} {direction}")
        return ", ".join(terms)
