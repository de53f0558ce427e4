"""Resource paths and the table that classifies them.

A routing table is built explicitly and handed to the provider, so tests can
use alternative path schemes without touching module state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from addressbook.errors import UnsupportedResourceError
from addressbook.models.columns import ContactColumns, UserColumns

NUMBER = "#"
MAX_ROW_ID = 2 ** 63 - 1


class ResourceKind(str, Enum):
    ONE_CONTACT = "one_contact"
    CONTACTS = "contacts"
    USERS = "users"


@dataclass(frozen=True)
class Route:
    """``pattern`` is a tuple of literal segments; ``#`` matches a non-negative integer."""
    pattern: tuple[str, ...]
    kind: ResourceKind
    table: str

    def match(self, segments: tuple[str, ...]) -> Optional[int]:
        """Return -1 on a match without an id, the id on a match with one, None otherwise."""
        if len(segments) != len(self.pattern):
            return None
        instance_id = -1
        for expected, actual in zip(self.pattern, segments):
            if expected == NUMBER:
                if not actual.isascii() or not actual.isdigit():
                    return None
                instance_id = int(actual)
                if instance_id > MAX_ROW_ID:
                    return None
            elif expected != actual:
                return None
        return instance_id

    def canonical_path(self, instance_id: int) -> str:
        """The path with the id written without leading zeros."""
        parts = [str(instance_id) if s == NUMBER else s for s in self.pattern]
        return "/" + "/".join(parts)


@dataclass(frozen=True)
class ResourceMatch:
    kind: ResourceKind
    path: str
    table: str
    instance_id: Optional[int] = None


def split_path(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in path.split("/") if segment)


class RoutingTable:
    """Ordered, immutable list of routes; the first match wins."""

    def __init__(self, routes: Iterable[Route]):
        self._routes: tuple[Route, ...] = tuple(routes)
        if not self._routes:
            raise ValueError("a routing table needs at least one route")

    @classmethod
    def default(
        cls,
        contacts: str = ContactColumns.TABLE_NAME,
        users: str = UserColumns.TABLE_NAME,
    ) -> "RoutingTable":
        return cls([
            Route((contacts, NUMBER), ResourceKind.ONE_CONTACT, ContactColumns.TABLE_NAME),
            Route((contacts,), ResourceKind.CONTACTS, ContactColumns.TABLE_NAME),
            Route((users,), ResourceKind.USERS, UserColumns.TABLE_NAME),
        ])

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._routes

    def classify(self, path: str) -> ResourceMatch:
        segments = split_path(path or "")
        for route in self._routes:
            found = route.match(segments)
            if found is None:
                continue
            return ResourceMatch(
                kind=route.kind,
                path=route.canonical_path(found),
                table=route.table,
                instance_id=found if found >= 0 else None,
            )
        raise UnsupportedResourceError(path)

    def collection_path(self, kind: ResourceKind) -> str:
        """Path of the collection ``kind`` lives in (``/contacts`` for one contact)."""
        for route in self._routes:
            if route.kind == kind:
                literal = [s for s in route.pattern if s != NUMBER]
                return "/" + "/".join(literal)
        raise KeyError(kind)
