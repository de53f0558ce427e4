"""Resource routing, change notification and the CRUD dispatcher."""

from addressbook.provider.cursor import QueryResult
from addressbook.provider.observers import ObserverRegistry
from addressbook.provider.provider import ALLOWED_KINDS, AddressBookProvider
from addressbook.provider.routing import ResourceKind, ResourceMatch, Route, RoutingTable

__all__ = [
    "AddressBookProvider", "ALLOWED_KINDS",
    "ObserverRegistry", "QueryResult",
    "ResourceKind", "ResourceMatch", "Route", "RoutingTable",
]
