"""Address book store — SQLite persistence with resource-addressed CRUD."""

from addressbook.config import Settings, StoreConfig, get_settings, get_store_config
from addressbook.db.database import Database, open_store
from addressbook.errors import (
    AccountError,
    AddressBookError,
    AuthenticationError,
    InsertFailedError,
    NoActiveSessionError,
    OperationNotAllowedError,
    StorageExecutionError,
    StorageInitError,
    UnsupportedResourceError,
    UsernameTakenError,
)
from addressbook.models import Contact, ContactColumns, User, UserColumns
from addressbook.provider import AddressBookProvider, ObserverRegistry, QueryResult, RoutingTable
from addressbook.session import Session

__version__ = "1.0.0"

__all__ = [
    "Settings", "StoreConfig", "get_settings", "get_store_config",
    "Database", "open_store",
    "AddressBookProvider", "ObserverRegistry", "QueryResult", "RoutingTable",
    "Session",
    "User", "UserColumns", "Contact", "ContactColumns",
    "AddressBookError", "UnsupportedResourceError", "OperationNotAllowedError",
    "NoActiveSessionError", "InsertFailedError", "StorageInitError",
    "StorageExecutionError", "AccountError", "UsernameTakenError", "AuthenticationError",
]
