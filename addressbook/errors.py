"""Exception hierarchy for the address book store.

Nothing here is recovered from locally: every error propagates to the
caller, which decides how to present it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AddressBookError(Exception):
    """Base class for every error raised by the store."""


class UnsupportedResourceError(AddressBookError):
    """The resource path matched no route."""

    def __init__(self, path: str):
        super().__init__(f"Unsupported resource: {path}")
        self.path = path


class OperationNotAllowedError(AddressBookError):
    """The operation is not permitted on the matched resource kind."""

    def __init__(self, operation: str, path: str, kind: Optional[str] = None, reason: Optional[str] = None):
        message = f"Unsupported operation '{operation}' for resource: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.kind = kind


class NoActiveSessionError(AddressBookError):
    """A contacts-collection call was made without a session."""

    def __init__(self, path: str):
        super().__init__(f"No active session for resource: {path}")
        self.path = path


class InsertFailedError(AddressBookError):
    """The store did not produce a row id for an insert."""

    def __init__(self, path: str, detail: Optional[str] = None):
        message = f"Insert failed: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.path = path


class StorageInitError(AddressBookError):
    """The store could not be opened, created or upgraded."""

    def __init__(self, path: Path | str, detail: str):
        super().__init__(f"Cannot initialise store at {path}: {detail}")
        self.path = Path(path)


class StorageExecutionError(AddressBookError):
    """Any other store failure during query, update or delete."""


class AccountError(AddressBookError):
    """Account registration or login was refused."""


class UsernameTakenError(AccountError):
    def __init__(self, username: str):
        super().__init__(f"Username already registered: {username}")
        self.username = username


class AuthenticationError(AccountError):
    """Unknown username or wrong password."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")
