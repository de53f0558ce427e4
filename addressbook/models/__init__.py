"""Domain models for the address book."""

from addressbook.models.columns import (
    ContactColumns,
    UserColumns,
    build_contact_path,
)
from addressbook.models.contact import Contact
from addressbook.models.user import User

__all__ = [
    "User", "UserColumns",
    "Contact", "ContactColumns", "build_contact_path",
]
