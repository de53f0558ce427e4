"""Service layer — account and contact facades over the provider."""

from addressbook.services.account_service import AccountService, Hash
from addressbook.services.contact_service import ContactService

__all__ = ["AccountService", "ContactService", "Hash"]
