"""Contact service — typed contact operations for one signed-in user."""

from __future__ import annotations

from typing import Any, Optional

from addressbook.models.columns import ContactColumns, build_contact_path
from addressbook.models.contact import Contact
from addressbook.provider.provider import AddressBookProvider
from addressbook.session import Session

CONTACTS_PATH = f"/{ContactColumns.TABLE_NAME}"
_OWNED_BY = f"{ContactColumns.USER_ID} = ?"


class ContactService:
    """
    Facade over ``/contacts`` for list, detail and add/edit screens.

    Single-contact calls are additionally restricted to the session user's
    rows, so one user can never read or change another user's contact by id.
    """

    def __init__(self, provider: AddressBookProvider):
        self._provider = provider

    def add(self, session: Session, contact: Contact) -> Contact:
        new_path = self._provider.insert(CONTACTS_PATH, contact.to_values(), session=session)
        contact.id = int(new_path.rsplit("/", 1)[1])
        contact.user_id = session.user_id
        return contact

    def get(self, session: Session, contact_id: int) -> Optional[Contact]:
        with self._provider.query(
            build_contact_path(contact_id),
            selection=_OWNED_BY,
            selection_args=(session.user_id,),
        ) as rows:
            row = rows.fetchone()
        return Contact.from_row(row) if row else None

    def list_all(self, session: Session, order_by: str = ContactColumns.NAME) -> list[Contact]:
        with self._provider.query(CONTACTS_PATH, sort_order=order_by, session=session) as rows:
            return [Contact.from_row(r) for r in rows]

    def edit(self, session: Session, contact_id: int, **fields: Any) -> int:
        """Change the given fields; returns 0 if the contact is not the user's."""
        fields.pop(ContactColumns.ID, None)
        fields.pop(ContactColumns.USER_ID, None)
        if not fields:
            return 0
        return self._provider.update(
            build_contact_path(contact_id),
            fields,
            selection=_OWNED_BY,
            selection_args=(session.user_id,),
        )

    def remove(self, session: Session, contact_id: int) -> int:
        return self._provider.delete(
            build_contact_path(contact_id),
            selection=_OWNED_BY,
            selection_args=(session.user_id,),
        )
