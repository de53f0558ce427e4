"""Contact domain model — one address-book entry owned by a user."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Optional

from addressbook.models.columns import ContactColumns


@dataclass
class Contact:
    """Address-book entry. Every field but ``name`` is optional."""

    name: str
    phone: Optional[str] = None
    mobile_phone: Optional[str] = None
    work_phone: Optional[str] = None
    email: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal_code: Optional[str] = None
    user_id: Optional[int] = None
    id: Optional[int] = None

    def to_values(self, include_owner: bool = True) -> dict[str, Any]:
        """Content values for an insert or update; never includes ``id``."""
        values = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != ContactColumns.ID
        }
        if not include_owner or self.user_id is None:
            values.pop(ContactColumns.USER_ID)
        return values

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Contact":
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})
