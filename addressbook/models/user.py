"""User domain model — login identity that owns contacts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from addressbook.models.columns import UserColumns


@dataclass
class User:
    """A registered account. ``password`` holds a passlib hash."""

    username: str
    password: str
    id: Optional[int] = None

    def to_values(self) -> dict[str, Any]:
        return {
            UserColumns.USERNAME: self.username,
            UserColumns.PASSWORD: self.password,
        }

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row.get(UserColumns.ID),
            username=row[UserColumns.USERNAME],
            password=row.get(UserColumns.PASSWORD, ""),
        )
