"""Session context: who the current user is."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    """The signed-in user. Scopes every ``/contacts`` collection call."""
    user_id: int
    username: Optional[str] = None

    def __post_init__(self) -> None:
        if self.user_id <= 0:
            raise ValueError(f"user_id must be positive, got {self.user_id}")
