"""Account service — registration and login on top of ``/users``.

Passwords are stored as passlib hashes, never as the text the user typed.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from passlib.context import CryptContext

from addressbook.errors import AuthenticationError, InsertFailedError, UsernameTakenError
from addressbook.models.columns import UserColumns
from addressbook.models.user import User
from addressbook.provider.provider import AddressBookProvider
from addressbook.session import Session

logger = logging.getLogger(__name__)

USERS_PATH = f"/{UserColumns.TABLE_NAME}"


class Hash:
    """Password hashing and verification."""

    pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(plain_password, hashed_password)

    def get_password_hash(self, password: str) -> str:
        return self.pwd_context.hash(password)


class AccountService:
    """Creates accounts and turns credentials into a ``Session``."""

    def __init__(self, provider: AddressBookProvider, hasher: Optional[Hash] = None):
        self._provider = provider
        self._hash = hasher or Hash()

    def find(self, username: str) -> Optional[User]:
        with self._provider.query(
            USERS_PATH,
            selection=f"{UserColumns.USERNAME} = ?",
            selection_args=(username,),
            sort_order=UserColumns.ID,
        ) as rows:
            row = rows.fetchone()
        return User.from_row(row) if row else None

    def register(self, username: str, password: str) -> User:
        """
        Create an account.

        :raises ValueError: if username or password is empty.
        :raises UsernameTakenError: if the username is already registered.
        """
        username = username.strip()
        if not username or not password:
            raise ValueError("username and password are required")
        if self.find(username) is not None:
            raise UsernameTakenError(username)

        user = User(username=username, password=self._hash.get_password_hash(password))
        try:
            new_path = self._provider.insert(USERS_PATH, user.to_values())
        except InsertFailedError as exc:
            # Lost a race with a concurrent registration of the same name.
            if isinstance(exc.__cause__, sqlite3.IntegrityError):
                raise UsernameTakenError(username) from exc
            raise
        user.id = int(new_path.rsplit("/", 1)[1])
        logger.info(f"Registered user {user.id}: {username}")
        return user

    def login(self, username: str, password: str) -> Session:
        """
        Check credentials and open a session.

        :raises AuthenticationError: on an unknown user or a wrong password.
        """
        user = self.find(username.strip())
        if user is None or not self._hash.verify_password(password, user.password):
            logger.info(f"Failed login for {username!r}")
            raise AuthenticationError()
        return Session(user_id=user.id, username=user.username)  # type: ignore[arg-type]
