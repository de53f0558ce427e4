"""Shared helpers: every test gets its own store in a temporary directory."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from addressbook.db.database import Database
from addressbook.provider.provider import AddressBookProvider
from addressbook.session import Session


class Recorder:
    """Observer that remembers every path it was told about."""

    def __init__(self) -> None:
        self.paths: list[str] = []

    def on_change(self, path: str) -> None:
        self.paths.append(path)


class StoreTestCase:
    """Mixin: ``self.db`` / ``self.provider`` on a fresh store per test."""

    version = 1

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.db_path = self.tmpdir / "AddressBook.db"
        self.db = Database(path=self.db_path, version=self.version)
        self.db.init()
        self.provider = AddressBookProvider(self.db)

    def tearDown(self):
        self.db.close()
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def add_user(self, username: str = "alice", password: str = "secret") -> Session:
        new_path = self.provider.insert("/users", {"username": username, "password": password})
        return Session(user_id=int(new_path.rsplit("/", 1)[1]), username=username)

    def add_contact(self, session: Session, name: str = "Bob Martin", **values) -> str:
        return self.provider.insert("/contacts", {"name": name, **values}, session=session)
