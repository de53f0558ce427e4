#!/usr/bin/env python3
"""Create or upgrade the store and optionally seed it with data from a YAML file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from addressbook.config import StoreConfig, get_store_config
from addressbook.db.database import Database
from addressbook.errors import AddressBookError
from addressbook.logging_setup import configure_logging
from addressbook.models.contact import Contact
from addressbook.provider.provider import AddressBookProvider
from addressbook.services.account_service import AccountService
from addressbook.services.contact_service import ContactService


def main():
    parser = argparse.ArgumentParser(description="Initialize the address book store")
    parser.add_argument("--db-path", type=str, help="Override database path")
    parser.add_argument("--version", type=int, help="Override schema version")
    parser.add_argument("--seed-file", type=str, help="YAML file with users and their contacts")
    args = parser.parse_args()

    configure_logging()
    defaults = get_store_config()
    config = StoreConfig(
        path=Path(args.db_path) if args.db_path else defaults.path,
        version=args.version or defaults.version,
        busy_timeout=defaults.busy_timeout,
    )

    db = Database.open(config)
    print(f"Store ready at: {db.path} (version {db.stored_version})")

    if args.seed_file:
        _seed(db, Path(args.seed_file))

    db.close()
    print("Done.")


def _seed(db: Database, path: Path):
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    provider = AddressBookProvider(db)
    accounts = AccountService(provider)
    contacts = ContactService(provider)
    for u in data.get("users", []):
        try:
            accounts.register(u["username"], u["password"])
            session = accounts.login(u["username"], u["password"])
            print(f"  Created user: {u['username']}")
        except (AddressBookError, KeyError, ValueError) as e:
            print(f"  Skipping user {u.get('username', '?')}: {e}")
            continue
        for c in u.get("contacts", []):
            try:
                contact = contacts.add(session, Contact(**c))
                print(f"    Added contact {contact.id}: {contact.name}")
            except (AddressBookError, TypeError) as e:
                print(f"    Skipping contact {c.get('name', '?')}: {e}")


if __name__ == "__main__":
    main()
