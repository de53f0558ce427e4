#!/usr/bin/env python3
"""Quick check of store state."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from addressbook.config import get_store_config
from addressbook.db.database import Database
from addressbook.models.columns import ContactColumns, UserColumns


def main():
    parser = argparse.ArgumentParser(description="Show store version and row counts")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args()

    path = Path(args.db_path) if args.db_path else get_store_config().path
    if not path.exists():
        print(f"No store at {path}")
        return 1

    db = Database(path=path)
    print(f"Store: {db.path}")
    print(f"Version: {db.stored_version}")
    print(f"Tables: {', '.join(sorted(db.table_names()))}")

    print("\n=== Users ===")
    users = db.fetchall(f"SELECT {UserColumns.ID}, {UserColumns.USERNAME} FROM {UserColumns.TABLE_NAME}")
    print(f"Total: {len(users)}")
    for u in users:
        count = db.fetchone(
            f"SELECT COUNT(*) AS n FROM {ContactColumns.TABLE_NAME} WHERE {ContactColumns.USER_ID} = ?",
            (u[UserColumns.ID],),
        )
        print(f"  {u[UserColumns.ID]:>4} | {u[UserColumns.USERNAME]:<30} | {count['n']} contact(s)")

    db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
