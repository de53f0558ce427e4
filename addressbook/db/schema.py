"""Database schema DDL — the ``users`` and ``contacts`` tables.

Both tables are created together and dropped together; there is no
per-table migration.
"""

from addressbook.models.columns import ContactColumns as C
from addressbook.models.columns import UserColumns as U

CREATE_USERS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {U.TABLE_NAME} (
    {U.ID}          INTEGER PRIMARY KEY AUTOINCREMENT,
    {U.USERNAME}    TEXT UNIQUE,
    {U.PASSWORD}    TEXT
)
"""

CREATE_CONTACTS_TABLE = f"""
CREATE TABLE IF NOT EXISTS {C.TABLE_NAME} (
    {C.ID}              INTEGER PRIMARY KEY AUTOINCREMENT,
    {C.NAME}            TEXT,
    {C.PHONE}           TEXT,
    {C.MOBILE_PHONE}    TEXT,
    {C.WORK_PHONE}      TEXT,
    {C.EMAIL}           TEXT,
    {C.STREET}          TEXT,
    {C.CITY}            TEXT,
    {C.PROVINCE}        TEXT,
    {C.POSTAL_CODE}     TEXT,
    {C.USER_ID}         INTEGER REFERENCES {U.TABLE_NAME}({U.ID})
)
"""

CREATE_CONTACTS_USER_INDEX = (
    f"CREATE INDEX IF NOT EXISTS idx_contacts_user ON {C.TABLE_NAME}({C.USER_ID})"
)

# Order matters: contacts references users.
SCHEMA_STATEMENTS = (
    CREATE_USERS_TABLE,
    CREATE_CONTACTS_TABLE,
    CREATE_CONTACTS_USER_INDEX,
)

DROP_STATEMENTS = (
    f"DROP TABLE IF EXISTS {C.TABLE_NAME}",
    f"DROP TABLE IF EXISTS {U.TABLE_NAME}",
)

SCHEMA_DDL = ";\n".join(s.strip() for s in SCHEMA_STATEMENTS) + ";\n"

TABLE_COLUMNS = {
    U.TABLE_NAME: U.ALL,
    C.TABLE_NAME: C.ALL,
}
