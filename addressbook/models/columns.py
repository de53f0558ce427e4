"""Table and column names shared by the schema and the query builder.

These names are the storage contract: changing one requires a version bump.
"""

from __future__ import annotations


class UserColumns:
    TABLE_NAME = "users"
    ID = "id"
    USERNAME = "username"
    PASSWORD = "password"

    ALL = (ID, USERNAME, PASSWORD)


class ContactColumns:
    TABLE_NAME = "contacts"
    ID = "id"
    NAME = "name"
    PHONE = "phone"
    MOBILE_PHONE = "mobile_phone"
    WORK_PHONE = "work_phone"
    EMAIL = "email"
    STREET = "street"
    CITY = "city"
    PROVINCE = "province"
    POSTAL_CODE = "postal_code"
    USER_ID = "user_id"

    ALL = (
        ID, NAME, PHONE, MOBILE_PHONE, WORK_PHONE, EMAIL,
        STREET, CITY, PROVINCE, POSTAL_CODE, USER_ID,
    )


def build_contact_path(contact_id: int) -> str:
    return f"/{ContactColumns.TABLE_NAME}/{contact_id}"
