"""Unit tests for resource classification (pure functions, no store)."""

from __future__ import annotations

import unittest

from addressbook.errors import UnsupportedResourceError
from addressbook.provider.routing import (
    ResourceKind,
    Route,
    RoutingTable,
    split_path,
)


class TestDefaultRoutes(unittest.TestCase):
    def setUp(self):
        self.routes = RoutingTable.default()

    def test_single_contact(self):
        match = self.routes.classify("/contacts/42")
        self.assertEqual(match.kind, ResourceKind.ONE_CONTACT)
        self.assertEqual(match.instance_id, 42)
        self.assertEqual(match.table, "contacts")
        self.assertEqual(match.path, "/contacts/42")

    def test_zero_is_a_valid_id(self):
        self.assertEqual(self.routes.classify("/contacts/0").instance_id, 0)

    def test_leading_zeros_normalised(self):
        match = self.routes.classify("/contacts/007")
        self.assertEqual(match.instance_id, 7)
        self.assertEqual(match.path, "/contacts/7")
        self.assertEqual(self.routes.classify("/contacts/00").path, "/contacts/0")

    def test_contacts_collection(self):
        match = self.routes.classify("/contacts")
        self.assertEqual(match.kind, ResourceKind.CONTACTS)
        self.assertIsNone(match.instance_id)

    def test_users_collection(self):
        match = self.routes.classify("/users")
        self.assertEqual(match.kind, ResourceKind.USERS)
        self.assertEqual(match.table, "users")

    def test_empty_segments_ignored(self):
        self.assertEqual(self.routes.classify("/contacts/").kind, ResourceKind.CONTACTS)
        self.assertEqual(self.routes.classify("contacts//7").path, "/contacts/7")

    def test_unknown_paths_raise(self):
        for path in (
            "", "/", "/groups", "/users/3", "/contacts/abc", "/contacts/-1",
            "/contacts/1.5", "/contacts/3/phones", "/contacts/1; DROP TABLE users",
            "/contacts/١٢", "/contacts/" + "9" * 30, "/Contacts",
        ):
            with self.subTest(path=path):
                with self.assertRaises(UnsupportedResourceError) as ctx:
                    self.routes.classify(path)
                self.assertEqual(ctx.exception.path, path)

    def test_collection_path(self):
        self.assertEqual(self.routes.collection_path(ResourceKind.ONE_CONTACT), "/contacts")
        self.assertEqual(self.routes.collection_path(ResourceKind.USERS), "/users")


class TestCustomRoutes(unittest.TestCase):
    def test_renamed_paths(self):
        routes = RoutingTable.default(contacts="people", users="accounts")
        self.assertEqual(routes.classify("/people/3").kind, ResourceKind.ONE_CONTACT)
        self.assertEqual(routes.classify("/people/3").table, "contacts")
        self.assertEqual(routes.classify("/accounts").table, "users")
        with self.assertRaises(UnsupportedResourceError):
            routes.classify("/contacts")

    def test_first_match_wins(self):
        routes = RoutingTable([
            Route(("contacts",), ResourceKind.USERS, "users"),
            Route(("contacts",), ResourceKind.CONTACTS, "contacts"),
        ])
        self.assertEqual(routes.classify("/contacts").kind, ResourceKind.USERS)

    def test_routes_are_immutable(self):
        routes = RoutingTable.default()
        self.assertIsInstance(routes.routes, tuple)
        with self.assertRaises(Exception):
            routes.routes[0].kind = ResourceKind.USERS  # type: ignore[misc]

    def test_empty_table_rejected(self):
        with self.assertRaises(ValueError):
            RoutingTable([])


class TestSplitPath(unittest.TestCase):
    def test_split(self):
        self.assertEqual(split_path("/a/b/"), ("a", "b"))
        self.assertEqual(split_path(""), ())


if __name__ == "__main__":
    unittest.main()
