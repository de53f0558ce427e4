"""Unit tests for the change-observer registry."""

from __future__ import annotations

import gc
import unittest

from addressbook.provider.observers import ObserverRegistry, paths_related

from helpers import Recorder


class TestPathsRelated(unittest.TestCase):
    def test_relations(self):
        self.assertTrue(paths_related(("contacts",), ("contacts",)))
        self.assertTrue(paths_related(("contacts",), ("contacts", "3")))
        self.assertTrue(paths_related(("contacts", "3"), ("contacts",)))
        self.assertFalse(paths_related(("contacts", "3"), ("contacts", "4")))
        self.assertFalse(paths_related(("contacts",), ("users",)))


class TestObserverRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = ObserverRegistry()

    def test_collection_change_reaches_items_and_collection(self):
        collection, item, other = Recorder(), Recorder(), Recorder()
        self.registry.register("/contacts", collection)
        self.registry.register("/contacts/3", item)
        self.registry.register("/users", other)

        told = self.registry.notify_change("/contacts")

        self.assertEqual(told, 2)
        self.assertEqual(collection.paths, ["/contacts"])
        self.assertEqual(item.paths, ["/contacts"])
        self.assertEqual(other.paths, [])

    def test_item_change_skips_sibling(self):
        collection, item, sibling = Recorder(), Recorder(), Recorder()
        self.registry.register("/contacts", collection)
        self.registry.register("/contacts/3", item)
        self.registry.register("/contacts/4", sibling)

        self.registry.notify_change("/contacts/3")

        self.assertEqual(collection.paths, ["/contacts/3"])
        self.assertEqual(item.paths, ["/contacts/3"])
        self.assertEqual(sibling.paths, [])

    def test_plain_callable_observer(self):
        seen = []

        def observer(path):
            seen.append(path)

        self.registry.register("/users", observer)
        self.registry.notify_change("/users")
        self.assertEqual(seen, ["/users"])

    def test_failing_observer_is_logged_not_raised(self):
        recorder = Recorder()

        def broken(path):
            raise RuntimeError("boom")

        self.registry.register("/users", broken)
        self.registry.register("/users", recorder)
        with self.assertLogs("addressbook.provider.observers", level="ERROR"):
            told = self.registry.notify_change("/users")
        self.assertEqual(told, 2)
        self.assertEqual(recorder.paths, ["/users"])

    def test_observers_held_weakly(self):
        recorder = Recorder()
        self.registry.register("/contacts", recorder)
        self.assertEqual(len(self.registry), 1)
        del recorder
        gc.collect()
        self.assertEqual(len(self.registry), 0)
        self.assertEqual(self.registry.notify_change("/contacts"), 0)

    def test_bound_method_held_weakly(self):
        recorder = Recorder()
        self.registry.register("/contacts", recorder.on_change)
        self.registry.notify_change("/contacts")
        self.assertEqual(recorder.paths, ["/contacts"])
        del recorder
        gc.collect()
        self.assertEqual(len(self.registry), 0)

    def test_strong_registration(self):
        seen = []
        self.registry.register("/users", lambda path: seen.append(path), weak=False)
        gc.collect()
        self.registry.notify_change("/users")
        self.assertEqual(seen, ["/users"])

    def test_unregister(self):
        recorder = Recorder()
        self.registry.register("/contacts", recorder)
        self.registry.unregister(recorder)
        self.assertEqual(self.registry.notify_change("/contacts"), 0)
        self.assertEqual(recorder.paths, [])


if __name__ == "__main__":
    unittest.main()
