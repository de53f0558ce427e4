"""Change-observer registry — who gets told when a resource path changes."""

from __future__ import annotations

import logging
import threading
import weakref
from typing import Any, Callable, Optional, Union

from addressbook.provider.routing import split_path

logger = logging.getLogger(__name__)

# An observer is either an object with ``on_change(path)`` or a plain callable.
Observer = Union[Callable[[str], Any], Any]


def _deliver(observer: Observer, path: str) -> None:
    handler = getattr(observer, "on_change", None)
    if handler is None:
        handler = observer
    handler(path)


def paths_related(a: tuple[str, ...], b: tuple[str, ...]) -> bool:
    """True if one path is the other or lies beneath it."""
    shorter = min(len(a), len(b))
    return a[:shorter] == b[:shorter]


class ObserverRegistry:
    """
    Path-keyed observer registry.

    A change to ``/contacts`` reaches observers of ``/contacts``, of every
    single contact beneath it and of any ancestor; a change to
    ``/contacts/3`` reaches observers of ``/contacts/3`` and ``/contacts``
    but not ``/contacts/4`` nor ``/users``.

    Observers are held weakly unless registered with ``weak=False``, which
    objects without weak-reference support (e.g. ``list.append``) need.
    Delivery is synchronous; an observer that raises is logged and skipped.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[tuple[tuple[str, ...], Callable[[], Optional[Observer]]]] = []

    def register(self, path: str, observer: Observer, weak: bool = True) -> None:
        if weak:
            if hasattr(observer, "__self__") and hasattr(observer, "__func__"):
                ref: Callable[[], Optional[Observer]] = weakref.WeakMethod(observer)
            else:
                ref = weakref.ref(observer)
        else:
            ref = lambda: observer  # noqa: E731
        with self._lock:
            self._entries.append((split_path(path), ref))

    def unregister(self, observer: Observer) -> None:
        with self._lock:
            kept = []
            for segments, ref in self._entries:
                current = ref()
                if current is None or current is observer or current == observer:
                    continue
                kept.append((segments, ref))
            self._entries = kept

    def observers_for(self, path: str) -> list[Observer]:
        target = split_path(path)
        found: list[Observer] = []
        with self._lock:
            alive = []
            for segments, ref in self._entries:
                observer = ref()
                if observer is None:
                    continue
                alive.append((segments, ref))
                if paths_related(segments, target):
                    found.append(observer)
            self._entries = alive
        return found

    def notify_change(self, path: str) -> int:
        """Tell every related observer that ``path`` changed; returns how many were told."""
        observers = self.observers_for(path)
        for observer in observers:
            try:
                _deliver(observer, path)
            except Exception:
                logger.exception(f"Observer {observer!r} failed handling change to {path}")
        if observers:
            logger.debug(f"Notified {len(observers)} observer(s) of change to {path}")
        return len(observers)

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for _, ref in self._entries if ref() is not None)
