"""Trackers — computations bound to a key path and a callback.

Constructing a Tracker runs its one and only dependency discovery pass: the
key path is resolved while the Tracker is the active one, so every Field read
along the way records it. The callback then fires with the initial value.

Later, any write to one of those Fields calls update(), which resolves the
path again and fires the callback. update() never records new dependencies:
if the path comes to run through different objects, those are not tracked.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from depwatch import keypath
from depwatch._tracking import tracking

if TYPE_CHECKING:
    from depwatch.subscription import Subscription

logger = logging.getLogger("depwatch.tracker")


class Tracker:
    """Re-reads root at key and passes the value to callback on every change.

    Usage:
        data = Namespace(count=1)
        convert(data)
        log = []

        Tracker(data, "count", log.append)
        # log == [1]: fired once during construction

        data.count = 1
        # log == [1]: equal writes are free

        data.count = 2
        # log == [1, 2]
    """

    __slots__ = ("_root", "_key", "_segments", "_callback", "_subscriptions", "__weakref__")

    def __init__(self, root: object, key: str, callback: Callable[[object], None]) -> None:
        self._root = root
        self._key = key
        self._segments = keypath.split(key)
        self._callback = callback
        self._subscriptions: list[Subscription] = []

        # A Tracker that fails to construct must not stay subscribed anywhere.
        try:
            with tracking(self):
                value = self.get()
            self._callback(value)
        except Exception:
            logger.debug("Construction failed for %r, rolling back", self)
            for subscription in self._subscriptions:
                subscription.remove_subscriber(self)
            self._subscriptions.clear()
            raise

    @property
    def root(self) -> object:
        return self._root

    @property
    def key(self) -> str:
        return self._key

    @property
    def segments(self) -> tuple[str, ...]:
        return self._segments

    @property
    def subscriptions(self) -> tuple[Subscription, ...]:
        """The Subscriptions recorded during discovery. Fixed after construction."""
        return tuple(self._subscriptions)

    def get(self) -> object:
        """Resolve the key path against the root without notifying."""
        return keypath.resolve(self._root, self._key)

    def update(self) -> None:
        """Re-read the value and pass it to the callback."""
        self._callback(self.get())

    def __repr__(self) -> str:
        name = getattr(self._callback, "__name__", type(self._callback).__name__)
        return f"Tracker({self._key!r}, {name})"
