"""Subscriptions — the per-field list of interested Trackers.

Every converted Field owns exactly one Subscription. Trackers are recorded
while they run their discovery pass and are updated, in recording order,
each time the Field is written with a new value.

Error reporting: call set_error_handler() once at start-up to receive each
Tracker failure as handler(tracker, exc). Without a handler, failures are
logged and raised together as NotificationError once every Tracker has run.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from depwatch.errors import NotificationError

if TYPE_CHECKING:
    from depwatch.tracker import Tracker

    ErrorHandler = Callable[[Tracker, Exception], None]

logger = logging.getLogger("depwatch.subscription")

_error_handler: ErrorHandler | None = None


def set_error_handler(handler: ErrorHandler | None) -> None:
    """Route per-Tracker notification failures to handler.

    Pass None to restore the default: raise NotificationError after the
    fan-out completes.
    """
    global _error_handler
    _error_handler = handler


def get_error_handler() -> ErrorHandler | None:
    return _error_handler


class Subscription:
    """Ordered, de-duplicated collection of the Trackers that read one Field."""

    __slots__ = ("_trackers",)

    def __init__(self) -> None:
        # dict keys keep insertion order and dedupe by identity (Trackers hash by id).
        self._trackers: dict[Tracker, None] = {}

    @property
    def subscribers(self) -> tuple[Tracker, ...]:
        return tuple(self._trackers)

    def add_subscriber(self, tracker: Tracker) -> bool:
        """Record tracker. Returns False if it was already recorded."""
        if tracker in self._trackers:
            return False
        self._trackers[tracker] = None
        tracker._subscriptions.append(self)
        return True

    def remove_subscriber(self, tracker: Tracker) -> None:
        """Forget tracker. Used to roll back a failed discovery pass."""
        self._trackers.pop(tracker, None)

    def notify(self) -> None:
        """Update every recorded Tracker, then report any failures."""
        failures: list[tuple[Tracker, Exception]] = []
        for tracker in list(self._trackers):
            try:
                tracker.update()
            except Exception as exc:
                failures.append((tracker, exc))

        if not failures:
            return

        handler = _error_handler
        if handler is not None:
            for tracker, exc in failures:
                handler(tracker, exc)
            return

        logger.error(
            "%d of %d trackers failed during notify: %s",
            len(failures), len(self._trackers),
            ", ".join(repr(t) for t, _ in failures),
        )
        raise NotificationError(failures)

    def __len__(self) -> int:
        return len(self._trackers)

    def __repr__(self) -> str:
        return f"Subscription({len(self._trackers)} trackers)"
