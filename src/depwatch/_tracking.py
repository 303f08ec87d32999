"""Ambient tracking context — which Tracker is discovering its dependencies.

A Tracker resolves its key path once at construction with itself installed
here. Every Field read during that pass records the active Tracker into its
Subscription. Outside a discovery pass the slot is None and reads are free.

The slot is a contextvar and is always released by resetting the token it was
set with, so nested discovery passes restore the outer Tracker and a failing
pass cannot leave a stale Tracker behind.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from depwatch.tracker import Tracker

# The Tracker currently running its discovery pass, if any.
current_tracker: contextvars.ContextVar[Tracker | None] = contextvars.ContextVar(
    "current_tracker", default=None
)


def active_tracker() -> Tracker | None:
    """The Tracker whose discovery pass is running, or None."""
    return current_tracker.get()


@contextmanager
def tracking(tracker: Tracker) -> Iterator[Tracker]:
    """Install tracker as the active one for the duration of the block."""
    token = current_tracker.set(tracker)
    try:
        yield tracker
    finally:
        current_tracker.reset(token)


@contextmanager
def untracked() -> Iterator[None]:
    """Read fields without registering them with an enclosing discovery pass."""
    token = current_tracker.set(None)
    try:
        yield
    finally:
        current_tracker.reset(token)
