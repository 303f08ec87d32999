"""Exceptions raised by depwatch."""

from __future__ import annotations


class DepwatchError(Exception):
    """Base class for every error raised by depwatch."""


class PathResolutionError(DepwatchError, LookupError):
    """A key path could not be resolved against its root object.

    ``index`` is the position of the segment that could not be read: either
    the value before it was None, or the segment itself does not exist.
    """

    def __init__(self, root: object, key: str, index: int) -> None:
        self.root = root
        self.key = key
        self.index = index
        segments = key.split(".")
        self.segment = segments[index] if index < len(segments) else None
        super().__init__(
            f"cannot resolve {key!r} on {type(root).__name__}: "
            f"segment {index} ({self.segment!r}) is unreachable"
        )


class NotificationError(DepwatchError):
    """One or more Trackers failed while a Subscription was notifying them.

    Raised only after every Tracker in the Subscription has been updated.
    """

    def __init__(self, failures: list[tuple[object, BaseException]]) -> None:
        self.failures = failures
        super().__init__(f"{len(failures)} tracker(s) failed during notify")

    @property
    def exceptions(self) -> list[BaseException]:
        return [exc for _, exc in self.failures]


class TemplateError(DepwatchError, ValueError):
    """Template text passed to a binding contains no ``{{ }}`` placeholder."""
