"""Dotted key paths: ``"info.name"`` addresses ``root.info.name``.

Segments are read with getattr on objects and with item lookup on mappings,
so a path can run through converted objects and plain dicts alike.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping

from depwatch.errors import PathResolutionError

_MISSING = object()


def split(key: str) -> tuple[str, ...]:
    """Split a dotted key path into its segments."""
    return tuple(key.split("."))


def _step(current: object, segment: str) -> object:
    if isinstance(current, Mapping):
        return current.get(segment, _MISSING)
    return getattr(current, segment, _MISSING)


def resolve(root: object, key: str) -> object:
    """Read the value at key, starting from root.

    Raises PathResolutionError naming the first segment that can't be read.
    """
    current = root
    for index, segment in enumerate(split(key)):
        if current is None:
            raise PathResolutionError(root, key, index)
        current = _step(current, segment)
        if current is _MISSING:
            raise PathResolutionError(root, key, index)
    return current


def assign(root: object, key: str, value: object) -> None:
    """Write value at key: resolve the parent, then set the last segment.

    Writing through a converted object goes through its Field setter and
    notifies dependents as usual.
    """
    segments = split(key)
    parent = root
    for index, segment in enumerate(segments[:-1]):
        if parent is None:
            raise PathResolutionError(root, key, index)
        parent = _step(parent, segment)
        if parent is _MISSING:
            raise PathResolutionError(root, key, index)
    if parent is None:
        raise PathResolutionError(root, key, len(segments) - 1)
    if isinstance(parent, MutableMapping):
        parent[segments[-1]] = value
    else:
        setattr(parent, segments[-1], value)
