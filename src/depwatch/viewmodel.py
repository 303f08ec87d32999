"""View models — a converted data object plus proxies for its root fields.

A ViewModel owns one data object, converts it, and exposes each of its root
fields as an attribute of its own: ``vm.count`` reads and writes
``vm.data.count``. Trackers and bindings are rooted at the view model, so key
paths read like the templates that use them (``"count"``, ``"info.name"``).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Callable

from depwatch import keypath
from depwatch.observer import convert, fields
from depwatch.tracker import Tracker


class Namespace:
    """Plain attribute bag, convertible by convert().

    Usage:
        data = Namespace.from_mapping({"count": 1, "info": {"name": "Ada"}})
        data.info.name  # "Ada"
    """

    def __init__(self, **values: object) -> None:
        self.__dict__.update(values)

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> Namespace:
        """Build a Namespace, turning nested mappings into nested Namespaces.

        Lists and other values are kept by reference.
        """
        ns = cls()
        for key, value in mapping.items():
            if isinstance(value, Mapping):
                value = cls.from_mapping(value)
            ns.__dict__[key] = value
        return ns

    def __repr__(self) -> str:
        items = ", ".join(f"{k}={v!r}" for k, v in fields(self).items())
        return f"{type(self).__name__}({items})"


class ViewModel:
    """Reactive root for a set of bindings.

    Root fields are proxied only when they don't collide with the view
    model's own attributes (``data``, ``watch``, ``get``, ``set``); colliding
    fields stay reachable through ``vm.data``.
    """

    def __init__(self, data: Mapping | object) -> None:
        if isinstance(data, Mapping):
            data = Namespace.from_mapping(data)
        convert(data)
        object.__setattr__(self, "data", data)
        object.__setattr__(self, "_proxied", frozenset(fields(data)))

    def __getattr__(self, name: str):
        # Only reached when normal lookup fails.
        proxied = self.__dict__.get("_proxied", frozenset())
        if name in proxied:
            return getattr(self.data, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

    def __setattr__(self, name: str, value: object) -> None:
        if name in self._proxied:
            setattr(self.data, name, value)
        else:
            object.__setattr__(self, name, value)

    def watch(self, key: str, callback: Callable[[object], None]) -> Tracker:
        """Track key relative to this view model."""
        return Tracker(self, key, callback)

    def get(self, key: str) -> object:
        return keypath.resolve(self, key)

    def set(self, key: str, value: object) -> None:
        keypath.assign(self, key, value)

    def __repr__(self) -> str:
        return f"ViewModel({self.data!r})"
