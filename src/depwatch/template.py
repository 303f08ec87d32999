"""Template bindings — ``{{ key.path }}`` text and two-way model values.

These are the glue between a ViewModel and whatever displays it. Neither
knows anything about widgets: a binding hands values to a ``sink`` callable,
and the caller decides what to do with them.
"""

from __future__ import annotations

import functools
import re
from typing import Callable

from depwatch import keypath
from depwatch.errors import TemplateError
from depwatch.tracker import Tracker

PLACEHOLDER = re.compile(r"\{\{\s*(\S+?)\s*\}\}")


def placeholders(text: str) -> list[str]:
    """Distinct key paths referenced by text, in order of first appearance."""
    return list(dict.fromkeys(PLACEHOLDER.findall(text)))


def render(text: str, values: dict[str, object]) -> str:
    """Replace every placeholder in text with str() of its value."""
    return PLACEHOLDER.sub(lambda m: str(values[m.group(1)]), text)


class TextBinding:
    """Keeps a rendered copy of text in sync with the values it references.

    One Tracker is created per distinct placeholder. sink receives the
    rendered text once after all of them are in place, then again each time
    one of the referenced fields changes.

    Usage:
        vm = ViewModel({"info": {"name": "Ada"}})
        TextBinding(vm, "Hello {{ info.name }}!", print)
        # Hello Ada!
        vm.info.name = "Grace"
        # Hello Grace!
    """

    def __init__(self, root: object, text: str, sink: Callable[[str], None]) -> None:
        keys = placeholders(text)
        if not keys:
            raise TemplateError(f"no {{{{ }}}} placeholder in {text!r}")
        self.text = text
        self.values: dict[str, object] = {}
        self._sink = sink
        self._ready = False
        self.trackers: list[Tracker] = []
        try:
            for key in keys:
                self.trackers.append(Tracker(root, key, functools.partial(self._on_change, key)))
        except Exception:
            # The caller never gets this binding, so nothing may stay subscribed.
            for tracker in self.trackers:
                for subscription in tracker.subscriptions:
                    subscription.remove_subscriber(tracker)
            raise
        self._ready = True
        self._emit()

    def _on_change(self, key: str, value: object) -> None:
        self.values[key] = value
        if self._ready:
            self._emit()

    def _emit(self) -> None:
        self.rendered = render(self.text, self.values)
        self._sink(self.rendered)


class ModelBinding:
    """Two-way binding between a key path and an input-like consumer.

    sink receives the current value now and after every change; input()
    writes a value typed by the user back into the data.
    """

    def __init__(self, root: object, key: str, sink: Callable[[object], None]) -> None:
        self.root = root
        self.key = key
        self.tracker = Tracker(root, key, sink)

    @property
    def value(self) -> object:
        return self.tracker.get()

    def input(self, value: object) -> None:
        """Assign value at the bound key path. Equal values are a no-op."""
        keypath.assign(self.root, self.key, value)
