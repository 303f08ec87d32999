"""Textual integration for depwatch. Opt-in — requires textual.

Binds Textual widgets to a ViewModel: ``bind_text`` keeps a Static-like
widget (anything with ``update()``) showing a rendered template,
``bind_input`` keeps an Input's value in sync and hands back the
ModelBinding to write user input into.

Widget pushes are skipped while the app is paused or not running, NoMatches
from widget queries is ignored, and pushes from other threads are marshaled
with ``app.call_from_thread``.
"""

import logging
import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from depwatch.template import ModelBinding, TextBinding

logger = logging.getLogger("depwatch.textual")

# Apps whose bindings are on hold, by id(app). Present only inside pause().
_held: set[int] = set()


@contextmanager
def pause(app):
    """Hold every binding of app while its widgets are being rebuilt.

    Field writes inside the block still update the data; the bound widgets
    just don't hear about them.
    """
    _held.add(id(app))
    try:
        yield app
    finally:
        _held.discard(id(app))


def is_safe(app) -> bool:
    """True when bindings may push into app's widgets."""
    return bool(app.is_running) and id(app) not in _held


def _guarded(app, push):
    _main = threading.get_ident()

    def _guard(value):
        if not is_safe(app):
            return
        if threading.get_ident() != _main:
            app.call_from_thread(_safe, value)
        else:
            _safe(value)

    def _safe(value):
        try:
            push(value)
        except NoMatches:
            logger.debug("Widget gone, skipped push of %r", value)

    return _guard


def bind_text(app, root, selector, text) -> TextBinding:
    """Keep the widget at selector showing text with its placeholders filled.

    Usage (inside App.on_mount):
        bind_text(self, vm, "#greeting", "Hello {{ info.name }}!")
    """

    def _push(rendered):
        app.query_one(selector).update(rendered)

    return TextBinding(root, text, _guarded(app, _push))


def bind_input(app, root, selector, key) -> ModelBinding:
    """Keep the Input at selector showing the value at key.

    Forward edits from the app to the returned binding:

        def on_input_changed(self, event):
            self.name_binding.input(event.value)
    """

    def _push(value):
        widget = app.query_one(selector)
        text = "" if value is None else str(value)
        if widget.value != text:
            widget.value = text

    return ModelBinding(root, key, _guarded(app, _push))
