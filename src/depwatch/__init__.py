"""depwatch: implicit dependency tracking for plain Python objects."""

from importlib.metadata import version as _version

__version__ = _version("depwatch")

from depwatch._tracking import active_tracker, untracked
from depwatch.errors import DepwatchError, NotificationError, PathResolutionError, TemplateError
from depwatch.observer import convert, fields, is_reactive, subscription_of
from depwatch.subscription import Subscription, get_error_handler, set_error_handler
from depwatch.tracker import Tracker
from depwatch.viewmodel import Namespace, ViewModel
from depwatch.template import ModelBinding, TextBinding
# textual NOT auto-imported — opt-in only

__all__ = [
    "convert",
    "fields",
    "is_reactive",
    "subscription_of",
    "Subscription",
    "Tracker",
    "active_tracker",
    "untracked",
    "set_error_handler",
    "get_error_handler",
    "Namespace",
    "ViewModel",
    "TextBinding",
    "ModelBinding",
    "DepwatchError",
    "PathResolutionError",
    "NotificationError",
    "TemplateError",
]
