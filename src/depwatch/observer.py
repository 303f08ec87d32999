"""Reactive conversion — turn the fields of plain objects into observed Fields.

convert(obj) walks obj depth-first. Each entry of the instance __dict__ is
replaced with a Field: a data descriptor that holds the value and a
Subscription. Reading a Field while a Tracker is discovering its dependencies
records that Tracker; writing a different value notifies every recorded
Tracker.

Descriptors live on classes, so each converted instance is moved onto its own
subclass of its original class that carries its Fields. isinstance checks,
methods and class attributes are unaffected.

Only plain objects are converted: instances of Python-defined classes with an
instance __dict__. Lists, dicts, scalars and None are stored by reference and
their contents are not observed. Objects assigned to a Field after conversion
are not converted either.
"""

from __future__ import annotations

import enum
import types

from depwatch._tracking import current_tracker
from depwatch.subscription import Subscription

_REACTIVE = "__reactive_fields__"
_OWNER = "__reactive_owner__"


class Field:
    """Intercepted attribute: tracks reads, notifies on changed writes.

    A Field belongs to the one instance it was converted from. Any other
    instance of the generated class (copies, dataclasses.replace results)
    keeps its value in its own __dict__ and is not observed.
    """

    __slots__ = ("owner", "name", "value", "subscription")

    def __init__(self, owner: object, name: str, value: object) -> None:
        self.owner = owner
        self.name = name
        self.value = value
        self.subscription = Subscription()

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        if instance is not self.owner:
            try:
                return instance.__dict__[self.name]
            except KeyError:
                raise AttributeError(self.name) from None
        tracker = current_tracker.get()
        if tracker is not None:
            self.subscription.add_subscriber(tracker)
        return self.value

    def __set__(self, instance, value) -> None:
        if instance is not self.owner:
            instance.__dict__[self.name] = value
            return
        old = self.value
        if old is value:
            return
        # Always keep the new reference; only a changed value notifies.
        self.value = value
        if old == value:
            return
        self.subscription.notify()

    def __delete__(self, instance) -> None:
        if instance is not self.owner:
            try:
                del instance.__dict__[self.name]
            except KeyError:
                raise AttributeError(self.name) from None
            return
        raise AttributeError(f"reactive field {self.name!r} cannot be deleted")

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.value!r})"


def _is_plain_object(obj: object) -> bool:
    if isinstance(obj, (type, types.ModuleType, enum.Enum)):
        return False
    return isinstance(getattr(obj, "__dict__", None), dict)


def is_reactive(obj: object) -> bool:
    """Has obj been converted?"""
    return type(obj).__dict__.get(_OWNER) is obj


def _getstate(self):
    return fields(self)


def convert(obj: object) -> None:
    """Make every field of obj, and of the plain objects it holds, reactive.

    Converts in place. No-op for anything that isn't a plain object and for
    objects that are already reactive.

    Usage:
        data = Namespace(count=1, info=Namespace(name="Ada"))
        convert(data)
        Tracker(data, "info.name", print)   # prints Ada
        data.info.name = "Grace"            # prints Grace
    """
    _convert(obj, set())


def _convert(obj: object, seen: set[int]) -> None:
    if not _is_plain_object(obj) or is_reactive(obj) or id(obj) in seen:
        return
    seen.add(id(obj))

    own = vars(obj)
    fields: dict[str, Field] = {}
    for name, value in list(own.items()):
        if name.startswith("__") and name.endswith("__"):
            continue
        _convert(value, seen)
        fields[name] = Field(obj, name, value)

    cls = type(obj)
    namespace: dict[str, object] = dict(fields)
    namespace[_REACTIVE] = tuple(fields)
    namespace[_OWNER] = obj
    namespace["__slots__"] = ()
    namespace["__module__"] = cls.__module__
    namespace["__qualname__"] = cls.__qualname__
    # copy.copy() and friends must see the field values, which left __dict__.
    if getattr(cls, "__getstate__", None) is getattr(object, "__getstate__", None):
        namespace["__getstate__"] = _getstate
    try:
        reactive_cls = type(cls)(cls.__name__, (cls,), namespace)
        obj.__class__ = reactive_cls
    except TypeError:
        # Builtin or final types can't be subclassed / reassigned.
        return

    for name in fields:
        del own[name]


def subscription_of(obj: object, name: str) -> Subscription:
    """The Subscription owned by obj's Field called name."""
    field = type(obj).__dict__.get(name) if is_reactive(obj) else None
    if not isinstance(field, Field):
        raise KeyError(name)
    return field.subscription


def fields(obj: object) -> dict[str, object]:
    """Snapshot of obj's fields. Reads reactive Fields without tracking them."""
    snapshot: dict[str, object] = {}
    if is_reactive(obj):
        cls_dict = type(obj).__dict__
        for name in cls_dict[_REACTIVE]:
            snapshot[name] = cls_dict[name].value
    snapshot.update(getattr(obj, "__dict__", {}))
    return snapshot
