"""Tests for Subscription fan-out and error reporting."""

import logging

import pytest

from depwatch import (
    Namespace,
    NotificationError,
    Subscription,
    Tracker,
    convert,
    get_error_handler,
    set_error_handler,
    subscription_of,
)


@pytest.fixture
def restore_error_handler():
    previous = get_error_handler()
    yield
    set_error_handler(previous)


def _failing_after_first(log):
    calls = [0]

    def cb(value):
        calls[0] += 1
        if calls[0] > 1:
            raise ValueError(f"boom {value}")
        log.append(value)

    return cb


class TestSubscription:
    def test_notifies_in_registration_order(self):
        d = Namespace(count=0)
        convert(d)
        order = []
        Tracker(d, "count", lambda v: order.append(("first", v)))
        Tracker(d, "count", lambda v: order.append(("second", v)))
        order.clear()
        d.count = 1
        assert order == [("first", 1), ("second", 1)]

    def test_dedupes_same_tracker(self):
        d = Namespace(count=1)
        d.me = d
        convert(d)
        log = []
        t = Tracker(d, "me.me.count", log.append)
        assert subscription_of(d, "me").subscribers == (t,)
        d.count = 2
        assert log == [1, 2]

    def test_add_subscriber_reports_duplicates(self):
        d = Namespace(count=1)
        convert(d)
        t = Tracker(d, "count", lambda v: None)
        sub = Subscription()
        assert sub.add_subscriber(t) is True
        assert sub.add_subscriber(t) is False
        assert len(sub) == 1

    def test_repr(self):
        assert "0 trackers" in repr(Subscription())


class TestFailureIsolation:
    def test_remaining_trackers_still_run(self):
        d = Namespace(count=1)
        convert(d)
        bad_log, good_log = [], []
        Tracker(d, "count", _failing_after_first(bad_log))
        Tracker(d, "count", good_log.append)

        with pytest.raises(NotificationError) as info:
            d.count = 2

        assert good_log == [1, 2]
        assert d.count == 2
        assert len(info.value.failures) == 1
        assert isinstance(info.value.exceptions[0], ValueError)

    def test_all_failures_collected(self):
        d = Namespace(count=1)
        convert(d)
        Tracker(d, "count", _failing_after_first([]))
        Tracker(d, "count", _failing_after_first([]))
        with pytest.raises(NotificationError) as info:
            d.count = 2
        assert len(info.value.failures) == 2

    def test_failures_logged(self, caplog):
        d = Namespace(count=1)
        convert(d)
        Tracker(d, "count", _failing_after_first([]))
        with caplog.at_level(logging.ERROR, logger="depwatch.subscription"):
            with pytest.raises(NotificationError):
                d.count = 2
        assert "1 of 1 trackers failed" in caplog.text

    def test_error_handler_receives_failures(self, restore_error_handler):
        reported = []
        set_error_handler(lambda tracker, exc: reported.append((tracker, exc)))
        d = Namespace(count=1)
        convert(d)
        t = Tracker(d, "count", _failing_after_first([]))
        good_log = []
        Tracker(d, "count", good_log.append)

        d.count = 2  # no raise

        assert [tr for tr, _ in reported] == [t]
        assert isinstance(reported[0][1], ValueError)
        assert good_log == [1, 2]
