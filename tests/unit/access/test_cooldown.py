"""CooldownTracker: first request free, strict window, per requester, metrics."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from medaccess.access.cooldown import DEFAULT_COOLDOWN, CooldownTracker

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def tracker():
    return CooldownTracker(window=timedelta(minutes=5))


def test_default_window_is_five_minutes():
    assert DEFAULT_COOLDOWN == timedelta(minutes=5)
    assert CooldownTracker().window == timedelta(minutes=5)


def test_first_request_allowed(tracker):
    assert tracker.allow("d1", T0) is True
    assert tracker.last_request("d1") is None


def test_within_window_denied(tracker):
    tracker.record("d1", T0)
    assert tracker.allow("d1", T0 + timedelta(minutes=1)) is False


def test_exactly_at_window_still_denied(tracker):
    tracker.record("d1", T0)
    assert tracker.allow("d1", T0 + timedelta(minutes=5)) is False


def test_after_window_allowed(tracker):
    tracker.record("d1", T0)
    assert tracker.allow("d1", T0 + timedelta(minutes=5, seconds=1)) is True


def test_per_requester(tracker):
    tracker.record("d1", T0)
    assert tracker.allow("d2", T0) is True


def test_remaining_counts_down(tracker):
    tracker.record("d1", T0)
    remaining = tracker.remaining("d1", T0 + timedelta(minutes=2))
    assert timedelta(minutes=3) <= remaining <= timedelta(minutes=3, seconds=1)
    assert tracker.remaining("d1", T0 + timedelta(minutes=6)) == timedelta(0)


def test_denial_reported_to_metrics_callback():
    callback = MagicMock()
    tracker = CooldownTracker(window=timedelta(minutes=5), metrics_callback=callback)
    tracker.record("d1", T0)
    tracker.allow("d1", T0)
    callback.assert_called_once_with("cooldown_rejections", requester="d1")
