"""Unit tests for the snapshot staleness policy."""

from datetime import datetime, timedelta, timezone

from domain.gain_plan.calculation.staleness import is_stale

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_never_calculated_is_stale():
    assert is_stale(None, NOW) is True


def test_recent_snapshot_is_fresh():
    assert is_stale(NOW - timedelta(hours=1), NOW) is False


def test_exactly_at_threshold_is_fresh():
    assert is_stale(NOW - timedelta(hours=24), NOW) is False


def test_past_threshold_is_stale():
    assert is_stale(NOW - timedelta(hours=24, seconds=1), NOW) is True


def test_custom_threshold():
    assert is_stale(NOW - timedelta(hours=2), NOW, threshold_hours=1) is True
    assert is_stale(NOW - timedelta(hours=2), NOW, threshold_hours=3) is False


def test_naive_timestamps_are_treated_as_utc():
    naive = datetime(2026, 3, 14, 11, 0)

    assert is_stale(naive, NOW) is True
