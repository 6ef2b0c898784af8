from datetime import UTC, datetime, timedelta, timezone

from backend.app.core.time import ensure_utc, utc_now


def test_utc_now_is_timezone_aware_utc():
    value = utc_now()
    assert value.tzinfo is UTC


def test_ensure_utc_treats_naive_as_utc():
    value = ensure_utc(datetime(2024, 1, 1, 9, 30))
    assert value == datetime(2024, 1, 1, 9, 30, tzinfo=UTC)


def test_ensure_utc_converts_offsets():
    plus_two = timezone(timedelta(hours=2))
    value = ensure_utc(datetime(2024, 1, 1, 12, 0, tzinfo=plus_two))
    assert value == datetime(2024, 1, 1, 10, 0, tzinfo=UTC)
    assert value.tzinfo is UTC


def test_ensure_utc_passes_none_through():
    assert ensure_utc(None) is None
