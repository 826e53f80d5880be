"""Time helpers — naive timestamps (SQLite round-trip) compare as UTC."""

from datetime import datetime, timedelta, timezone

from fantasy_api.core.time_utils import as_utc, is_expired


def test_naive_datetime_treated_as_utc():
    naive = datetime(2026, 1, 1, 10, 0)
    assert as_utc(naive) == datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_aware_datetime_converted():
    plus_two = timezone(timedelta(hours=2))
    assert as_utc(datetime(2026, 1, 1, 12, 0, tzinfo=plus_two)).hour == 10


def test_is_expired_mixes_naive_and_aware():
    now = datetime(2026, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert is_expired(datetime(2026, 1, 1, 9, 59), now)
    assert not is_expired(datetime(2026, 1, 1, 10, 1), now)
    assert not is_expired(None, now)
