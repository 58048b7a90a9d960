"""Epoch-millisecond helpers used for profile timestamps"""
from datetime import datetime, timezone


def now_millis() -> int:
    """
    Current UTC time in epoch milliseconds

    Returns:
        int: milliseconds since 1970-01-01T00:00:00Z
    """
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def millis_to_datetime(millis: int) -> datetime:
    """
    Convert epoch milliseconds to an aware UTC datetime

    Args:
        millis: milliseconds since the epoch

    Returns:
        datetime: timezone-aware datetime in UTC
    """
    return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)


def next_stamp(previous: int, now: int | None = None) -> int:
    """
    Timestamp that is strictly later than `previous`.

    Two saves landing in the same millisecond still produce increasing values.
    """
    if now is None:
        now = now_millis()
    return max(now, previous + 1)
