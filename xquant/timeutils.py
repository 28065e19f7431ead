"""Millisecond timestamp conversion and time-slicing helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def timestamp_to_datetime(timestamp_ms: int) -> datetime:
    """Convert a millisecond timestamp to an aware UTC datetime.

    Timestamps that cannot be represented (out of range, or negative with a
    sub-second part) map to the Unix epoch.
    """
    if timestamp_ms < 0 and timestamp_ms % 1000:
        return _EPOCH
    seconds, millis = divmod(timestamp_ms, 1000)
    try:
        return _EPOCH + timedelta(seconds=seconds, milliseconds=millis)
    except OverflowError:
        return _EPOCH


def datetime_to_timestamp(dt: datetime) -> int:
    """Convert a datetime (naive values are taken as UTC) to milliseconds."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - _EPOCH
    return delta.days * 86_400_000 + delta.seconds * 1000 + delta.microseconds // 1000


def current_timestamp_ms() -> int:
    """The current time in milliseconds since the epoch."""
    return datetime_to_timestamp(datetime.now(timezone.utc))


def format_timestamp(timestamp_ms: int, fmt: str) -> str:
    """Format a millisecond timestamp with a strftime pattern, in UTC."""
    return timestamp_to_datetime(timestamp_ms).strftime(fmt)


def time_diff_seconds(start_ts: int, end_ts: int) -> float:
    """Seconds between two millisecond timestamps."""
    return (end_ts - start_ts) / 1000.0


def calculate_time_slices(start_ts: int, end_ts: int, num_slices: int) -> list[int]:
    """Start points of ``num_slices`` equal slices of [start_ts, end_ts)."""
    if num_slices == 0:
        return []
    interval = (end_ts - start_ts) / num_slices
    return [start_ts + int(interval * i) for i in range(num_slices)]