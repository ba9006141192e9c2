"""Event duration in days and the duration buckets used for filtering."""

from typing import Optional

from ..config.event_types import DURATION_BUCKETS
from .dates import DateLike, parse_event_date


def duration_days(from_date: DateLike, to_date: DateLike) -> Optional[int]:
    """
    Number of days an event covers, counting both endpoints.

    Returns None if either date is missing or unparseable. The order of the
    two dates does not matter.
    """
    start = parse_event_date(from_date)
    end = parse_event_date(to_date)
    if start is None or end is None:
        return None
    return abs((end - start).days) + 1


def matches_duration_bucket(days: Optional[int], bucket: str) -> bool:
    """
    Check a duration against a bucket label ('1', '2-7', '8-30', '31+').

    Events without a duration never match a bucket.

    Raises:
        ValueError: If the bucket label is unknown
    """
    if bucket not in DURATION_BUCKETS:
        raise ValueError(f"Unknown duration bucket: {bucket}")
    if days is None:
        return False
    low, high = DURATION_BUCKETS[bucket]
    if days < low:
        return False
    return high is None or days <= high
