"""Visibility rules and filter predicates for event listings.

Everything in this module is pure: it works on sequences of EventRecord that
were already loaded, so changing a filter never touches the database.
"""

from dataclasses import dataclass
from datetime import date
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

from ..config.event_types import (
    DURATION_BUCKETS,
    EVENT_ROLES,
    FLAG_EXCLUSION_SCOPE,
    OTHERS_TYPE_FILTER,
    STANDARD_EVENT_TYPES,
)
from ..errors import ValidationError
from ..models.event import EventRecord
from .dates import parse_event_date
from .duration import matches_duration_bucket

FlaggedKey = Tuple[str, int]

EXCLUSION_SCOPES = ('pair', 'shared')


@dataclass(frozen=True)
class EventFilter:
    """
    Compound filter over event records; unset fields match everything.

    Fields:
        type: Exact event type, or 'Others' for any non-standard type
        role: Exact role ('Organized' or 'Attended')
        from_date: Keep events whose from_date >= this ISO date
        to_date: Keep events whose to_date <= this ISO date
        duration: Duration bucket label ('1', '2-7', '8-30', '31+')
        academic_year: Academic-year label ('2023-2024')
    """
    type: Optional[str] = None
    role: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    duration: Optional[str] = None
    academic_year: Optional[str] = None

    def __post_init__(self):
        if self.duration and self.duration not in DURATION_BUCKETS:
            raise ValidationError(
                f"Unknown duration filter '{self.duration}'. "
                f"Expected one of: {', '.join(DURATION_BUCKETS)}"
            )
        if self.role and self.role not in EVENT_ROLES:
            raise ValidationError(
                f"Unknown role filter '{self.role}'. Expected one of: {', '.join(EVENT_ROLES)}"
            )

    def matches(self, record: EventRecord) -> bool:
        """Check whether a record satisfies every set criterion."""
        if self.type and not matches_type(record.type, self.type):
            return False
        if self.role and record.role != self.role:
            return False
        # ISO dates compare correctly as strings
        if self.from_date and not (record.from_date and record.from_date >= self.from_date):
            return False
        if self.to_date and not (record.to_date and record.to_date <= self.to_date):
            return False
        if self.duration and not matches_duration_bucket(record.days, self.duration):
            return False
        if self.academic_year and record.academic_year != self.academic_year:
            return False
        return True


def matches_type(event_type: Optional[str], type_filter: str) -> bool:
    """
    Match an event type against the type filter.

    'Others' is a catch-all for free-text types entered at creation time: it
    matches every type outside the standard set.
    """
    if type_filter == OTHERS_TYPE_FILTER:
        return event_type not in STANDARD_EVENT_TYPES
    return event_type == type_filter


def exclude_flagged(
    records: Iterable[EventRecord],
    flagged_keys: AbstractSet[FlaggedKey],
    scope: str = FLAG_EXCLUSION_SCOPE
) -> List[EventRecord]:
    """
    Drop records that are currently flagged.

    Args:
        records: Active records of any source kind
        flagged_keys: (source kind, event id) pairs of flagged events
        scope: 'pair' excludes by (source kind, id); 'shared' excludes by bare
               id across both kinds, which also hides an unflagged record of the
               other kind that happens to share the numeric id

    Raises:
        ValueError: If the scope is unknown
    """
    if scope not in EXCLUSION_SCOPES:
        raise ValueError(f"Unknown flag exclusion scope: {scope}")
    if scope == 'shared':
        flagged_ids = {event_id for _, event_id in flagged_keys}
        return [record for record in records if record.id not in flagged_ids]
    return [record for record in records if record.key not in flagged_keys]


def sort_by_from_date(records: Iterable[EventRecord]) -> List[EventRecord]:
    """Newest first; records without a usable from_date go last."""
    return sorted(
        records,
        key=lambda record: parse_event_date(record.from_date) or date.min,
        reverse=True
    )


def visible_events(
    records: Iterable[EventRecord],
    flagged_keys: AbstractSet[FlaggedKey],
    event_filter: Optional[EventFilter] = None,
    scope: str = FLAG_EXCLUSION_SCOPE
) -> List[EventRecord]:
    """
    Compute the ordered list of records an actor gets to see.

    Flagged records are removed first, the rest is sorted by from_date
    (newest first) and finally narrowed down by the filter.
    """
    remaining = sort_by_from_date(exclude_flagged(records, flagged_keys, scope))
    if event_filter is None:
        return remaining
    return [record for record in remaining if event_filter.matches(record)]


def distinct_types(records: Sequence[EventRecord]) -> List[str]:
    """Distinct event types present in the records, alphabetically."""
    return sorted({record.type for record in records if record.type})
