"""Loading of event snapshots and the aggregated ledger view.

A snapshot is an immutable value holding the active records an actor may see
plus the keys of every flagged event. Listings and exports are computed from
a snapshot in memory; moderation actions invalidate it and callers load a
new one.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from ..config.event_types import FLAG_EXCLUSION_SCOPE, get_source, get_source_by_table
from ..db import Database, TableGateway
from ..models.actor import Actor
from ..models.event import EventRecord
from .academic_year import academic_years
from .normalizer import get_normalizer
from .visibility import EventFilter, FlaggedKey, distinct_types, visible_events

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventSnapshot:
    """
    Immutable view of the active events of one actor.

    Fields:
        records: Active records of every source kind the actor may see
        flagged_keys: (source kind, event id) pairs of all flagged events
        scope: Flag exclusion scope ('pair' or 'shared')
    """
    records: Tuple[EventRecord, ...] = ()
    flagged_keys: FrozenSet[FlaggedKey] = frozenset()
    scope: str = field(default=FLAG_EXCLUSION_SCOPE)

    def visible(self, event_filter: Optional[EventFilter] = None) -> List[EventRecord]:
        """Visible records, newest first, narrowed by the filter."""
        return visible_events(self.records, self.flagged_keys, event_filter, self.scope)

    def academic_years(self) -> List[str]:
        """Academic years present among the visible records, newest first."""
        return academic_years(record.from_date for record in self.visible())

    def types(self) -> List[str]:
        """Event types present among the visible records."""
        return distinct_types(self.visible())


def load_source_records(database: Database, source_kind: str, actor: Actor) -> List[EventRecord]:
    """
    Load and normalize the active events of one source kind.

    Args:
        database: Database to read from
        source_kind: 'faculty' or 'department'
        actor: Restricts the rows to the actor's own unless it is an admin

    Returns:
        Normalized records with owner name and email resolved
    """
    registration = get_source(source_kind)
    with database.session() as session:
        rows = TableGateway(session).select(
            registration.table,
            actor.owner_filter(registration.owner_key),
            order_by='from_date',
            descending=True,
            related=(registration.owner_relationship,)
        )
        records = get_normalizer(source_kind).normalize_all(rows)
    logger.info(f"Loaded {len(records)} {registration.name} events")
    return records


def load_flagged_keys(database: Database) -> FrozenSet[FlaggedKey]:
    """(source kind, event id) pairs of every flagged event."""
    with database.session() as session:
        rows = TableGateway(session).select('flagged_events')
        return frozenset(
            (get_source_by_table(row.source_table).kind, row.event_id) for row in rows
        )


async def load_snapshot(database: Database, actor: Actor) -> EventSnapshot:
    """
    Load a snapshot for an actor.

    The per-source queries and the flagged-key query run concurrently in worker
    threads; if any of them fails the whole load fails with that error.
    """
    kinds = actor.source_kinds
    results = await asyncio.gather(
        asyncio.to_thread(load_flagged_keys, database),
        *(asyncio.to_thread(load_source_records, database, kind, actor) for kind in kinds)
    )
    flagged_keys, *per_source = results
    records = tuple(record for source_records in per_source for record in source_records)
    return EventSnapshot(records=records, flagged_keys=flagged_keys)


def build_ledger(snapshot: EventSnapshot, event_filter: Optional[EventFilter] = None) -> dict:
    """
    Assemble the listing payload for a snapshot.

    Returns:
        dict with the filtered events and the values to populate filter dropdowns
    """
    events = snapshot.visible(event_filter)
    return {
        'events': [record.to_dict() for record in events],
        'count': len(events),
        'academic_years': snapshot.academic_years(),
        'types': snapshot.types(),
    }
