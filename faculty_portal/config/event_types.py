"""Configuration for event sources, vocabularies and listing behaviour."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple
import os

# Internal imports - environment must be first
from .environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401


@dataclass(frozen=True)
class EventSourceRegistration:
    """
    Registration of one event-authoring source.

    Fields:
        kind: Source kind identifier used in URLs and records ('faculty', 'department')
        table: Name of the table holding the active events of this source
        owner_table: Name of the table holding the owners of these events
        owner_key: Foreign key column on the event table pointing at the owner
        owner_relationship: Relationship on the event model that loads the owner row
        name: Display name of the source (e.g., 'Faculty')
    """
    kind: str
    table: str
    owner_table: str
    owner_key: str
    owner_relationship: str
    name: str


# Registry of the two event-authoring sources
SOURCES: Dict[str, EventSourceRegistration] = {
    'faculty': EventSourceRegistration(
        kind='faculty',
        table='faculty_events',
        owner_table='faculty',
        owner_key='faculty_id',
        owner_relationship='faculty',
        name='Faculty'
    ),
    'department': EventSourceRegistration(
        kind='department',
        table='department_events',
        owner_table='departments',
        owner_key='department_id',
        owner_relationship='department',
        name='Department'
    ),
}

# Roles a faculty member can have in an event
ROLE_ORGANIZED = 'Organized'
ROLE_ATTENDED = 'Attended'
EVENT_ROLES = (ROLE_ORGANIZED, ROLE_ATTENDED)

# Types with a dedicated filter entry; anything else falls under "Others"
STANDARD_EVENT_TYPES = ('Workshop', 'Seminar', 'FDP', 'STP', 'Competition')
OTHERS_TYPE_FILTER = 'Others'

# Allowed values advertised in the department import template
DEPARTMENT_EVENT_TYPES = (
    'Workshop', 'Seminar', 'Conference', 'Competition',
    'FDP', 'STP', 'Hackathon', 'Guest lecture', 'Technical talk'
)

# Duration buckets: label -> (min days, max days or None for open-ended)
DURATION_BUCKETS: Dict[str, Tuple[int, Optional[int]]] = {
    '1': (1, 1),
    '2-7': (2, 7),
    '8-30': (8, 30),
    '31+': (31, None),
}

# Maximum number of attachment URLs per faculty event
MAX_FACULTY_ATTACHMENTS = 10

# 'pair' excludes flagged events by (source kind, id); 'shared' reproduces the
# legacy behaviour of one id set shared by both sources
FLAG_EXCLUSION_SCOPE = os.environ.get('FLAG_EXCLUSION_SCOPE', 'pair').lower()

# Seconds to wait for a single attachment download
ATTACHMENT_DOWNLOAD_TIMEOUT = int(os.environ.get('ATTACHMENT_DOWNLOAD_TIMEOUT', '30'))

# Default row limit for directory listings
DIRECTORY_LIMIT = 200


def get_source(kind: str) -> EventSourceRegistration:
    """
    Get the registration for a source kind.

    Args:
        kind: The source kind (e.g., 'faculty')

    Returns:
        EventSourceRegistration: The registration of that source

    Raises:
        ValueError: If no source is registered under the given kind
    """
    registration = SOURCES.get(kind)
    if not registration:
        raise ValueError(f"No event source found with kind: {kind}")
    return registration


def get_source_by_table(table: str) -> EventSourceRegistration:
    """
    Get the registration whose active events live in the given table.

    Raises:
        ValueError: If no source uses the given table
    """
    for registration in SOURCES.values():
        if registration.table == table:
            return registration
    raise ValueError(f"No event source found for table: {table}")
