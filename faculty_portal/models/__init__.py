"""Models package initialization."""

from .base import Base
from .owners import Faculty, Department, Admin
from .event_tables import FacultyEvent, DepartmentEvent
from .flagged_event import FlaggedEvent
from .actor import Actor, ADMIN
from .event import (
    EventRecord,
    FacultyEventRecord,
    DepartmentEventRecord,
    FACULTY,
    DEPARTMENT,
    SOURCE_KINDS,
)

__all__ = [
    'Base',
    'Faculty',
    'Department',
    'Admin',
    'FacultyEvent',
    'DepartmentEvent',
    'FlaggedEvent',
    'EventRecord',
    'FacultyEventRecord',
    'DepartmentEventRecord',
    'FACULTY',
    'DEPARTMENT',
    'SOURCE_KINDS',
    'Actor',
    'ADMIN',
]
