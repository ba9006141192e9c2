"""Owner-facing event authoring, profiles and the admin directory."""

from .event_authoring import (
    create_faculty_event,
    create_department_event,
    update_department_event,
    insert_department_events,
    get_owned_event,
)
from .directory import list_faculty, list_departments
from .profiles import get_faculty_profile, get_department_profile, update_faculty_profile

__all__ = [
    'create_faculty_event',
    'create_department_event',
    'update_department_event',
    'insert_department_events',
    'get_owned_event',
    'list_faculty',
    'list_departments',
    'get_faculty_profile',
    'get_department_profile',
    'update_faculty_profile',
]
