"""Configuration package.

Import ``faculty_portal.config.environment`` first: it loads the .env file
that the other configuration modules read from.
"""

from .environment import ENVIRONMENT, IS_PRODUCTION_ENVIRONMENT
from .event_types import SOURCES, get_source, get_source_by_table

__all__ = [
    'ENVIRONMENT',
    'IS_PRODUCTION_ENVIRONMENT',
    'SOURCES',
    'get_source',
    'get_source_by_table',
]
