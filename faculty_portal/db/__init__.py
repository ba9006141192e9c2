"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    SessionError,
    StorageError,
    db
)
from .operations import execute_in_transaction, move_record
from .tables import TableGateway, TABLES, get_model

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',

    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'SessionError',
    'StorageError',

    # Global instance
    'db',

    # Utilities
    'execute_in_transaction',
    'move_record',
    'TableGateway',
    'TABLES',
    'get_model',
]
