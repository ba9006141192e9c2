"""Routes package initialization."""

from . import admin, departments, faculty, health

__all__ = [
    'admin',
    'departments',
    'faculty',
    'health'
]
