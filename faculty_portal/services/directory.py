"""Admin directory of faculty members and departments."""

from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..config.event_types import DIRECTORY_LIMIT
from ..db import Database, TableGateway, db, execute_in_transaction

FACULTY_COLUMNS = ('name', 'faculty_id', 'school', 'department', 'mobile', 'gender', 'email')
DEPARTMENT_COLUMNS = ('name', 'department_id', 'school', 'head_name', 'email')

# Columns shown empty rather than 'N/A' when missing
IDENTITY_COLUMNS = ('name', 'faculty_id', 'department_id', 'email')


def _listing(table: str, columns, database: Database, limit: int) -> List[Dict[str, Any]]:
    def operation(session: Session) -> List[Dict[str, Any]]:
        rows = TableGateway(session).select(table, order_by='name', limit=limit)
        return [
            {
                'id': row.id,
                **{
                    column: getattr(row, column) or ('' if column in IDENTITY_COLUMNS else 'N/A')
                    for column in columns
                },
            }
            for row in rows
        ]
    return execute_in_transaction(database, operation)


def list_faculty(database: Optional[Database] = None, limit: int = DIRECTORY_LIMIT) -> List[Dict[str, Any]]:
    """Faculty members ordered by name."""
    return _listing('faculty', FACULTY_COLUMNS, database or db, limit)


def list_departments(database: Optional[Database] = None, limit: int = DIRECTORY_LIMIT) -> List[Dict[str, Any]]:
    """Departments ordered by name."""
    return _listing('departments', DEPARTMENT_COLUMNS, database or db, limit)
