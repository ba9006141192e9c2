"""Table-style access to the portal's logical tables.

The gateway offers the small set of operations the rest of the code relies
on (select, get, insert, update, upsert, delete) keyed by table name, so that
services never build queries against model classes directly.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select as sa_select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..models import Faculty, Department, Admin, FacultyEvent, DepartmentEvent, FlaggedEvent
from .db_core import StorageError

logger = logging.getLogger(__name__)

TABLES: Dict[str, type] = {
    'faculty': Faculty,
    'departments': Department,
    'admin': Admin,
    'faculty_events': FacultyEvent,
    'department_events': DepartmentEvent,
    'flagged_events': FlaggedEvent,
}


def get_model(table: str) -> type:
    """
    Get the model class for a table name.

    Raises:
        ValueError: If the table is unknown
    """
    model = TABLES.get(table)
    if model is None:
        raise ValueError(f"Unknown table: {table}")
    return model


class TableGateway:
    """
    Table operations bound to one open session.

    Filters are equality matches on column names. Every SQLAlchemy failure is
    logged and re-raised as StorageError carrying the driver's message.
    """

    def __init__(self, session: Session):
        self.session = session

    def _where(self, model: type, filters: Optional[Dict[str, Any]]):
        clauses = []
        for column, value in (filters or {}).items():
            clauses.append(getattr(model, column) == value)
        return clauses

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        related: Sequence[str] = ()
    ) -> List[Any]:
        """
        Select rows from a table.

        Args:
            table: Table name (e.g., 'faculty_events')
            filters: Column -> value equality filters
            order_by: Column to sort by
            descending: Sort descending instead of ascending
            limit: Maximum number of rows
            related: Relationship names to load in the same query (owner joins)

        Returns:
            List of model instances
        """
        model = get_model(table)
        statement = sa_select(model).where(*self._where(model, filters))
        for name in related:
            statement = statement.options(joinedload(getattr(model, name)))
        if order_by:
            column = getattr(model, order_by)
            statement = statement.order_by(column.desc() if descending else column.asc())
        if limit is not None:
            statement = statement.limit(limit)
        try:
            return list(self.session.scalars(statement).unique())
        except SQLAlchemyError as e:
            logger.error(f"Select from {table} failed: {e}")
            raise StorageError(str(e)) from e

    def get(self, table: str, row_id: int, filters: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """Get one row by primary key, optionally constrained by extra filters."""
        rows = self.select(table, dict(filters or {}, id=row_id), limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, rows: Iterable[Dict[str, Any]]) -> List[Any]:
        """Insert rows and return them with their generated ids."""
        model = get_model(table)
        instances = [model(**row) for row in rows]
        try:
            self.session.add_all(instances)
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Insert into {table} failed: {e}")
            raise StorageError(str(e)) from e
        return instances

    def update(self, table: str, patch: Dict[str, Any], filters: Dict[str, Any]) -> int:
        """Apply a patch to every matching row and return the number of rows changed."""
        rows = self.select(table, filters)
        try:
            for row in rows:
                for column, value in patch.items():
                    setattr(row, column, value)
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Update of {table} failed: {e}")
            raise StorageError(str(e)) from e
        return len(rows)

    def upsert(self, table: str, row: Dict[str, Any]) -> Any:
        """Insert a row, or overwrite the existing row with the same primary key."""
        model = get_model(table)
        try:
            instance = self.session.merge(model(**row))
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Upsert into {table} failed: {e}")
            raise StorageError(str(e)) from e
        return instance

    def delete(self, table: str, filters: Dict[str, Any]) -> int:
        """Delete every matching row and return the number of rows removed."""
        if not filters:
            raise ValueError("Refusing to delete without filters")
        rows = self.select(table, filters)
        try:
            for row in rows:
                self.session.delete(row)
            self.session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Delete from {table} failed: {e}")
            raise StorageError(str(e)) from e
        return len(rows)
