"""Owner profiles: the account details shown on each dashboard."""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..db import Database, TableGateway, db, execute_in_transaction
from ..errors import NotFoundError, ValidationError
from .directory import DEPARTMENT_COLUMNS, FACULTY_COLUMNS, IDENTITY_COLUMNS

logger = logging.getLogger(__name__)

# Fields a faculty member may change on their own profile
EDITABLE_FACULTY_FIELDS = ('name', 'gender', 'school', 'department')


def _profile(row, columns, raw_columns=()) -> Dict[str, Any]:
    profile = {
        column: getattr(row, column) or ('' if column in IDENTITY_COLUMNS else 'N/A')
        for column in columns
    }
    profile.update({column: getattr(row, column) for column in raw_columns})
    profile['id'] = row.id
    return profile


def _load(table: str, owner_id: int, label: str, database: Database, columns, raw_columns=()) -> Dict[str, Any]:
    def operation(session: Session) -> Dict[str, Any]:
        row = TableGateway(session).get(table, owner_id)
        if row is None:
            raise NotFoundError(f"{label} {owner_id} not found")
        return _profile(row, columns, raw_columns)

    return execute_in_transaction(database, operation)


def get_faculty_profile(faculty_id: int, database: Optional[Database] = None) -> Dict[str, Any]:
    """
    Profile of one faculty member, with 'N/A' for details never filled in.

    Raises:
        NotFoundError: No such faculty member
    """
    return _load('faculty', faculty_id, "Faculty", database or db, FACULTY_COLUMNS, ('profile_pic',))


def get_department_profile(department_id: int, database: Optional[Database] = None) -> Dict[str, Any]:
    """Profile of one department. Raises NotFoundError for an unknown id."""
    return _load('departments', department_id, "Department", database or db, DEPARTMENT_COLUMNS)


def update_faculty_profile(
    faculty_id: int,
    data: Dict[str, Any],
    database: Optional[Database] = None
) -> Dict[str, Any]:
    """
    Update the editable details of a faculty member's profile.

    The name is required; gender, school and department are overwritten
    (blank clears them). The picture URL only changes when one is given.

    Raises:
        ValidationError: The name is missing
        NotFoundError: No such faculty member
    """
    name = str(data.get('name') or '').strip()
    if not name:
        raise ValidationError("Name is required.")

    patch = {
        field: str(data.get(field) or '').strip() or None
        for field in EDITABLE_FACULTY_FIELDS
    }
    patch['name'] = name
    picture = str(data.get('profile_pic') or '').strip()
    if picture:
        patch['profile_pic'] = picture

    def operation(session: Session) -> None:
        gateway = TableGateway(session)
        if gateway.get('faculty', faculty_id) is None:
            raise NotFoundError(f"Faculty {faculty_id} not found")
        gateway.update('faculty', patch, {'id': faculty_id})

    database = database or db
    execute_in_transaction(database, operation)
    logger.info(f"Updated profile of faculty {faculty_id}")
    return get_faculty_profile(faculty_id, database)
