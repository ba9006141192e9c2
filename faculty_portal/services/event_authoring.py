"""Creating and editing events on behalf of their owners."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from ..config.event_types import EVENT_ROLES, MAX_FACULTY_ATTACHMENTS
from ..db import Database, TableGateway, db, execute_in_transaction
from ..errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEPARTMENT_REQUIRED_MESSAGE = "Event Title, Type, Coordinator Name, and Location are required."


def _text(data: Dict[str, Any], key: str) -> str:
    return str(data.get(key) or '').strip()


def _optional_text(data: Dict[str, Any], key: str) -> Optional[str]:
    return _text(data, key) or None


def _participants(value: Any, default: Optional[int]) -> Optional[int]:
    if value is None or value == '':
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _require_owner(session: Session, table: str, owner_id: int, label: str) -> None:
    if TableGateway(session).get(table, owner_id) is None:
        raise NotFoundError(f"{label} {owner_id} not found")


def faculty_event_values(faculty_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a faculty event submission and map it to faculty_events columns.

    Raises:
        ValidationError: Missing title or role, unknown role, or too many attachments
    """
    title = _text(data, 'title')
    role = _text(data, 'event_role')
    if not title or not role:
        raise ValidationError("Event title and role are required.")
    if role not in EVENT_ROLES:
        raise ValidationError(f"Event role must be one of: {', '.join(EVENT_ROLES)}")

    attachments = [str(url).strip() for url in (data.get('attachments') or []) if str(url).strip()]
    if len(attachments) > MAX_FACULTY_ATTACHMENTS:
        raise ValidationError(
            f"You can only upload a maximum of {MAX_FACULTY_ATTACHMENTS} images."
        )

    return {
        'faculty_id': faculty_id,
        'title': title,
        'type': _optional_text(data, 'type'),
        'event_role': role,
        'from_date': _optional_text(data, 'from_date'),
        'to_date': _optional_text(data, 'to_date'),
        'participants': _participants(data.get('participants'), None),
        'remarks': _optional_text(data, 'remarks'),
        'attachments': attachments,
    }


def department_event_values(
    department_id: int,
    data: Dict[str, Any],
    require_attachments: bool = True
) -> Dict[str, Any]:
    """
    Validate a department event submission and map it to department_events columns.

    Raises:
        ValidationError: A required field is missing
    """
    values = {
        'department_id': department_id,
        'title': _text(data, 'title'),
        'type': _text(data, 'type'),
        'coordinator_name': _text(data, 'coordinator_name'),
        'from_date': _optional_text(data, 'from_date'),
        'to_date': _optional_text(data, 'to_date'),
        'participants': _participants(data.get('participants'), 0),
        'location': _text(data, 'location'),
        'output': _text(data, 'output'),
        'attachments': _text(data, 'attachments'),
        'certificate_link': _optional_text(data, 'certificate_link'),
    }
    if not (values['title'] and values['location'] and values['coordinator_name'] and values['type']):
        raise ValidationError(DEPARTMENT_REQUIRED_MESSAGE)
    if require_attachments and not values['attachments']:
        raise ValidationError("A drive link for attachments is required.")
    return values


def create_faculty_event(
    faculty_id: int,
    data: Dict[str, Any],
    database: Optional[Database] = None
) -> Dict[str, Any]:
    """Validate and store a new faculty event; returns the stored row."""
    values = faculty_event_values(faculty_id, data)

    def operation(session: Session) -> Dict[str, Any]:
        _require_owner(session, 'faculty', faculty_id, "Faculty")
        event, = TableGateway(session).insert('faculty_events', [values])
        return event.to_dict()

    event = execute_in_transaction(database or db, operation)
    logger.info(f"Added faculty event {event['id']}: {event['title']}")
    return event


def create_department_event(
    department_id: int,
    data: Dict[str, Any],
    database: Optional[Database] = None
) -> Dict[str, Any]:
    """Validate and store a new department event; returns the stored row."""
    values = department_event_values(department_id, data)

    def operation(session: Session) -> Dict[str, Any]:
        _require_owner(session, 'departments', department_id, "Department")
        event, = TableGateway(session).insert('department_events', [values])
        return event.to_dict()

    event = execute_in_transaction(database or db, operation)
    logger.info(f"Added department event {event['id']}: {event['title']}")
    return event


def update_department_event(
    department_id: int,
    event_id: int,
    data: Dict[str, Any],
    database: Optional[Database] = None
) -> Dict[str, Any]:
    """
    Overwrite the editable fields of a department's own event.

    Raises:
        ValidationError: A required field is missing
        NotFoundError: The event does not exist or belongs to another department
    """
    values = department_event_values(department_id, data, require_attachments=False)

    def operation(session: Session) -> Dict[str, Any]:
        gateway = TableGateway(session)
        event = gateway.get('department_events', event_id, {'department_id': department_id})
        if event is None:
            raise NotFoundError(f"Department event {event_id} not found")
        gateway.update('department_events', values, {'id': event_id})
        return event.to_dict()

    event = execute_in_transaction(database or db, operation)
    logger.info(f"Updated department event {event_id}")
    return event


def insert_department_events(
    department_id: int,
    rows: Iterable[Dict[str, Any]],
    database: Optional[Database] = None
) -> List[Dict[str, Any]]:
    """
    Store several department events in one transaction (spreadsheet import).

    Rows are validated like single submissions except that the attachments
    link is optional; one invalid row rejects the whole batch.
    """
    values = [department_event_values(department_id, row, require_attachments=False) for row in rows]
    if not values:
        raise ValidationError("No valid rows to import.")

    def operation(session: Session) -> List[Dict[str, Any]]:
        _require_owner(session, 'departments', department_id, "Department")
        return [event.to_dict() for event in TableGateway(session).insert('department_events', values)]

    events = execute_in_transaction(database or db, operation)
    logger.info(f"Imported {len(events)} department events for department {department_id}")
    return events


def get_owned_event(
    source_table: str,
    owner_key: str,
    owner_id: int,
    event_id: int,
    database: Optional[Database] = None
) -> Dict[str, Any]:
    """
    Get one active event of an owner.

    Raises:
        NotFoundError: The event does not exist or belongs to someone else
    """
    def operation(session: Session) -> Dict[str, Any]:
        event = TableGateway(session).get(source_table, event_id, {owner_key: owner_id})
        if event is None:
            raise NotFoundError(f"Event {event_id} not found")
        return event.to_dict()

    return execute_in_transaction(database or db, operation)
