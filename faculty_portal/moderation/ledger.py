"""Moderation ledger: the flag / unflag state machine.

An event is in one of four states:

    ACTIVE            row lives in its origin table (faculty_events or department_events)
    FLAGGED           row lives only in flagged_events, unflag_requested is false
    UNFLAG_REQUESTED  the owner asked for the flag to be lifted
    DELETED           the flagged row was removed for good (terminal)

Transitions:

    ACTIVE --flag--> FLAGGED --request_unflag--> UNFLAG_REQUESTED
    UNFLAG_REQUESTED --approve_unflag--> ACTIVE (same id as before the flag)
    FLAGGED | UNFLAG_REQUESTED --delete_flagged--> DELETED

Both moves between tables (flag and approve_unflag) copy and delete inside one
transaction, so a failure leaves the event exactly where it was.
"""

from enum import Enum
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..config.event_types import get_source, get_source_by_table
from ..db import Database, TableGateway, db, execute_in_transaction, get_model, move_record
from ..errors import InvalidTransitionError, NotFoundError, ValidationError
from ..models import FACULTY, DEPARTMENT, FlaggedEvent
from ..models.actor import Actor

logger = logging.getLogger(__name__)


class ModerationState(str, Enum):
    ACTIVE = 'active'
    FLAGGED = 'flagged'
    UNFLAG_REQUESTED = 'unflag_requested'
    DELETED = 'deleted'


# Columns of an origin row that never go into the flagged snapshot
SNAPSHOT_EXCLUDED_COLUMNS = ('id', 'is_flagged', 'created_at')

# Columns restored into each origin table when a flag is lifted
RESTORE_COLUMNS = {
    FACULTY: (
        'faculty_id', 'title', 'type', 'event_role', 'from_date', 'to_date',
        'participants', 'remarks', 'attachments',
    ),
    DEPARTMENT: (
        'department_id', 'title', 'type', 'coordinator_name', 'from_date', 'to_date',
        'participants', 'location', 'output', 'attachments', 'certificate_link',
    ),
}


def _require_comment(comment: Optional[str], message: str) -> str:
    text = (comment or '').strip()
    if not text:
        raise ValidationError(message)
    return text


def state_of_row(row: Optional[FlaggedEvent]) -> ModerationState:
    """Moderation state of a flagged_events row (None means it no longer exists)."""
    if row is None:
        return ModerationState.DELETED
    return ModerationState.UNFLAG_REQUESTED if row.unflag_requested else ModerationState.FLAGGED


def snapshot_values(source_kind: str, comment: str):
    """Build the transform turning an origin row into a flagged_events row."""
    table = get_source(source_kind).table

    def transform(values: Dict[str, Any]) -> Dict[str, Any]:
        snapshot = {
            column: value for column, value in values.items()
            if column not in SNAPSHOT_EXCLUDED_COLUMNS
        }
        snapshot.update(
            event_id=values['id'],
            source_table=table,
            original_created_at=values.get('created_at'),
            admin_comment=comment,
            owner_comment=None,
            unflag_requested=False,
        )
        return snapshot

    return transform


def restore_values(values: Dict[str, Any]) -> Dict[str, Any]:
    """Project a flagged_events row back onto the columns of its origin table."""
    source_kind = get_source_by_table(values['source_table']).kind
    row = {column: values[column] for column in RESTORE_COLUMNS[source_kind]}
    row.update(
        id=values['event_id'],
        created_at=values.get('original_created_at'),
        is_flagged=False,
    )
    return row


class ModerationLedger:
    """
    Flag / unflag workflow over the event tables and flagged_events.

    Every method runs in its own transaction and raises:
        ValidationError: missing comment, checked before any storage call
        NotFoundError: the row does not exist or belongs to another owner
        InvalidTransitionError: the action is not valid in the current state
        StorageError: the database rejected an operation (message kept verbatim)
    """

    def __init__(self, database: Optional[Database] = None):
        self.database = database or db

    # Reads

    def get_flagged(self, flagged_id: int, actor: Optional[Actor] = None) -> Dict[str, Any]:
        """Get one flagged row, optionally scoped to its owner."""
        return execute_in_transaction(
            self.database, lambda session: self._load_flagged(session, flagged_id, actor).to_dict()
        )

    def state_of(self, flagged_id: int) -> ModerationState:
        """Current moderation state of a flagged row; DELETED once it is gone."""
        def operation(session: Session) -> ModerationState:
            return state_of_row(TableGateway(session).get('flagged_events', flagged_id))
        return execute_in_transaction(self.database, operation)

    def list_flagged(self, actor: Optional[Actor] = None) -> List[Dict[str, Any]]:
        """
        Flagged rows, newest first.

        Admins (or no actor) get every row; owners only the rows snapshotted
        from their own events.
        """
        def operation(session: Session) -> List[Dict[str, Any]]:
            filters = None
            if actor is not None and not actor.is_admin:
                registration = get_source(actor.role)
                filters = {'source_table': registration.table, registration.owner_key: actor.owner_id}
            rows = TableGateway(session).select(
                'flagged_events', filters, order_by='created_at', descending=True
            )
            return [dict(row.to_dict(), state=state_of_row(row).value) for row in rows]
        return execute_in_transaction(self.database, operation)

    def _load_flagged(self, session: Session, flagged_id: int, actor: Optional[Actor]) -> FlaggedEvent:
        row = TableGateway(session).get('flagged_events', flagged_id)
        if row is None or not self._owned_by(row, actor):
            raise NotFoundError(f"Flagged event {flagged_id} not found")
        return row

    @staticmethod
    def _owned_by(row: FlaggedEvent, actor: Optional[Actor]) -> bool:
        if actor is None or actor.is_admin:
            return True
        registration = get_source(actor.role)
        return (
            row.source_table == registration.table
            and getattr(row, registration.owner_key) == actor.owner_id
        )

    # Transitions

    def flag(
        self,
        event_id: int,
        source_kind: str,
        comment: Optional[str],
        owner_email: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Move an active event into flagged_events.

        Args:
            event_id: Id of the event in its origin table
            source_kind: 'faculty' or 'department'
            comment: Admin's reason; required
            owner_email: Owner contact, recorded in the log only

        Returns:
            The new flagged_events row as a dictionary
        """
        comment = _require_comment(comment, "A comment is required to flag an event.")
        registration = get_source(source_kind)

        def operation(session: Session) -> Dict[str, Any]:
            row = TableGateway(session).get(registration.table, event_id)
            if row is None:
                raise NotFoundError(f"{registration.name} event {event_id} not found")
            flagged = move_record(session, row, FlaggedEvent, snapshot_values(source_kind, comment))
            return flagged.to_dict()

        flagged = execute_in_transaction(self.database, operation)
        logger.info(
            f"Flagged {registration.name} event {event_id} as flagged row {flagged['id']}"
            + (f" (owner {owner_email})" if owner_email else "")
        )
        return flagged

    def request_unflag(
        self,
        flagged_id: int,
        comment: Optional[str],
        actor: Optional[Actor] = None
    ) -> Dict[str, Any]:
        """
        Record the owner's request to lift a flag.

        Only valid while the row is FLAGGED; a second request is rejected.
        """
        comment = _require_comment(comment, "A reason is required to request an unflag.")

        def operation(session: Session) -> Dict[str, Any]:
            row = self._load_flagged(session, flagged_id, actor)
            if state_of_row(row) is not ModerationState.FLAGGED:
                raise InvalidTransitionError(
                    f"An unflag request for flagged event {flagged_id} was already sent"
                )
            TableGateway(session).update(
                'flagged_events',
                {'unflag_requested': True, 'owner_comment': comment},
                {'id': flagged_id}
            )
            return row.to_dict()

        updated = execute_in_transaction(self.database, operation)
        logger.info(f"Unflag requested for flagged event {flagged_id}")
        return updated

    def approve_unflag(self, flagged_id: int) -> Dict[str, Any]:
        """
        Restore a flagged event to its origin table under its original id.

        Only valid once the owner requested it. The restore is an upsert by id,
        so the event comes back exactly once even if the row was recreated.

        Returns:
            The restored origin row as a dictionary
        """
        def operation(session: Session) -> Dict[str, Any]:
            row = self._load_flagged(session, flagged_id, None)
            if state_of_row(row) is not ModerationState.UNFLAG_REQUESTED:
                raise InvalidTransitionError(
                    f"Flagged event {flagged_id} has no pending unflag request"
                )
            target_model = get_model(row.source_table)
            restored = move_record(session, row, target_model, restore_values)
            return restored.to_dict()

        restored = execute_in_transaction(self.database, operation)
        logger.info(f"Approved unflag of flagged event {flagged_id}; restored event {restored['id']}")
        return restored

    def delete_flagged(self, flagged_id: int) -> None:
        """Delete a flagged event for good, whatever its state."""
        def operation(session: Session) -> None:
            self._load_flagged(session, flagged_id, None)
            TableGateway(session).delete('flagged_events', {'id': flagged_id})

        execute_in_transaction(self.database, operation)
        logger.info(f"Deleted flagged event {flagged_id}")

    def delete_active(self, event_id: int, source_kind: str) -> None:
        """Delete an active (unflagged) event for good."""
        registration = get_source(source_kind)

        def operation(session: Session) -> None:
            removed = TableGateway(session).delete(registration.table, {'id': event_id})
            if not removed:
                raise NotFoundError(f"{registration.name} event {event_id} not found")

        execute_in_transaction(self.database, operation)
        logger.info(f"Deleted {registration.name} event {event_id}")
