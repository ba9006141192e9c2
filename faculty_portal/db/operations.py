"""Database operations and utilities.

This module provides transactional helpers shared by the services. Nothing
here retries: a failed operation is reported once and must be re-invoked by
the caller.
"""

import logging
from typing import Any, Callable, Dict, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .db_core import Database, DatabaseError, StorageError
from ..errors import PortalError

logger = logging.getLogger(__name__)

# Type variable for generic return type
T = TypeVar('T')


def execute_in_transaction(
    database: Database,
    operation: Callable[..., T],
    *args: Any,
    **kwargs: Any
) -> T:
    """
    Execute a database operation within a single transaction.

    Every statement issued by ``operation`` commits together or not at all.

    Args:
        database: Database to open the session on
        operation: Callable taking the session as first argument
        *args: Positional arguments to pass to the operation
        **kwargs: Keyword arguments to pass to the operation

    Returns:
        The result of the operation

    Example:
        def rename_event(session, event_id: int, title: str):
            event = session.get(FacultyEvent, event_id)
            event.title = title
            return event

        renamed = execute_in_transaction(db, rename_event, event_id=7, title="FDP on ML")
    """
    with database.session() as session:
        try:
            return operation(session, *args, **kwargs)
        except (PortalError, DatabaseError):
            raise
        except IntegrityError as e:
            raise StorageError(f"Integrity error in transaction: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e


def move_record(
    session: Session,
    source: Any,
    target_model: type,
    transform: Callable[[Dict[str, Any]], Dict[str, Any]]
) -> Any:
    """
    Move a row from one table to another inside the caller's transaction.

    The source row's column values are passed through ``transform``; the
    result is merged into ``target_model`` (an upsert by primary key when the
    transform sets one) and the source row is deleted. Run it inside
    ``execute_in_transaction`` so that the copy and the delete commit together.

    Args:
        session: Open session
        source: Loaded source row
        target_model: Model class of the destination table
        transform: Maps source column values to destination column values

    Returns:
        The destination row, flushed so its primary key is populated
    """
    values = {column.key: getattr(source, column.key) for column in source.__table__.columns}
    target = session.merge(target_model(**transform(values)))
    session.delete(source)
    session.flush()
    logger.debug(
        f"Moved {source.__tablename__} row {values.get('id')} to "
        f"{target_model.__tablename__} row {target.id}"
    )
    return target
