"""Model for events moved out of their origin table by moderation."""

from typing import Dict, Any
from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON, Text

from .base import Base, utc_now


class FlaggedEvent(Base):
    """
    Snapshot of an event that an admin flagged.

    Flagging moves the row: while a FlaggedEvent exists, its origin table
    holds no row with id ``event_id``. The snapshot columns are the union of
    both event tables so that either kind can be restored with its original id.

    Fields:
        id: Row identifier of the flagged entry (auto-generated)
        event_id: Id the event had (and gets back) in its origin table
        source_table: 'faculty_events' or 'department_events'
        admin_comment: Reason given by the admin when flagging
        owner_comment: Reason given by the owner when requesting an unflag
        unflag_requested: Whether the owner asked for the flag to be lifted
        original_created_at: created_at of the origin row
        created_at: When the event was flagged
    """
    __tablename__ = 'flagged_events'

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, nullable=False, index=True)
    source_table = Column(String, nullable=False)

    # Snapshot of the origin row
    faculty_id = Column(Integer, index=True)
    department_id = Column(Integer, index=True)
    title = Column(String)
    type = Column(String)
    event_role = Column(String)
    from_date = Column(String)
    to_date = Column(String)
    participants = Column(Integer)
    remarks = Column(Text)
    coordinator_name = Column(String)
    location = Column(String)
    output = Column(Text)
    attachments = Column(JSON)
    certificate_link = Column(String)
    original_created_at = Column(DateTime(timezone=True))

    # Moderation state
    admin_comment = Column(Text)
    owner_comment = Column(Text)
    unflag_requested = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'event_id': self.event_id,
            'source_table': self.source_table,
            'faculty_id': self.faculty_id,
            'department_id': self.department_id,
            'title': self.title,
            'type': self.type,
            'event_role': self.event_role,
            'from_date': self.from_date,
            'to_date': self.to_date,
            'participants': self.participants,
            'remarks': self.remarks,
            'coordinator_name': self.coordinator_name,
            'location': self.location,
            'output': self.output,
            'attachments': self.attachments,
            'certificate_link': self.certificate_link,
            'admin_comment': self.admin_comment,
            'owner_comment': self.owner_comment,
            'unflag_requested': bool(self.unflag_requested),
            'created_at': self.created_at,
        }

    def __str__(self) -> str:
        return (
            f"FlaggedEvent(id={self.id}, event_id={self.event_id}, "
            f"source_table={self.source_table}, unflag_requested={self.unflag_requested})"
        )
