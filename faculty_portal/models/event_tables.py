"""Models for the two active event tables."""

from typing import Dict, Any
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, JSON, Text
from sqlalchemy.orm import relationship

from .base import Base, utc_now


class FacultyEvent(Base):
    """
    An event recorded by a faculty member.

    Fields:
        id: Row identifier (auto-generated, restored verbatim on unflag)
        faculty_id: Row id of the owning faculty member
        title: Event title
        type: Event type (free text; standard values listed in config)
        event_role: 'Organized' or 'Attended'
        from_date: First day as ISO 'yyyy-mm-dd' (optional)
        to_date: Last day as ISO 'yyyy-mm-dd' (optional)
        participants: Number of participants (optional)
        remarks: Free-text remarks (optional)
        attachments: List of attachment URLs
        is_flagged: Legacy moderation marker, never copied into flagged_events
        created_at: When the row was created
    """
    __tablename__ = 'faculty_events'
    # Ids are never reused, so an unflagged event can reclaim its original id
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    faculty_id = Column(Integer, ForeignKey('faculty.id'), nullable=False, index=True)
    title = Column(String, nullable=False)
    type = Column(String)
    event_role = Column(String)
    from_date = Column(String)
    to_date = Column(String)
    participants = Column(Integer)
    remarks = Column(Text)
    attachments = Column(JSON, default=list)
    is_flagged = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    faculty = relationship('Faculty')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'faculty_id': self.faculty_id,
            'title': self.title,
            'type': self.type,
            'event_role': self.event_role,
            'from_date': self.from_date,
            'to_date': self.to_date,
            'participants': self.participants,
            'remarks': self.remarks,
            'attachments': list(self.attachments or []),
            'is_flagged': self.is_flagged,
            'created_at': self.created_at,
        }

    def __str__(self) -> str:
        return f"FacultyEvent(id={self.id}, title={self.title}, faculty_id={self.faculty_id})"


class DepartmentEvent(Base):
    """An event organized by a department."""
    __tablename__ = 'department_events'
    __table_args__ = {'sqlite_autoincrement': True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    department_id = Column(Integer, ForeignKey('departments.id'), nullable=False, index=True)
    title = Column(String, nullable=False)
    type = Column(String)
    coordinator_name = Column(String)
    from_date = Column(String)
    to_date = Column(String)
    participants = Column(Integer)
    location = Column(String)
    output = Column(Text)
    attachments = Column(String)  # single drive link
    certificate_link = Column(String)
    is_flagged = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=utc_now)

    department = relationship('Department')

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'id': self.id,
            'department_id': self.department_id,
            'title': self.title,
            'type': self.type,
            'coordinator_name': self.coordinator_name,
            'from_date': self.from_date,
            'to_date': self.to_date,
            'participants': self.participants,
            'location': self.location,
            'output': self.output,
            'attachments': self.attachments,
            'certificate_link': self.certificate_link,
            'is_flagged': self.is_flagged,
            'created_at': self.created_at,
        }

    def __str__(self) -> str:
        return f"DepartmentEvent(id={self.id}, title={self.title}, department_id={self.department_id})"
