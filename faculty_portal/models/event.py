"""Unified event record shared by the listing, filtering and export code."""

from dataclasses import dataclass, asdict
from typing import Optional, Tuple, Dict, Any

from ..config.event_types import ROLE_ATTENDED, ROLE_ORGANIZED
from ..events.academic_year import academic_year
from ..events.duration import duration_days

FACULTY = 'faculty'
DEPARTMENT = 'department'
SOURCE_KINDS = (FACULTY, DEPARTMENT)


@dataclass(frozen=True)
class EventRecord:
    """
    Event from either authoring source, in one shape.

    Records are immutable snapshots of a database row; the concrete class
    (FacultyEventRecord or DepartmentEventRecord) tells which table the row
    came from.

    Fields:
        id: Row id in the origin table (unique per source kind only)
        title: Event title
        source_kind: 'faculty' or 'department'
        type: Event type
        from_date: First day as ISO 'yyyy-mm-dd' (optional)
        to_date: Last day as ISO 'yyyy-mm-dd' (optional)
        role: 'Organized', 'Attended' or None
        participants: Number of participants (optional)
        location: Where the event took place (optional)
        attachments: Attachment URLs
        owner_id: Row id of the owning faculty member or department
        owner_name: Owner display name, 'N/A' when the owner row is missing
        owner_email: Owner email, 'N/A' when the owner row is missing
    """
    id: int
    title: str
    source_kind: str = ''
    type: Optional[str] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    role: Optional[str] = None
    participants: Optional[int] = None
    location: Optional[str] = None
    attachments: Tuple[str, ...] = ()
    owner_id: Optional[int] = None
    owner_name: str = 'N/A'
    owner_email: str = 'N/A'

    @property
    def key(self) -> Tuple[str, int]:
        """(source kind, id) pair identifying the record across both tables."""
        return (self.source_kind, self.id)

    @property
    def role_display(self) -> str:
        # An attended event has no meaningful role column
        if not self.role or self.role == ROLE_ATTENDED:
            return '-'
        return self.role

    @property
    def days(self) -> Optional[int]:
        return duration_days(self.from_date, self.to_date)

    @property
    def academic_year(self) -> Optional[str]:
        return academic_year(self.from_date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary including derived values."""
        data = asdict(self)
        data['attachments'] = list(self.attachments)
        data['days'] = self.days
        data['academic_year'] = self.academic_year
        return data


@dataclass(frozen=True)
class FacultyEventRecord(EventRecord):
    """Event recorded by a faculty member."""
    source_kind: str = FACULTY
    remarks: Optional[str] = None


@dataclass(frozen=True)
class DepartmentEventRecord(EventRecord):
    """Event organized by a department; its role is always 'Organized'."""
    source_kind: str = DEPARTMENT
    role: Optional[str] = ROLE_ORGANIZED
    coordinator_name: Optional[str] = None
    output: Optional[str] = None
    certificate_link: Optional[str] = None
