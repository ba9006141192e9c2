"""Normalizers mapping rows of both event tables to EventRecord."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Tuple
import logging

from ..config.event_types import get_source
from ..models.event import (
    EventRecord,
    FacultyEventRecord,
    DepartmentEventRecord,
    FACULTY,
    DEPARTMENT,
)

logger = logging.getLogger(__name__)

NOT_AVAILABLE = 'N/A'


def _attachment_urls(value: Any) -> Tuple[str, ...]:
    """Attachments are a URL list on faculty rows and a single URL on department rows."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(url) for url in value if url)


def _owner_field(owner: Any, field: str) -> str:
    value = getattr(owner, field, None) if owner is not None else None
    return value or NOT_AVAILABLE


class EventNormalizer(ABC):
    """
    Base interface for event normalizers.

    Each normalizer is responsible for:
    1. Converting one table's rows into the unified EventRecord shape
    2. Tagging every record with its source kind
    3. Resolving the owner's name and email from the joined owner row

    Required Methods:
        normalize(row) -> EventRecord: Convert one row
    """

    source_kind: str = ''

    @abstractmethod
    def normalize(self, row: Any) -> EventRecord:
        """
        Convert one loaded row (with its owner relationship) into a record.

        Args:
            row: Model instance of this normalizer's table

        Returns:
            EventRecord: The unified record
        """
        pass

    def name(self) -> str:
        """Return the display name of this normalizer's source (e.g., 'Faculty')."""
        return get_source(self.source_kind).name

    def normalize_all(self, rows: Iterable[Any]) -> List[EventRecord]:
        records = [self.normalize(row) for row in rows]
        logger.debug(f"Normalized {len(records)} {self.name()} events")
        return records


class FacultyEventNormalizer(EventNormalizer):
    """Normalizer for faculty_events rows."""

    source_kind = FACULTY

    def normalize(self, row: Any) -> EventRecord:
        owner = getattr(row, 'faculty', None)
        return FacultyEventRecord(
            id=row.id,
            title=row.title,
            type=row.type,
            from_date=row.from_date,
            to_date=row.to_date,
            role=row.event_role,
            participants=row.participants,
            attachments=_attachment_urls(row.attachments),
            owner_id=row.faculty_id,
            owner_name=_owner_field(owner, 'name'),
            owner_email=_owner_field(owner, 'email'),
            remarks=row.remarks,
        )


class DepartmentEventNormalizer(EventNormalizer):
    """Normalizer for department_events rows."""

    source_kind = DEPARTMENT

    def normalize(self, row: Any) -> EventRecord:
        owner = getattr(row, 'department', None)
        return DepartmentEventRecord(
            id=row.id,
            title=row.title,
            type=row.type,
            from_date=row.from_date,
            to_date=row.to_date,
            participants=row.participants,
            location=row.location,
            attachments=_attachment_urls(row.attachments),
            owner_id=row.department_id,
            owner_name=_owner_field(owner, 'name'),
            owner_email=_owner_field(owner, 'email'),
            coordinator_name=row.coordinator_name,
            output=row.output,
            certificate_link=row.certificate_link,
        )


NORMALIZERS: Dict[str, EventNormalizer] = {
    FACULTY: FacultyEventNormalizer(),
    DEPARTMENT: DepartmentEventNormalizer(),
}


def get_normalizer(source_kind: str) -> EventNormalizer:
    """
    Get the normalizer for a source kind.

    Raises:
        ValueError: If no normalizer exists for the kind
    """
    normalizer = NORMALIZERS.get(source_kind)
    if normalizer is None:
        raise ValueError(f"No normalizer for source kind: {source_kind}")
    return normalizer
