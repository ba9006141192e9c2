"""Spreadsheet export of event listings and the department import template."""

import io
import logging
from typing import Any, Callable, Dict, Iterable, List, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.comments import Comment

from ..config.event_types import DEPARTMENT_EVENT_TYPES
from ..errors import ValidationError
from ..models.event import EventRecord

logger = logging.getLogger(__name__)

NOT_AVAILABLE = 'N/A'

Column = Tuple[str, Callable[[EventRecord], Any]]


def _or_na(value: Any) -> Any:
    return NOT_AVAILABLE if value is None or value == '' else value


def _attachments(record: EventRecord) -> str:
    return '\n'.join(record.attachments) if record.attachments else '-'


def _participants(record: EventRecord) -> Any:
    return record.participants or '-'


EXPORT_VIEWS: Dict[str, List[Column]] = {
    'faculty': [
        ('Title', lambda r: _or_na(r.title)),
        ('Type', lambda r: _or_na(r.type)),
        ('From Date', lambda r: _or_na(r.from_date)),
        ('To Date', lambda r: _or_na(r.to_date)),
        ('Days', lambda r: _or_na(r.days)),
        ('Participants', _participants),
        ('Role', lambda r: r.role_display),
        ('Academic Year', lambda r: _or_na(r.academic_year)),
        ('Attachments', _attachments),
    ],
    'department': [
        ('Title', lambda r: _or_na(r.title)),
        ('Type', lambda r: _or_na(r.type)),
        ('Coordinator', lambda r: _or_na(getattr(r, 'coordinator_name', None))),
        ('From Date', lambda r: _or_na(r.from_date)),
        ('To Date', lambda r: _or_na(r.to_date)),
        ('Days', lambda r: _or_na(r.days)),
        ('Participants', _participants),
        ('Location', lambda r: _or_na(r.location)),
        ('Output', lambda r: _or_na(getattr(r, 'output', None))),
        ('Attachments', _attachments),
        ('Certificate', lambda r: getattr(r, 'certificate_link', None) or '-'),
    ],
    'admin': [
        ('Source', lambda r: r.source_kind.capitalize()),
        ('Owner', lambda r: r.owner_name),
        ('Owner Email', lambda r: r.owner_email),
        ('Title', lambda r: _or_na(r.title)),
        ('Type', lambda r: _or_na(r.type)),
        ('Role', lambda r: r.role_display),
        ('From Date', lambda r: _or_na(r.from_date)),
        ('To Date', lambda r: _or_na(r.to_date)),
        ('Days', lambda r: _or_na(r.days)),
        ('Academic Year', lambda r: _or_na(r.academic_year)),
        ('Participants', _participants),
        ('Location', lambda r: _or_na(r.location)),
        ('Attachments', _attachments),
    ],
}

# Column headers of the department import spreadsheet, in template order
IMPORT_HEADERS = [
    "Event Title",
    "Type",
    "Coordinator",
    "From Date (YYYY-MM-DD)",
    "To Date (YYYY-MM-DD)",
    "Participants",
    "Location",
    "Event Output",
    "Attachments Link",
    "Certificate Link (Optional)",
]

TEMPLATE_EXAMPLE_ROW = [
    "National Conference on AI",
    "Conference",
    "Dr. Jane Doe",
    "2025-01-15",
    "2025-01-17",
    150,
    "Main Auditorium",
    "Discussed advancements in AI",
    "https://drive.google.com/attachments-sample",
    "https://drive.google.com/certificates-sample",
]


def _workbook_bytes(workbook: Workbook) -> bytes:
    out = io.BytesIO()
    workbook.save(out)
    out.seek(0)
    return out.read()


def export_rows(headers: Sequence[str], rows: Iterable[Sequence[Any]], title: str = "Sheet1") -> bytes:
    """Write a header row and data rows to a single-sheet workbook."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = title
    sheet.append(list(headers))
    for row in rows:
        sheet.append(list(row))
    return _workbook_bytes(workbook)


def export_events(records: Iterable[EventRecord], view: str) -> bytes:
    """
    Export records, in the given order, as an .xlsx workbook.

    Args:
        records: Already filtered and sorted records
        view: Column layout: 'faculty', 'department' or 'admin'

    Returns:
        bytes: The workbook file content

    Raises:
        ValidationError: If the view is unknown
    """
    columns = EXPORT_VIEWS.get(view)
    if columns is None:
        raise ValidationError(f"Unknown export view: {view}")

    rows = [[render(record) for _, render in columns] for record in records]
    logger.info(f"Exporting {len(rows)} events ({view} view)")
    return export_rows([header for header, _ in columns], rows)


def department_import_template() -> bytes:
    """Workbook with the import headers, one example row and the allowed types."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Template"
    sheet.append(IMPORT_HEADERS)
    sheet.append(TEMPLATE_EXAMPLE_ROW)
    sheet["B1"].comment = Comment(
        f"Allowed values: {', '.join(DEPARTMENT_EVENT_TYPES)}", "System"
    )
    return _workbook_bytes(workbook)
