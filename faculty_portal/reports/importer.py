"""Parsing of department event spreadsheets."""

from datetime import date, datetime
import io
import logging
import zipfile
from typing import Any, Dict, List, Optional

from openpyxl import load_workbook
from openpyxl.utils.datetime import from_excel
from openpyxl.utils.exceptions import InvalidFileException

from ..errors import ValidationError

logger = logging.getLogger(__name__)

# Rows missing any of these columns are skipped
REQUIRED_COLUMNS = ("Event Title", "Type", "Coordinator", "Location")

# Spreadsheet header -> department event field
COLUMN_FIELDS = {
    "Event Title": 'title',
    "Type": 'type',
    "Coordinator": 'coordinator_name',
    "From Date (YYYY-MM-DD)": 'from_date',
    "To Date (YYYY-MM-DD)": 'to_date',
    "Participants": 'participants',
    "Location": 'location',
    "Event Output": 'output',
    "Attachments Link": 'attachments',
    "Certificate Link (Optional)": 'certificate_link',
}

DATE_FIELDS = ('from_date', 'to_date')


def format_import_date(value: Any) -> Optional[str]:
    """
    Convert a spreadsheet date cell to an ISO 'yyyy-mm-dd' string.

    Handles cells typed as dates, Excel serial numbers and plain strings;
    strings are passed through trimmed.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return from_excel(value).date().isoformat()
    if isinstance(value, str):
        return value.strip() or None
    return None


def _participants(value: Any) -> int:
    if value is None or value == '':
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def _cell_text(value: Any) -> str:
    return '' if value is None else str(value).strip()


def read_rows(content: bytes) -> List[Dict[str, Any]]:
    """
    Read the first sheet into row mappings keyed by the header row.

    Raises:
        ValidationError: If the file is not a readable .xlsx workbook or has no data rows
    """
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise ValidationError(f"Could not read spreadsheet: {e}") from e

    try:
        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)
        header = next(rows, None)
        if header is None:
            raise ValidationError("No data found in file.")
        headers = [_cell_text(cell) for cell in header]
        mappings = [
            dict(zip(headers, row)) for row in rows
            if any(_cell_text(cell) for cell in row)
        ]
    finally:
        workbook.close()

    if not mappings:
        raise ValidationError("No data found in file.")
    return mappings


def row_to_event(row: Dict[str, Any]) -> Dict[str, Any]:
    """Map one spreadsheet row to department event fields."""
    event = {field: row.get(column) for column, field in COLUMN_FIELDS.items()}
    for field in DATE_FIELDS:
        event[field] = format_import_date(event[field])
    event['participants'] = _participants(event['participants'])
    for field in ('title', 'type', 'coordinator_name', 'location', 'output', 'attachments'):
        event[field] = _cell_text(event[field])
    event['certificate_link'] = _cell_text(event['certificate_link']) or None
    return event


def parse_department_import(content: bytes) -> List[Dict[str, Any]]:
    """
    Parse an uploaded department spreadsheet into event field mappings.

    Rows missing a required column are skipped.

    Raises:
        ValidationError: Unreadable file, no data rows, or no valid rows
    """
    rows = read_rows(content)
    events = [
        row_to_event(row) for row in rows
        if all(_cell_text(row.get(column)) for column in REQUIRED_COLUMNS)
    ]
    skipped = len(rows) - len(events)
    if skipped:
        logger.info(f"Skipped {skipped} spreadsheet rows missing required columns")
    if not events:
        raise ValidationError("No valid rows to import.")
    return events
