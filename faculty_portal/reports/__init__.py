"""Spreadsheet export/import and attachment bundling."""

from .exporter import EXPORT_VIEWS, IMPORT_HEADERS, export_events, export_rows, department_import_template
from .importer import parse_department_import, format_import_date
from .attachments import bundle_attachments

__all__ = [
    'EXPORT_VIEWS',
    'IMPORT_HEADERS',
    'export_events',
    'export_rows',
    'department_import_template',
    'parse_department_import',
    'format_import_date',
    'bundle_attachments',
]
