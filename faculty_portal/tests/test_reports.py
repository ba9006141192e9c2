from datetime import datetime
import io

import pytest
from openpyxl import Workbook, load_workbook

from faculty_portal.config.event_types import DEPARTMENT_EVENT_TYPES
from faculty_portal.errors import ValidationError
from faculty_portal.models import DepartmentEventRecord, FacultyEventRecord
from faculty_portal.reports import (
    IMPORT_HEADERS,
    department_import_template,
    export_events,
    format_import_date,
    parse_department_import,
)


def read_sheet(content):
    sheet = load_workbook(io.BytesIO(content)).active
    return [list(row) for row in sheet.iter_rows(values_only=True)]


def workbook_bytes(rows):
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    out = io.BytesIO()
    workbook.save(out)
    return out.getvalue()


RECORDS = [
    FacultyEventRecord(
        id=1, title="FDP on Pedagogy", type='FDP', from_date='2024-08-01', to_date='2024-08-05',
        role='Organized', participants=40, owner_name="Asha Rao", owner_email="asha@college.edu",
        attachments=("https://files.example.com/a.pdf", "https://files.example.com/b.pdf"),
    ),
    DepartmentEventRecord(
        id=1, title="Hackathon", type='Hackathon', from_date='2024-02-01', to_date='2024-02-02',
        location="Main Block", owner_name="Computer Science", owner_email="cse@college.edu",
        coordinator_name="Dr. Menon", attachments=("https://drive.example.com/h",),
    ),
    FacultyEventRecord(id=2, title="Cloud Seminar", role='Attended'),
]


class TestExport:
    def test_admin_view_keeps_order_and_renders_missing_values(self):
        rows = read_sheet(export_events(RECORDS, 'admin'))

        assert rows[0] == [
            'Source', 'Owner', 'Owner Email', 'Title', 'Type', 'Role', 'From Date', 'To Date',
            'Days', 'Academic Year', 'Participants', 'Location', 'Attachments',
        ]
        assert [row[3] for row in rows[1:]] == ["FDP on Pedagogy", "Hackathon", "Cloud Seminar"]
        assert rows[1][0] == 'Faculty'
        assert rows[1][8] == 5
        assert rows[1][9] == '2024-2025'
        assert rows[1][12] == "https://files.example.com/a.pdf\nhttps://files.example.com/b.pdf"
        assert rows[2][5] == 'Organized'
        assert rows[3][1] == 'N/A'
        assert rows[3][5] == '-'
        assert rows[3][8] == 'N/A'
        assert rows[3][10] == '-'

    def test_faculty_view(self):
        rows = read_sheet(export_events(RECORDS[:1], 'faculty'))

        assert rows[0][0] == 'Title'
        assert rows[1][:4] == ["FDP on Pedagogy", 'FDP', '2024-08-01', '2024-08-05']

    def test_department_view(self):
        rows = read_sheet(export_events(RECORDS[1:2], 'department'))

        assert rows[0][2] == 'Coordinator'
        assert rows[1][2] == "Dr. Menon"
        assert rows[1][-1] == '-'

    def test_empty_export_has_headers_only(self):
        assert len(read_sheet(export_events([], 'faculty'))) == 1

    def test_unknown_view(self):
        with pytest.raises(ValidationError):
            export_events(RECORDS, 'public')


class TestTemplate:
    def test_headers_example_and_type_comment(self):
        sheet = load_workbook(io.BytesIO(department_import_template())).active
        rows = [list(row) for row in sheet.iter_rows(values_only=True)]

        assert rows[0] == IMPORT_HEADERS
        assert len(rows) == 2
        comment = sheet["B1"].comment.text
        for event_type in DEPARTMENT_EVENT_TYPES:
            assert event_type in comment

    def test_template_parses_back(self):
        events = parse_department_import(department_import_template())

        assert events[0]['title'] == "National Conference on AI"
        assert events[0]['participants'] == 150


class TestImport:
    def test_rows_are_mapped_and_dates_normalized(self):
        content = workbook_bytes([
            IMPORT_HEADERS,
            ["Hackathon", "Hackathon", "Dr. Menon", datetime(2024, 2, 1), "2024-02-02",
             "120", "Main Block", "Prototypes", "https://drive.example.com/h", None],
            ["Guest talk", "Guest lecture", "Dr. Iyer", 45672, 45672,
             None, "Seminar Hall", None, None, "https://drive.example.com/c"],
        ])

        first, second = parse_department_import(content)

        assert first['from_date'] == '2024-02-01'
        assert first['to_date'] == '2024-02-02'
        assert first['participants'] == 120
        assert first['coordinator_name'] == "Dr. Menon"
        assert first['certificate_link'] is None
        assert second['from_date'] == '2025-01-15'
        assert second['participants'] == 0
        assert second['certificate_link'] == "https://drive.example.com/c"

    def test_rows_missing_required_columns_are_skipped(self):
        content = workbook_bytes([
            IMPORT_HEADERS,
            ["Hackathon", "Hackathon", "Dr. Menon", "2024-02-01", "2024-02-02", 10, "Main Block"],
            ["No location", "Seminar", "Dr. Iyer", "2024-03-01", "2024-03-01", 10, None],
        ])

        events = parse_department_import(content)

        assert [event['title'] for event in events] == ["Hackathon"]

    def test_header_only_file(self):
        with pytest.raises(ValidationError, match="No data found in file."):
            parse_department_import(workbook_bytes([IMPORT_HEADERS]))

    def test_no_valid_rows(self):
        content = workbook_bytes([IMPORT_HEADERS, ["Only a title"]])

        with pytest.raises(ValidationError, match="No valid rows to import."):
            parse_department_import(content)

    def test_not_a_spreadsheet(self):
        with pytest.raises(ValidationError, match="Could not read spreadsheet"):
            parse_department_import(b"title,type\nHackathon,Hackathon\n")

    @pytest.mark.parametrize("value, expected", [
        (None, None),
        ('', None),
        (' 2024-01-05 ', '2024-01-05'),
        (datetime(2024, 1, 5, 12, 0), '2024-01-05'),
        (45658, '2025-01-01'),
    ])
    def test_format_import_date(self, value, expected):
        assert format_import_date(value) == expected
