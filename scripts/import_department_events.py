#!/usr/bin/env python3

"""
Import department events from a filled-in spreadsheet template.

Usage:
    # Import into the department with row id 3
    python scripts/import_department_events.py 3 events.xlsx

    # Only parse and show the rows, store nothing
    python scripts/import_department_events.py 3 events.xlsx --dry-run

    # Write an empty template to fill in
    python scripts/import_department_events.py --template template.xlsx
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from faculty_portal.config.environment import IS_PRODUCTION_ENVIRONMENT  # noqa: F401
from faculty_portal.db import DatabaseError
from faculty_portal.errors import PortalError
from faculty_portal.reports import department_import_template, parse_department_import
from faculty_portal.services import insert_department_events

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Import department events from an .xlsx file")
    parser.add_argument('department_id', type=int, nargs='?', help="Row id of the department")
    parser.add_argument('file', type=Path, nargs='?', help="Spreadsheet to import")
    parser.add_argument('--dry-run', action='store_true', help="Parse only, do not store")
    parser.add_argument('--template', type=Path, help="Write the import template to this path and exit")
    args = parser.parse_args()

    if args.template:
        args.template.write_bytes(department_import_template())
        logger.info(f"Template written to {args.template}")
        return

    if args.department_id is None or args.file is None:
        parser.error("department_id and file are required unless --template is given")

    try:
        rows = parse_department_import(args.file.read_bytes())
        logger.info(f"Parsed {len(rows)} rows from {args.file}")

        if args.dry_run:
            for row in rows:
                logger.info(f"  {row['from_date'] or '?'} {row['title']} ({row['type']})")
            return

        events = insert_department_events(args.department_id, rows)
        logger.info(f"Imported {len(events)} events into department {args.department_id}")
    except (PortalError, DatabaseError) as e:
        logger.error(f"Import failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
