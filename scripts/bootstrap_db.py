#!/usr/bin/env python3

"""Create the portal schema and optionally seed an admin account."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from faculty_portal.config.environment import IS_PRODUCTION_ENVIRONMENT
from faculty_portal.db import TableGateway, db, execute_in_transaction

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def bootstrap(admin_username: str = None, admin_password: str = None) -> None:
    """Create all tables and, if given, the admin account."""
    db.init_db()
    logger.info(
        f"Schema ready ({'production' if IS_PRODUCTION_ENVIRONMENT else 'development'} database)"
    )

    if not admin_username:
        return

    def operation(session):
        gateway = TableGateway(session)
        if gateway.select('admin', {'username': admin_username}):
            logger.info(f"Admin '{admin_username}' already exists")
            return
        gateway.insert('admin', [{
            'username': admin_username,
            'password': admin_password,
            'name': admin_username,
        }])
        logger.info(f"Created admin '{admin_username}'")

    execute_in_transaction(db, operation)


def main():
    parser = argparse.ArgumentParser(description="Create the portal database schema")
    parser.add_argument('--admin-username', help="Create an admin account with this username")
    parser.add_argument('--admin-password', help="Password of the created admin account")
    args = parser.parse_args()

    bootstrap(args.admin_username, args.admin_password)


if __name__ == "__main__":
    main()
