"""Logging configuration for the application."""

import logging
import sys


def setup_logging(level: int = logging.INFO):
    """Configure logging for the application."""
    # Create a formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not any(getattr(handler, '_portal_handler', False) for handler in root_logger.handlers):
        console_handler._portal_handler = True
        root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('multipart').setLevel(logging.WARNING)

    # Configure specific loggers
    loggers = [
        'faculty_portal.moderation.ledger',
        'faculty_portal.moderation.actions',
        'faculty_portal.services.event_authoring',
        'faculty_portal.reports.importer',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        # Don't add handler here since it's already handled by root logger
