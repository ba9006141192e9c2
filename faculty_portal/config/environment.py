"""Environment configuration for the faculty portal.

This module MUST be imported before any other portal module that reads
settings from os.environ (database location, admin key, flag exclusion scope,
download timeout). It loads the .env file at the project root, so the API, the
import script and the bootstrap script see the same settings whatever
directory they are started from.

Usage:
    from faculty_portal.config.environment import ENVIRONMENT, IS_PRODUCTION_ENVIRONMENT

Note:
    In production the settings should come from the platform's environment;
    values already set there win over the .env file.
"""

import os
import logging
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DEFAULT_SQLITE_PATH = PROJECT_ROOT / 'data' / 'portal.db'
ENVIRONMENTS = ('development', 'production')

# Load environment variables - this must happen before any other imports
load_dotenv(PROJECT_ROOT / '.env')


def environment_name(value: Optional[str]) -> str:
    """Normalize an ENVIRONMENT value; anything unknown means development."""
    setting = (value or '').strip().lower()
    if setting not in ENVIRONMENTS:
        logging.warning(
            f"Environment setting '{setting}' is invalid or not specified. "
            "Expected 'development' or 'production'. Defaulting to development environment."
        )
        return 'development'
    return setting


def project_path(value: Union[str, Path]) -> Path:
    """Resolve a path setting such as SQLITE_PATH; relative paths start at the project root."""
    path = Path(value)
    return path if path.is_absolute() else PROJECT_ROOT / path


ENVIRONMENT = environment_name(os.environ.get('ENVIRONMENT'))
IS_PRODUCTION_ENVIRONMENT = ENVIRONMENT == 'production'

__all__ = [
    'ENVIRONMENT',
    'IS_PRODUCTION_ENVIRONMENT',
    'PROJECT_ROOT',
    'DEFAULT_SQLITE_PATH',
    'environment_name',
    'project_path',
]
