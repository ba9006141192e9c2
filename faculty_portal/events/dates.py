"""Parsing of the ISO date strings stored on event rows."""

import logging
from datetime import date, datetime
from typing import Optional, Union

logger = logging.getLogger(__name__)

DateLike = Union[str, date, datetime, None]


def parse_event_date(value: DateLike) -> Optional[date]:
    """
    Parse a stored event date.

    Accepts 'yyyy-mm-dd' strings, full ISO timestamps and date/datetime
    objects. Returns None for missing or unparseable input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug(f"Unparseable event date: {value!r}")
        return None
