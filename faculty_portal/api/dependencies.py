"""Shared FastAPI dependencies."""

from typing import Optional

from fastapi import Depends, Header, HTTPException, Query

from ..config.admin import AdminConfig
from ..db import Database, db
from ..events.visibility import EventFilter
from ..moderation import ActionDispatcher, ModerationLedger

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_database() -> Database:
    """Database used by the request handlers."""
    return db


def require_admin(authorization: Optional[str] = Header(None)) -> None:
    """Reject the request unless it carries the admin API key."""
    admin_config = AdminConfig()
    try:
        admin_config.validate()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=str(e))

    if not admin_config.verify_auth(authorization):
        raise HTTPException(
            status_code=401,
            detail="Invalid authorization"
        )


def event_filter(
    type: Optional[str] = Query(None, description="Event type, or 'Others' for non-standard types"),
    role: Optional[str] = Query(None, description="'Organized' or 'Attended'"),
    from_date: Optional[str] = Query(None, description="Earliest from_date (yyyy-mm-dd)"),
    to_date: Optional[str] = Query(None, description="Latest to_date (yyyy-mm-dd)"),
    duration: Optional[str] = Query(None, description="Duration bucket: 1, 2-7, 8-30 or 31+"),
    academic_year: Optional[str] = Query(None, description="Academic year label, e.g. 2023-2024"),
) -> EventFilter:
    """Build the listing filter from query parameters; empty values are ignored."""
    return EventFilter(
        type=type or None,
        role=role or None,
        from_date=from_date or None,
        to_date=to_date or None,
        duration=duration or None,
        academic_year=academic_year or None,
    )


def get_dispatcher(
    confirm: bool = Query(False, description="Must be true to run a moderation action"),
    database: Database = Depends(get_database),
) -> ActionDispatcher:
    """Moderation dispatcher whose confirmation gate is the 'confirm' query parameter."""
    return ActionDispatcher(ModerationLedger(database), confirm=lambda prompt: confirm)


def xlsx_headers(filename: str) -> dict:
    return {'Content-Disposition': f'attachment; filename="{filename}"'}
