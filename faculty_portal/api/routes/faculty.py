"""Faculty routes: profile, own events, their export and attachments, flagged events."""

import asyncio
from typing import Dict, List

from fastapi import APIRouter, Body, Depends, Response

from ...db import Database
from ...events.aggregator import build_ledger, load_snapshot
from ...events.visibility import EventFilter
from ...models.actor import Actor
from ...moderation import ActionDispatcher, ModerationLedger
from ...reports.attachments import bundle_attachments
from ...reports.exporter import export_events
from ...services.event_authoring import create_faculty_event, get_owned_event
from ...services.profiles import get_faculty_profile, update_faculty_profile
from ..dependencies import XLSX_MEDIA_TYPE, event_filter, get_database, get_dispatcher, xlsx_headers
from ..schemas import CommentIn, FacultyEventIn, FacultyProfileIn

router = APIRouter(prefix="/faculty/{faculty_id}", tags=["faculty"])


@router.get("/profile")
async def get_profile(faculty_id: int, database: Database = Depends(get_database)):
    """The faculty member's profile."""
    return get_faculty_profile(faculty_id, database)


@router.put("/profile")
async def edit_profile(
    faculty_id: int,
    body: FacultyProfileIn = Body(...),
    database: Database = Depends(get_database)
):
    """Update name, gender, school, department and optionally the picture."""
    return update_faculty_profile(faculty_id, body.model_dump(), database)


@router.get("/events")
async def get_events(
    faculty_id: int,
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """The faculty member's visible events, newest first."""
    snapshot = await load_snapshot(database, Actor.faculty(faculty_id))
    return build_ledger(snapshot, filters)


@router.post("/events", status_code=201)
async def add_event(
    faculty_id: int,
    body: FacultyEventIn = Body(...),
    database: Database = Depends(get_database)
):
    """Record a new event."""
    return create_faculty_event(faculty_id, body.model_dump(), database)


@router.get("/events/export")
async def export_own_events(
    faculty_id: int,
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """Download the filtered events as a spreadsheet."""
    snapshot = await load_snapshot(database, Actor.faculty(faculty_id))
    content = export_events(snapshot.visible(filters), 'faculty')
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=xlsx_headers("faculty_events.xlsx"))


@router.get("/events/{event_id}/attachments.zip")
async def download_attachments(
    faculty_id: int,
    event_id: int,
    database: Database = Depends(get_database)
):
    """Download every attachment of one event as a zip archive."""
    event = get_owned_event('faculty_events', 'faculty_id', faculty_id, event_id, database)
    content = await asyncio.to_thread(bundle_attachments, event['attachments'])
    return Response(
        content=content,
        media_type="application/zip",
        headers={'Content-Disposition': 'attachment; filename="event_attachments.zip"'}
    )


@router.get("/flagged", response_model=List[Dict])
async def get_flagged(faculty_id: int, database: Database = Depends(get_database)):
    """Flagged events of this faculty member."""
    return ModerationLedger(database).list_flagged(Actor.faculty(faculty_id))


@router.post("/flagged/{flagged_id}/request-unflag")
async def request_unflag(
    faculty_id: int,
    flagged_id: int,
    body: CommentIn = Body(...),
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Ask the admins to lift a flag."""
    flagged = dispatcher.dispatch(
        'request_unflag', Actor.faculty(faculty_id),
        flagged_id=flagged_id, comment=body.comment
    )
    return {"status": "success", "message": "Unflag request sent", "flagged": flagged}
