"""Department routes: profile, own events, spreadsheet import/export, flagged events."""

from typing import Dict, List

from fastapi import APIRouter, Body, Depends, File, Response, UploadFile

from ...db import Database
from ...errors import ValidationError
from ...events.aggregator import build_ledger, load_snapshot
from ...events.visibility import EventFilter
from ...models.actor import Actor
from ...moderation import ActionDispatcher, ModerationLedger
from ...reports.exporter import department_import_template, export_events
from ...reports.importer import parse_department_import
from ...services.event_authoring import (
    create_department_event,
    insert_department_events,
    update_department_event,
)
from ...services.profiles import get_department_profile
from ..dependencies import XLSX_MEDIA_TYPE, event_filter, get_database, get_dispatcher, xlsx_headers
from ..schemas import CommentIn, DepartmentEventIn

router = APIRouter(prefix="/departments/{department_id}", tags=["departments"])


@router.get("/profile")
async def get_profile(department_id: int, database: Database = Depends(get_database)):
    """The department's profile."""
    return get_department_profile(department_id, database)


@router.get("/events")
async def get_events(
    department_id: int,
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """The department's visible events, newest first."""
    snapshot = await load_snapshot(database, Actor.department(department_id))
    return build_ledger(snapshot, filters)


@router.post("/events", status_code=201)
async def add_event(
    department_id: int,
    body: DepartmentEventIn = Body(...),
    database: Database = Depends(get_database)
):
    """Record a new department-organized event."""
    return create_department_event(department_id, body.model_dump(), database)


@router.put("/events/{event_id}")
async def edit_event(
    department_id: int,
    event_id: int,
    body: DepartmentEventIn = Body(...),
    database: Database = Depends(get_database)
):
    """Edit one of the department's events."""
    return update_department_event(department_id, event_id, body.model_dump(), database)


@router.get("/events/export")
async def export_own_events(
    department_id: int,
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """Download the filtered events as a spreadsheet."""
    snapshot = await load_snapshot(database, Actor.department(department_id))
    content = export_events(snapshot.visible(filters), 'department')
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=xlsx_headers("department_events.xlsx"))


@router.get("/events/template")
async def download_template(department_id: int):
    """Download the spreadsheet template for bulk imports."""
    return Response(
        content=department_import_template(),
        media_type=XLSX_MEDIA_TYPE,
        headers=xlsx_headers("department_events_template.xlsx")
    )


@router.post("/events/import", status_code=201)
async def import_events(
    department_id: int,
    file: UploadFile = File(...),
    database: Database = Depends(get_database)
):
    """Import events from a filled-in template."""
    if not (file.filename or '').lower().endswith('.xlsx'):
        raise ValidationError("Only .xlsx files are supported.")
    rows = parse_department_import(await file.read())
    events = insert_department_events(department_id, rows, database)
    return {"status": "success", "imported": len(events), "events": events}


@router.get("/flagged", response_model=List[Dict])
async def get_flagged(department_id: int, database: Database = Depends(get_database)):
    """Flagged events of this department."""
    return ModerationLedger(database).list_flagged(Actor.department(department_id))


@router.post("/flagged/{flagged_id}/request-unflag")
async def request_unflag(
    department_id: int,
    flagged_id: int,
    body: CommentIn = Body(...),
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Ask the admins to lift a flag."""
    flagged = dispatcher.dispatch(
        'request_unflag', Actor.department(department_id),
        flagged_id=flagged_id, comment=body.comment
    )
    return {"status": "success", "message": "Unflag request sent", "flagged": flagged}
