"""Admin routes: directory, the combined event ledger and moderation actions."""

import logging
from typing import Dict, List

from fastapi import APIRouter, Body, Depends, Path, Response

from ...db import Database
from ...events.aggregator import build_ledger, load_snapshot
from ...events.visibility import EventFilter
from ...models import SOURCE_KINDS
from ...models.actor import Actor
from ...moderation import ActionDispatcher, ModerationLedger
from ...reports.exporter import export_events
from ...services.directory import list_departments, list_faculty
from ..dependencies import (
    XLSX_MEDIA_TYPE,
    event_filter,
    get_database,
    get_dispatcher,
    require_admin,
    xlsx_headers,
)
from ..schemas import FlagIn

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)]
)

SOURCE_KIND_PATTERN = f"^({'|'.join(SOURCE_KINDS)})$"


@router.get("/faculty", response_model=List[Dict])
async def get_faculty(database: Database = Depends(get_database)):
    """List faculty members ordered by name."""
    return list_faculty(database)


@router.get("/departments", response_model=List[Dict])
async def get_departments(database: Database = Depends(get_database)):
    """List departments ordered by name."""
    return list_departments(database)


@router.get("/events")
async def get_events(
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """All visible events of both sources, newest first, with the dropdown values."""
    snapshot = await load_snapshot(database, Actor.admin())
    return build_ledger(snapshot, filters)


@router.get("/events/export")
async def export_all_events(
    filters: EventFilter = Depends(event_filter),
    database: Database = Depends(get_database)
):
    """Download the filtered ledger as a spreadsheet."""
    snapshot = await load_snapshot(database, Actor.admin())
    content = export_events(snapshot.visible(filters), 'admin')
    return Response(content=content, media_type=XLSX_MEDIA_TYPE, headers=xlsx_headers("all_events.xlsx"))


@router.get("/flagged", response_model=List[Dict])
async def get_flagged(database: Database = Depends(get_database)):
    """All flagged events, newest first, with their moderation state."""
    return ModerationLedger(database).list_flagged()


@router.post("/events/{source_kind}/{event_id}/flag")
async def flag_event(
    source_kind: str = Path(..., pattern=SOURCE_KIND_PATTERN),
    event_id: int = Path(...),
    body: FlagIn = Body(...),
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Flag an active event; it disappears from every listing."""
    flagged = dispatcher.dispatch(
        'flag', Actor.admin(),
        event_id=event_id, source_kind=source_kind,
        comment=body.comment, owner_email=body.owner_email
    )
    return {"status": "success", "flagged": flagged}


@router.delete("/events/{source_kind}/{event_id}")
async def delete_event(
    source_kind: str = Path(..., pattern=SOURCE_KIND_PATTERN),
    event_id: int = Path(...),
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Permanently delete an active event."""
    dispatcher.dispatch('delete_active', Actor.admin(), event_id=event_id, source_kind=source_kind)
    return {"status": "success", "message": f"Event {event_id} deleted"}


@router.post("/flagged/{flagged_id}/approve")
async def approve_unflag(
    flagged_id: int,
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Approve an unflag request and restore the event under its original id."""
    restored = dispatcher.dispatch('approve_unflag', Actor.admin(), flagged_id=flagged_id)
    return {"status": "success", "restored": restored}


@router.delete("/flagged/{flagged_id}")
async def delete_flagged(
    flagged_id: int,
    dispatcher: ActionDispatcher = Depends(get_dispatcher)
):
    """Permanently delete a flagged event."""
    dispatcher.dispatch('delete_flagged', Actor.admin(), flagged_id=flagged_id)
    return {"status": "success", "message": f"Flagged event {flagged_id} deleted"}
