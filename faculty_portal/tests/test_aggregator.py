import asyncio

import pytest

from faculty_portal.db import StorageError
from faculty_portal.events.aggregator import EventSnapshot, build_ledger, load_snapshot
from faculty_portal.events.visibility import EventFilter
from faculty_portal.models import Actor
from faculty_portal.moderation import ModerationLedger


def snapshot_for(database, actor):
    return asyncio.run(load_snapshot(database, actor))


@pytest.fixture
def portal(factory):
    """Two faculty members and one department with a few events each."""
    asha = factory.faculty("Asha Rao", email="asha@college.edu")
    ravi = factory.faculty("Ravi Kumar", email="ravi@college.edu")
    cse = factory.department("Computer Science", email="cse@college.edu")
    return {
        'asha': asha,
        'ravi': ravi,
        'cse': cse,
        'asha_workshop': factory.faculty_event(asha, "AI Workshop", id=7, from_date='2024-01-10', to_date='2024-01-12'),
        'asha_fdp': factory.faculty_event(asha, "FDP on Pedagogy", type='FDP', from_date='2024-08-01', to_date='2024-08-05'),
        'ravi_seminar': factory.faculty_event(ravi, "Cloud Seminar", type='Seminar', from_date='2023-03-01', to_date='2023-03-01'),
        'cse_hackathon': factory.department_event(cse, "Hackathon", id=7, from_date='2024-02-01', to_date='2024-02-02'),
    }


def test_admin_sees_both_sources_newest_first(database, portal):
    snapshot = snapshot_for(database, Actor.admin())

    titles = [record.title for record in snapshot.visible()]

    assert titles == ["FDP on Pedagogy", "Hackathon", "AI Workshop", "Cloud Seminar"]


def test_records_carry_provenance_and_owner(database, portal):
    snapshot = snapshot_for(database, Actor.admin())

    by_title = {record.title: record for record in snapshot.visible()}

    assert by_title["Hackathon"].source_kind == 'department'
    assert by_title["Hackathon"].owner_name == "Computer Science"
    assert by_title["Hackathon"].role == 'Organized'
    assert by_title["AI Workshop"].source_kind == 'faculty'
    assert by_title["AI Workshop"].owner_email == "asha@college.edu"


def test_missing_owner_renders_not_available(database, factory):
    factory.department_event(404, "Orphan event")

    record, = snapshot_for(database, Actor.admin()).visible()

    assert record.owner_name == 'N/A'
    assert record.owner_email == 'N/A'


def test_owners_only_see_their_own_events(database, portal):
    asha = snapshot_for(database, Actor.faculty(portal['asha']))
    cse = snapshot_for(database, Actor.department(portal['cse']))

    assert {record.title for record in asha.visible()} == {"AI Workshop", "FDP on Pedagogy"}
    assert [record.title for record in cse.visible()] == ["Hackathon"]


def test_flagged_event_disappears_only_for_its_kind(database, portal):
    ModerationLedger(database).flag(portal['asha_workshop'], 'faculty', "incomplete data")

    snapshot = snapshot_for(database, Actor.admin())
    keys = {record.key for record in snapshot.visible()}

    assert ('faculty', 7) not in keys
    assert ('department', 7) in keys
    assert snapshot.flagged_keys == frozenset({('faculty', 7)})


def test_shared_scope_also_hides_the_other_kind(database, portal):
    ModerationLedger(database).flag(portal['asha_workshop'], 'faculty', "incomplete data")
    loaded = snapshot_for(database, Actor.admin())

    shared = EventSnapshot(records=loaded.records, flagged_keys=loaded.flagged_keys, scope='shared')

    assert 7 not in {record.id for record in shared.visible()}


def test_filter_change_does_not_reload(database, portal):
    snapshot = snapshot_for(database, Actor.admin())
    database.dispose()

    assert [record.title for record in snapshot.visible(EventFilter(type='Others'))] == ["Hackathon"]
    assert [record.title for record in snapshot.visible(EventFilter(academic_year='2024-2025'))] == ["FDP on Pedagogy"]


def test_build_ledger_payload(database, portal):
    snapshot = snapshot_for(database, Actor.admin())

    ledger = build_ledger(snapshot, EventFilter(duration='2-7'))

    assert ledger['count'] == 3
    assert [event['title'] for event in ledger['events']] == ["FDP on Pedagogy", "Hackathon", "AI Workshop"]
    assert ledger['academic_years'] == ["2024-2025", "2023-2024", "2022-2023"]
    assert ledger['types'] == ["FDP", "Hackathon", "Seminar", "Workshop"]


def test_failed_source_aborts_the_load(database, portal, monkeypatch):
    from faculty_portal.events import aggregator

    def broken(database, source_kind, actor):
        if source_kind == 'department':
            raise StorageError("relation \"department_events\" does not exist")
        return []

    monkeypatch.setattr(aggregator, 'load_source_records', broken)

    with pytest.raises(StorageError, match="department_events"):
        snapshot_for(database, Actor.admin())
