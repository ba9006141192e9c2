"""Shared fixtures: a fresh SQLite database per test and an API client bound to it."""

from itertools import count

import pytest
from fastapi.testclient import TestClient

from faculty_portal.api.app import app
from faculty_portal.api.dependencies import get_database
from faculty_portal.db import Database, DatabaseConfig, TableGateway, execute_in_transaction

ADMIN_KEY = "test-admin-key"


@pytest.fixture
def database(tmp_path):
    """File-backed database so the concurrent loaders share one store."""
    database = Database(DatabaseConfig(sqlite_path=tmp_path / "portal.db"))
    database.init_db()
    yield database
    database.dispose()


class PortalFactory:
    """Inserts owners and events straight into the tables."""

    def __init__(self, database: Database):
        self.database = database
        self._codes = count(1)

    def _insert(self, table: str, values: dict) -> int:
        def operation(session):
            row, = TableGateway(session).insert(table, [values])
            return row.id
        return execute_in_transaction(self.database, operation)

    def faculty(self, name="Asha Rao", **values) -> int:
        code = next(self._codes)
        values.setdefault('faculty_id', f"FAC{code:03d}")
        values.setdefault('email', f"faculty{code}@college.edu")
        return self._insert('faculty', dict(values, name=name))

    def department(self, name="Computer Science", **values) -> int:
        code = next(self._codes)
        values.setdefault('department_id', f"DEP{code:03d}")
        values.setdefault('email', f"dept{code}@college.edu")
        return self._insert('departments', dict(values, name=name))

    def faculty_event(self, faculty_id: int, title="Workshop on Python", **values) -> int:
        values.setdefault('type', 'Workshop')
        values.setdefault('event_role', 'Attended')
        values.setdefault('from_date', '2024-01-10')
        values.setdefault('to_date', '2024-01-12')
        values.setdefault('attachments', [])
        return self._insert('faculty_events', dict(values, faculty_id=faculty_id, title=title))

    def department_event(self, department_id: int, title="Hackathon 2024", **values) -> int:
        values.setdefault('type', 'Hackathon')
        values.setdefault('coordinator_name', 'Dr. Menon')
        values.setdefault('from_date', '2024-02-01')
        values.setdefault('to_date', '2024-02-02')
        values.setdefault('location', 'Main Block')
        values.setdefault('attachments', 'https://drive.example.com/hackathon')
        return self._insert('department_events', dict(values, department_id=department_id, title=title))


@pytest.fixture
def factory(database):
    return PortalFactory(database)


@pytest.fixture
def client(database, monkeypatch):
    monkeypatch.setenv('ADMIN_API_KEY', ADMIN_KEY)
    app.dependency_overrides[get_database] = lambda: database
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {'Authorization': ADMIN_KEY}
