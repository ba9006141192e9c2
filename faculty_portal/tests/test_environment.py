import logging

import pytest

from faculty_portal.config.environment import (
    DEFAULT_SQLITE_PATH,
    ENVIRONMENT,
    IS_PRODUCTION_ENVIRONMENT,
    PROJECT_ROOT,
    environment_name,
    project_path,
)
from faculty_portal.db import DatabaseConfig

development_only = pytest.mark.skipif(IS_PRODUCTION_ENVIRONMENT, reason="SQLite is only used in development")


@pytest.mark.parametrize("value, expected", [
    ("production", "production"),
    (" Production ", "production"),
    ("development", "development"),
])
def test_environment_name(value, expected):
    assert environment_name(value) == expected


@pytest.mark.parametrize("value", [None, "", "staging"])
def test_unknown_environment_falls_back_to_development(value, caplog):
    with caplog.at_level(logging.WARNING):
        assert environment_name(value) == "development"

    assert "Defaulting to development environment" in caplog.text


def test_project_path(tmp_path):
    assert project_path("data/portal.db") == PROJECT_ROOT / "data" / "portal.db"
    assert project_path(tmp_path / "portal.db") == tmp_path / "portal.db"


@development_only
class TestSqliteLocation:
    def test_default(self, monkeypatch):
        monkeypatch.delenv('SQLITE_PATH', raising=False)

        assert DatabaseConfig().sqlite_path == DEFAULT_SQLITE_PATH

    def test_relative_setting_starts_at_project_root(self, monkeypatch):
        monkeypatch.setenv('SQLITE_PATH', "instance/portal.db")

        assert DatabaseConfig().sqlite_path == PROJECT_ROOT / "instance" / "portal.db"

    def test_in_memory_setting(self, monkeypatch):
        monkeypatch.setenv('SQLITE_PATH', ":memory:")

        assert DatabaseConfig().sqlite_path == ":memory:"

    def test_explicit_path_wins(self, monkeypatch, tmp_path):
        monkeypatch.setenv('SQLITE_PATH', "instance/portal.db")

        assert DatabaseConfig(sqlite_path=tmp_path / "portal.db").sqlite_path == tmp_path / "portal.db"


def test_health_reports_environment(client):
    assert client.get("/").json()['environment'] == ENVIRONMENT
