"""Tests for the admin CLI."""

from click.testing import CliRunner
from sqlalchemy import inspect

from survey_crm import cli as cli_module
from survey_crm.db.models import Survey, SurveyDetail
from survey_crm.db.session import create_db_engine, create_session_factory


def _point_cli_at(monkeypatch, test_settings):
    monkeypatch.setattr(cli_module.settings, "DATABASE_URL", test_settings.database_url)
    monkeypatch.setattr(cli_module.settings, "LOG_LEVEL", "WARNING")


def test_init_db_creates_tables(monkeypatch, test_settings):
    _point_cli_at(monkeypatch, test_settings)

    result = CliRunner().invoke(cli_module.cli, ["init-db"])

    assert result.exit_code == 0, result.output
    assert "Database ready" in result.output
    engine = create_db_engine(test_settings.database_url)
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"surveys", "survey_details", "users"} <= tables


def test_seed_creates_demo_surveys(monkeypatch, test_settings):
    _point_cli_at(monkeypatch, test_settings)

    result = CliRunner().invoke(cli_module.cli, ["seed", "--count", "3"])

    assert result.exit_code == 0, result.output
    engine = create_db_engine(test_settings.database_url)
    db = create_session_factory(engine)()
    try:
        assert db.query(Survey).count() == 3
        assert db.query(SurveyDetail).count() == 3
        assert {s.status for s in db.query(Survey)} == {"pending"}
    finally:
        db.close()
        engine.dispose()
