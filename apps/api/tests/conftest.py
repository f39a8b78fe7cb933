"""
Test configuration and fixtures.

Provides:
- Settings pointing at a throwaway SQLite file per test
- Database session for service-level tests
- TestClient running the full app lifespan (HTTP + WebSocket)
"""
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from survey_crm.core.config import Settings
from survey_crm.db.session import create_db_engine, create_session_factory, init_db
from survey_crm.main import create_app


# =============================================================================
# Configuration
# =============================================================================

@pytest.fixture(scope="function")
def test_settings(tmp_path) -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        ENV="dev",
        DATABASE_URL=f"sqlite:///{tmp_path / 'surveys.db'}",
        LOG_LEVEL="WARNING",
        SENTRY_DSN="",
    )


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db(test_settings: Settings) -> Generator[Session, None, None]:
    """Session on a freshly created schema."""
    engine = create_db_engine(test_settings.database_url)
    init_db(engine)
    session = create_session_factory(engine)()

    yield session

    session.close()
    engine.dispose()


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def app(test_settings: Settings) -> FastAPI:
    return create_app(test_settings)


@pytest.fixture(scope="function")
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    TestClient used as a context manager so the lifespan runs and HTTP
    requests share one event loop with WebSocket sessions.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture
def survey_payload() -> dict:
    return {
        "customer_name": "Alice Morgan",
        "customer_email": "alice@example.com",
        "customer_phone": "07700 900123",
        "property_address": "12 Station Road, Leeds",
        "property_type": "semi-detached",
        "current_heating_system": "gas-boiler",
        "survey_date": "2026-11-02",
        "surveyor_name": "Sam Carter",
        "notes": "Side gate access only",
    }


@pytest.fixture
def detail_payload() -> dict:
    return {
        "room_name": "Loft",
        "room_type": "loft",
        "current_insulation": "100mm mineral wool",
        "recommended_improvements": "Top up to 270mm",
        "estimated_cost": 450.0,
        "potential_savings": 120.5,
    }
