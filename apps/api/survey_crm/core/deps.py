"""FastAPI dependencies for database access and the notification channel."""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from survey_crm.core.websocket import ConnectionManager


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency.

    Sessions come from the factory built in the application lifespan and
    are closed after the request.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.ws_manager
