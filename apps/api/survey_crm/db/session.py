from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker

from survey_crm.db.base import Base


def create_db_engine(database_url: str) -> Engine:
    """Build the engine for the configured store."""
    connect_args = {}
    if make_url(database_url).get_backend_name() == "sqlite":
        # Sessions are opened from FastAPI's threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create all tables if they don't exist."""
    # Register models with Base.metadata
    import survey_crm.db.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
