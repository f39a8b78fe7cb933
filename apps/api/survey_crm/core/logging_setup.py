"""Process-wide logging setup."""

import logging

from sqlalchemy.engine import make_url

from survey_crm.core.config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(settings: Settings) -> None:
    """Configure root logging once; later calls only adjust the level."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    logging.getLogger().setLevel(level)


def safe_database_url(url: str) -> str:
    """Render a database URL with any password masked."""
    return make_url(url).render_as_string(hide_password=True)
