from datetime import datetime

from sqlalchemy.orm import DeclarativeBase

from survey_crm.db.types import UTCDateTime


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    type_annotation_map = {
        datetime: UTCDateTime(),
    }
