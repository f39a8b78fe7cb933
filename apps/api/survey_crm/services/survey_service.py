"""Survey service - CRUD over surveys and their per-room details."""

import logging
import uuid
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from survey_crm.db.enums import DEFAULT_SURVEY_STATUS
from survey_crm.db.models import Survey, SurveyDetail
from survey_crm.schemas.survey import SurveyCreate, SurveyDetailCreate, SurveyUpdate

logger = logging.getLogger(__name__)


class SurveyServiceError(Exception):
    """Base exception for survey service errors."""

    pass


class SurveyNotFoundError(SurveyServiceError):
    """Survey not found."""

    def __init__(self, survey_id: UUID | str):
        super().__init__(f"Survey {survey_id} not found")
        self.survey_id = survey_id


def parse_survey_id(raw: str) -> UUID:
    """Parse a path id; a value that is not a UUID names no survey."""
    try:
        return UUID(raw)
    except ValueError:
        raise SurveyNotFoundError(raw) from None


def _enum_value(value) -> str | None:
    return value.value if value is not None else None


def _apply_fields(survey: Survey, data: SurveyCreate | SurveyUpdate) -> None:
    survey.customer_name = data.customer_name
    survey.customer_email = data.customer_email
    survey.customer_phone = data.customer_phone
    survey.property_address = data.property_address
    survey.property_type = _enum_value(data.property_type)
    survey.current_heating_system = _enum_value(data.current_heating_system)
    survey.survey_date = data.survey_date
    survey.surveyor_name = data.surveyor_name
    survey.notes = data.notes


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


# =============================================================================
# Reads
# =============================================================================


def list_surveys(db: Session, limit: int | None = None) -> list[Survey]:
    """List surveys, newest first."""
    query = db.query(Survey).order_by(Survey.created_at.desc(), Survey.id.desc())
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_survey(db: Session, survey_id: UUID) -> Survey | None:
    """Get a survey by ID."""
    return db.get(Survey, survey_id)


def list_details(db: Session, survey_id: UUID) -> list[SurveyDetail]:
    return (
        db.query(SurveyDetail)
        .filter(SurveyDetail.survey_id == survey_id)
        .order_by(SurveyDetail.created_at.asc())
        .all()
    )


def get_survey_with_details(
    db: Session, survey_id: UUID
) -> tuple[Survey, list[SurveyDetail]]:
    """
    Get a survey together with all of its room details.

    Raises:
        SurveyNotFoundError: no survey has this id
    """
    survey = get_survey(db, survey_id)
    if not survey:
        raise SurveyNotFoundError(survey_id)
    return survey, list_details(db, survey_id)


# =============================================================================
# Writes
# =============================================================================


def create_survey(db: Session, data: SurveyCreate) -> Survey:
    """Record a new survey as pending, with matching created/updated stamps."""
    now = datetime.now(timezone.utc)
    survey = Survey(
        id=uuid.uuid4(),
        status=DEFAULT_SURVEY_STATUS.value,
        created_at=now,
        updated_at=now,
    )
    _apply_fields(survey, data)
    db.add(survey)
    _commit(db)
    db.refresh(survey)

    logger.info("Created survey %s", survey.id)
    return survey


def update_survey(db: Session, survey_id: UUID, data: SurveyUpdate) -> Survey:
    """
    Overwrite every mutable field of a survey, including status.

    There is no partial-patch mode: fields missing from the request are
    cleared. Concurrent updates are last-write-wins.

    Raises:
        SurveyNotFoundError: no survey has this id
    """
    survey = get_survey(db, survey_id)
    if not survey:
        raise SurveyNotFoundError(survey_id)

    _apply_fields(survey, data)
    survey.status = data.status.value
    survey.updated_at = datetime.now(timezone.utc)
    _commit(db)
    db.refresh(survey)

    logger.info("Updated survey %s (status=%s)", survey.id, survey.status)
    return survey


def delete_survey(db: Session, survey_id: UUID) -> int:
    """
    Delete a survey and its details in one transaction.

    Returns the number of details removed.

    Raises:
        SurveyNotFoundError: no survey has this id
    """
    survey = get_survey(db, survey_id)
    if not survey:
        raise SurveyNotFoundError(survey_id)

    try:
        result = db.execute(
            delete(SurveyDetail).where(SurveyDetail.survey_id == survey_id)
        )
        db.delete(survey)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    removed = result.rowcount or 0
    logger.info("Deleted survey %s with %d details", survey_id, removed)
    return removed


def add_survey_detail(
    db: Session, survey_id: UUID, data: SurveyDetailCreate
) -> SurveyDetail:
    """
    Attach a room detail to an existing survey.

    Raises:
        SurveyNotFoundError: no survey has this id
    """
    if not get_survey(db, survey_id):
        raise SurveyNotFoundError(survey_id)

    detail = SurveyDetail(
        id=uuid.uuid4(),
        survey_id=survey_id,
        **data.model_dump(),
    )
    db.add(detail)
    _commit(db)
    db.refresh(detail)

    logger.info("Added detail %s to survey %s", detail.id, survey_id)
    return detail
