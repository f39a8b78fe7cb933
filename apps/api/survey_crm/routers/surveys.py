"""Surveys router - API endpoints for surveys and their room details."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from survey_crm.core.deps import get_connection_manager, get_db
from survey_crm.core.websocket import ConnectionManager
from survey_crm.schemas.survey import (
    CreatedResponse,
    MessageResponse,
    SurveyCreate,
    SurveyDetailCreate,
    SurveyDetailRead,
    SurveyRead,
    SurveyUpdate,
    SurveyWithDetails,
)
from survey_crm.services import survey_events, survey_service
from survey_crm.services.survey_service import SurveyNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/surveys", tags=["surveys"])


def _store_failure(detail: str) -> HTTPException:
    logger.exception(detail)
    return HTTPException(status_code=500, detail=detail)


@router.get("", response_model=list[SurveyRead])
def list_surveys(db: Session = Depends(get_db)):
    """List all surveys, newest first. Filtering is done by the client."""
    try:
        surveys = survey_service.list_surveys(db)
    except SQLAlchemyError:
        raise _store_failure("Failed to fetch surveys")
    return [SurveyRead.model_validate(s) for s in surveys]


@router.get("/{survey_id}", response_model=SurveyWithDetails)
def get_survey(survey_id: str, db: Session = Depends(get_db)):
    """Get a survey with all of its room details."""
    try:
        survey, details = survey_service.get_survey_with_details(
            db, survey_service.parse_survey_id(survey_id)
        )
    except SurveyNotFoundError:
        raise HTTPException(status_code=404, detail="Survey not found")
    except SQLAlchemyError:
        raise _store_failure("Failed to fetch survey")
    return SurveyWithDetails(
        survey=SurveyRead.model_validate(survey),
        details=[SurveyDetailRead.model_validate(d) for d in details],
    )


@router.post("", response_model=CreatedResponse)
def create_survey(
    data: SurveyCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager),
):
    """Record a new survey. It starts as pending."""
    try:
        survey = survey_service.create_survey(db, data)
    except SQLAlchemyError:
        raise _store_failure("Failed to create survey")

    survey_events.notify_survey_created(background_tasks, manager, survey.id)
    return CreatedResponse(id=survey.id, message="Survey created successfully")


@router.put("/{survey_id}", response_model=MessageResponse)
def update_survey(
    survey_id: str,
    data: SurveyUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager),
):
    """Replace every mutable field of a survey, including its status."""
    try:
        survey = survey_service.update_survey(
            db, survey_service.parse_survey_id(survey_id), data
        )
    except SurveyNotFoundError:
        raise HTTPException(status_code=404, detail="Survey not found")
    except SQLAlchemyError:
        raise _store_failure("Failed to update survey")

    survey_events.notify_survey_updated(background_tasks, manager, survey.id)
    return MessageResponse(message="Survey updated successfully")


@router.delete("/{survey_id}", response_model=MessageResponse)
def delete_survey(
    survey_id: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager),
):
    """Delete a survey together with its room details."""
    try:
        deleted_id = survey_service.parse_survey_id(survey_id)
        survey_service.delete_survey(db, deleted_id)
    except SurveyNotFoundError:
        raise HTTPException(status_code=404, detail="Survey not found")
    except SQLAlchemyError:
        raise _store_failure("Failed to delete survey")

    survey_events.notify_survey_deleted(background_tasks, manager, deleted_id)
    return MessageResponse(message="Survey deleted successfully")


@router.post("/{survey_id}/details", response_model=CreatedResponse)
def add_survey_detail(
    survey_id: str,
    data: SurveyDetailCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager),
):
    """Add a per-room insulation finding to a survey."""
    try:
        detail = survey_service.add_survey_detail(
            db, survey_service.parse_survey_id(survey_id), data
        )
    except SurveyNotFoundError:
        raise HTTPException(status_code=404, detail="Survey not found")
    except SQLAlchemyError:
        raise _store_failure("Failed to add survey detail")

    survey_events.notify_survey_detail_added(
        background_tasks, manager, detail.survey_id, detail.id
    )
    return CreatedResponse(id=detail.id, message="Survey detail added successfully")
