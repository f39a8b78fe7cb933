"""Dashboard router - API endpoint for dashboard widgets."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from survey_crm.core.deps import get_db
from survey_crm.schemas.dashboard import DashboardStats
from survey_crm.services import dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard(db: Session = Depends(get_db)) -> DashboardStats:
    """
    Get dashboard statistics.

    Returns the total survey count, counts per status present in the data,
    and the five most recently created surveys.
    """
    try:
        return dashboard_service.get_dashboard_stats(db)
    except SQLAlchemyError:
        logger.exception("Failed to fetch dashboard data")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard data")
