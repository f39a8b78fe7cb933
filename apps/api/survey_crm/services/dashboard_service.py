"""Dashboard service - aggregate statistics for the dashboard widgets."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from survey_crm.db.models import Survey
from survey_crm.schemas.dashboard import DashboardStats, StatusCount
from survey_crm.schemas.survey import SurveyRead
from survey_crm.services import survey_service

RECENT_SURVEYS_LIMIT = 5


def count_by_status(db: Session) -> list[StatusCount]:
    """Count surveys per status; statuses with no surveys are omitted."""
    rows = (
        db.query(Survey.status, func.count(Survey.id))
        .group_by(Survey.status)
        .order_by(Survey.status)
        .all()
    )
    return [StatusCount(status=status, count=count) for status, count in rows]


def get_dashboard_stats(db: Session) -> DashboardStats:
    """Total count, per-status counts and the most recent surveys."""
    total = db.query(func.count(Survey.id)).scalar() or 0
    recent = survey_service.list_surveys(db, limit=RECENT_SURVEYS_LIMIT)
    return DashboardStats(
        total_surveys=total,
        by_status=count_by_status(db),
        recent_surveys=[SurveyRead.model_validate(s) for s in recent],
    )
