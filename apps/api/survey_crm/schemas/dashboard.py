"""Pydantic schemas for dashboard statistics."""

from pydantic import BaseModel, ConfigDict, Field

from survey_crm.schemas.survey import SurveyRead


class StatusCount(BaseModel):
    """Number of surveys in one status."""

    status: str
    count: int


class DashboardStats(BaseModel):
    """
    Dashboard widget payload.

    Serialized with the camelCase keys the dashboard client reads.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_surveys: int = Field(..., alias="totalSurveys")
    by_status: list[StatusCount] = Field(default_factory=list, alias="byStatus")
    recent_surveys: list[SurveyRead] = Field(
        default_factory=list, alias="recentSurveys"
    )
