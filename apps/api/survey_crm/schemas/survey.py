"""Pydantic schemas for surveys and survey details."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from survey_crm.db.enums import HeatingSystem, PropertyType, SurveyStatus


def _blank_to_none(value):
    # HTML forms submit unset inputs as ""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# =============================================================================
# Survey
# =============================================================================


class SurveyBase(BaseModel):
    """Fields shared by create and update requests."""

    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: str | None = Field(None, max_length=255)
    customer_phone: str | None = Field(None, max_length=50)
    property_address: str = Field(..., min_length=1)
    property_type: PropertyType | None = None
    current_heating_system: HeatingSystem | None = None
    survey_date: date | None = None
    surveyor_name: str | None = Field(None, max_length=255)
    notes: str | None = None

    @field_validator(
        "customer_email",
        "customer_phone",
        "property_type",
        "current_heating_system",
        "survey_date",
        "surveyor_name",
        "notes",
        mode="before",
    )
    @classmethod
    def blank_optional_fields(cls, value):
        return _blank_to_none(value)

    @field_validator("customer_name", "property_address")
    @classmethod
    def require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class SurveyCreate(SurveyBase):
    """Request to record a new survey. Status and timestamps are server-set."""


class SurveyUpdate(SurveyBase):
    """
    Full replacement of a survey's mutable fields.

    Omitted optional fields are cleared; omitted status resets to pending.
    """

    status: SurveyStatus = SurveyStatus.PENDING


class SurveyRead(BaseModel):
    """Survey response."""

    id: UUID
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    property_address: str
    property_type: str | None = None
    current_heating_system: str | None = None
    survey_date: date | None = None
    surveyor_name: str | None = None
    status: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# =============================================================================
# Survey details
# =============================================================================


class SurveyDetailCreate(BaseModel):
    """Request to add a per-room finding to a survey."""

    room_name: str | None = Field(None, max_length=255)
    room_type: str | None = Field(None, max_length=100)
    current_insulation: str | None = None
    recommended_improvements: str | None = None
    estimated_cost: float | None = Field(None, ge=0)
    potential_savings: float | None = Field(None, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def blank_fields(cls, value):
        return _blank_to_none(value)


class SurveyDetailRead(BaseModel):
    """Survey detail response."""

    id: UUID
    survey_id: UUID
    room_name: str | None = None
    room_type: str | None = None
    current_insulation: str | None = None
    recommended_improvements: str | None = None
    estimated_cost: float | None = None
    potential_savings: float | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class SurveyWithDetails(BaseModel):
    survey: SurveyRead
    details: list[SurveyDetailRead]


# =============================================================================
# Mutation acknowledgements
# =============================================================================


class CreatedResponse(BaseModel):
    id: UUID
    message: str


class MessageResponse(BaseModel):
    message: str
