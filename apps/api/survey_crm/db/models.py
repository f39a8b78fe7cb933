"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, Index, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from survey_crm.db.base import Base
from survey_crm.db.enums import DEFAULT_SURVEY_STATUS


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Survey(Base):
    """
    One energy-efficiency assessment for a customer's property.

    Timestamps are written by survey_service: created_at once, updated_at
    on creation and on every update.
    """

    __tablename__ = "surveys"
    __table_args__ = (
        Index("ix_surveys_created_at", "created_at"),
        Index("ix_surveys_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    # Customer
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Property
    property_address: Mapped[str] = mapped_column(Text, nullable=False)
    property_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    current_heating_system: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )

    # Scheduling
    survey_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    surveyor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    status: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_SURVEY_STATUS.value, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)


class SurveyDetail(Base):
    """
    Per-room insulation finding attached to a survey.

    survey_id is a plain indexed column, not a foreign key: details are
    removed explicitly by survey_service.delete_survey.
    """

    __tablename__ = "survey_details"
    __table_args__ = (Index("ix_survey_details_survey_id", "survey_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    survey_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)

    room_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    room_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    current_insulation: Mapped[str | None] = mapped_column(Text, nullable=True)
    recommended_improvements: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Currency amounts (GBP)
    estimated_cost: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    potential_savings: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)


class User(Base):
    """Dashboard credential. Provisioned with the schema; no endpoint reads it."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
