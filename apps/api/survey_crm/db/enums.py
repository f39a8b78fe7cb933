"""Enum definitions for survey fields."""

from enum import Enum


class SurveyStatus(str, Enum):
    """
    Survey lifecycle.

    New surveys start as PENDING; any other value is only reached
    through an explicit update.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PropertyType(str, Enum):
    DETACHED = "detached"
    SEMI_DETACHED = "semi-detached"
    TERRACED = "terraced"
    FLAT = "flat"
    BUNGALOW = "bungalow"


class HeatingSystem(str, Enum):
    GAS_BOILER = "gas-boiler"
    OIL_BOILER = "oil-boiler"
    ELECTRIC = "electric"
    HEAT_PUMP = "heat-pump"
    STORAGE_HEATERS = "storage-heaters"


DEFAULT_SURVEY_STATUS = SurveyStatus.PENDING
