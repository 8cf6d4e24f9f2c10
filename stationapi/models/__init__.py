"""Database models for the railway master data schema."""

from stationapi.models.base import ACTIVE_STATUS, Base, StatusMixin
from stationapi.models.railway import (
    Alias,
    Company,
    Line,
    LineAlias,
    Station,
    StationStationType,
    TrainType,
)

__all__ = [
    # Base
    "ACTIVE_STATUS",
    "Base",
    "StatusMixin",
    # Railway models
    "Alias",
    "Company",
    "Line",
    "LineAlias",
    "Station",
    "StationStationType",
    "TrainType",
]
