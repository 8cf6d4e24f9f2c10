"""Repository contracts and their SQLAlchemy implementations."""

from stationapi.repositories.base import (
    CompanyRepository,
    LineRepository,
    StationRepository,
    TrainTypeRepository,
)
from stationapi.repositories.company_repository import SqlCompanyRepository
from stationapi.repositories.line_repository import SqlLineRepository
from stationapi.repositories.station_repository import SqlStationRepository
from stationapi.repositories.train_type_repository import SqlTrainTypeRepository

__all__ = [
    # Contracts
    "CompanyRepository",
    "LineRepository",
    "StationRepository",
    "TrainTypeRepository",
    # SQLAlchemy implementations
    "SqlCompanyRepository",
    "SqlLineRepository",
    "SqlStationRepository",
    "SqlTrainTypeRepository",
]
