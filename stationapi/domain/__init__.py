"""Domain entities and value objects."""

from stationapi.domain.entities import (
    Company,
    Line,
    LineSymbol,
    Station,
    StationNumber,
    StopCondition,
    TrainType,
)
from stationapi.domain.slots import SlotTriple

__all__ = [
    "Company",
    "Line",
    "LineSymbol",
    "SlotTriple",
    "Station",
    "StationNumber",
    "StopCondition",
    "TrainType",
]
