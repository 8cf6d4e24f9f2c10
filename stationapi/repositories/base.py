"""
Repository contracts consumed by the query service.

Each contract has one SQLAlchemy implementation in this package and one
in-memory fake used by the tests. All ids are unsigned 32-bit integers.
An omitted ``limit`` means 1, never "unbounded".
"""

from collections.abc import Sequence
from typing import Protocol

from stationapi.domain.entities import Company, Line, Station, TrainType


class StationRepository(Protocol):
    """Reads active stations, ordered by e_sort then station_cd."""

    async def find_by_id(self, station_id: int) -> Station | None:
        """Return the station, or None if it does not exist or is inactive."""
        ...

    async def get_by_group_id(self, station_group_id: int) -> list[Station]:
        """Return every per-line record of a physical station."""
        ...

    async def get_by_line_id(self, line_id: int) -> list[Station]:
        """Return the stations whose home line is line_id."""
        ...

    async def get_by_line_group_id(self, line_group_id: int) -> list[Station]:
        """Return the stations on a service pattern; passed stations carry StopCondition.NOT."""
        ...

    async def get_by_name(self, query: str, limit: int | None = None) -> list[Station]:
        """Case-insensitive substring search across all localized station names."""
        ...

    async def get_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        limit: int | None = None,
    ) -> list[Station]:
        """Return one station per group nearest the point, with distance set, ascending."""
        ...


class LineRepository(Protocol):
    """Reads active lines, with per-station alias overrides applied to names and color."""

    async def find_by_id(self, line_id: int) -> Line | None:
        """Return the line, or None if it does not exist or is inactive."""
        ...

    async def find_by_station_id(self, station_id: int) -> Line | None:
        """Return the home line of a station, annotated with the station's ids."""
        ...

    async def get_by_ids(self, line_ids: Sequence[int]) -> list[Line]:
        """Return the lines with the given ids. Empty input returns [] without a query."""
        ...

    async def get_by_station_group_id(self, station_group_id: int) -> list[Line]:
        """Return every line serving a station group."""
        ...

    async def get_by_station_group_id_batch(self, station_group_ids: Sequence[int]) -> list[Line]:
        """Return lines for many station groups, each annotated with its originating station."""
        ...

    async def get_by_line_group_id(self, line_group_id: int) -> list[Line]:
        """Return every line a service pattern runs on."""
        ...

    async def get_by_line_group_id_batch(self, line_group_ids: Sequence[int]) -> list[Line]:
        """Return lines for many service patterns, each annotated with its line_group_cd."""
        ...

    async def get_by_name(self, query: str, limit: int | None = None) -> list[Line]:
        """Case-insensitive substring search across all localized line names."""
        ...


class CompanyRepository(Protocol):
    """Reads companies; single-id lookups are cached."""

    async def find_by_id(self, company_id: int) -> Company | None:
        """Return the company, or None if it does not exist."""
        ...


class TrainTypeRepository(Protocol):
    """Reads service patterns (train types)."""

    async def get_by_station_id(self, station_id: int) -> list[TrainType]:
        """Return the service patterns that stop at a station."""
        ...

    async def find_by_line_group_id(self, line_group_id: int) -> TrainType | None:
        """Return the service pattern of a line group."""
        ...
