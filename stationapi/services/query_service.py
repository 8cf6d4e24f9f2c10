"""
Query service: reads stations, lines and companies and enriches them.

Enrichment attaches to each station its home line, the sibling lines that
serve its station group, derived line symbols for every line and the
station's numbers on its home line.
"""

import asyncio
from collections.abc import Sequence

import structlog

from stationapi.core.exceptions import InconsistentDataError, NotFoundError
from stationapi.domain.entities import Company, Line, Station, TrainType
from stationapi.helpers.attributes import get_line_symbols, get_station_numbers
from stationapi.repositories.base import (
    CompanyRepository,
    LineRepository,
    StationRepository,
    TrainTypeRepository,
)

logger = structlog.get_logger(__name__)


def attach_line_symbols(lines: Sequence[Line]) -> None:
    """Recompute line_symbols for every line from its raw slots."""
    for line in lines:
        line.line_symbols = get_line_symbols(line)


def attach_station_attributes(station: Station, home_line: Line, siblings: Sequence[Line]) -> None:
    """
    Attach the home line, sibling lines and station numbers to a station.

    Symbols are recomputed for the home line and every sibling, so calling
    this again on an enriched station gives the same result.
    """
    attach_line_symbols(siblings)
    attach_line_symbols([home_line])
    station.station_numbers = get_station_numbers(station, home_line)
    station.lines = list(siblings)
    station.line = home_line


class QueryService:
    """Read operations over the railway data, with attribute enrichment."""

    def __init__(
        self,
        station_repository: StationRepository,
        line_repository: LineRepository,
        company_repository: CompanyRepository,
        train_type_repository: TrainTypeRepository,
    ) -> None:
        """
        Initialize the query service.

        Args:
            station_repository: Station reads
            line_repository: Line reads (alias overrides applied)
            company_repository: Cached company reads
            train_type_repository: Service pattern reads
        """
        self.station_repository = station_repository
        self.line_repository = line_repository
        self.company_repository = company_repository
        self.train_type_repository = train_type_repository

    # ==================== Stations ====================

    async def find_station_by_id(self, station_id: int) -> Station:
        """
        Return one fully enriched station, with its home line's company.

        Raises:
            NotFoundError: If no active station has this id
            InconsistentDataError: If the station's home line cannot be resolved
        """
        station = await self.station_repository.find_by_id(station_id)
        if station is None:
            logger.info("station_not_found", station_id=station_id)
            raise NotFoundError("Station", station_id)

        await self.get_station_with_attributes(station)
        if station.line is not None:
            station.line.company = await self.company_repository.find_by_id(station.line.company_cd)
        return station

    async def get_stations_by_group_id(self, station_group_id: int) -> list[Station]:
        stations = await self.station_repository.get_by_group_id(station_group_id)
        return await self.get_stations_with_attributes(stations)

    async def get_stations_by_line_id(self, line_id: int) -> list[Station]:
        stations = await self.station_repository.get_by_line_id(line_id)
        return await self.get_stations_with_attributes(stations)

    async def get_stations_by_line_group_id(self, line_group_id: int) -> list[Station]:
        stations = await self.station_repository.get_by_line_group_id(line_group_id)
        return await self.get_stations_with_attributes(stations)

    async def get_stations_by_name(self, query: str, limit: int | None = None) -> list[Station]:
        stations = await self.station_repository.get_by_name(query, limit)
        return await self.get_stations_with_attributes(stations)

    async def get_stations_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        limit: int | None = None,
    ) -> list[Station]:
        stations = await self.station_repository.get_by_coordinates(latitude, longitude, limit)
        return await self.get_stations_with_attributes(stations)

    # ==================== Lines ====================

    async def find_line_by_id(self, line_id: int) -> Line:
        """
        Return one line with symbols and company attached.

        Raises:
            NotFoundError: If no active line has this id
        """
        line = await self.line_repository.find_by_id(line_id)
        if line is None:
            logger.info("line_not_found", line_id=line_id)
            raise NotFoundError("Line", line_id)

        attach_line_symbols([line])
        line.company = await self.company_repository.find_by_id(line.company_cd)
        return line

    async def get_lines_by_name(self, query: str, limit: int | None = None) -> list[Line]:
        lines = await self.line_repository.get_by_name(query, limit)
        attach_line_symbols(lines)
        return lines

    async def get_lines_by_line_group_id(self, line_group_id: int) -> list[Line]:
        lines = await self.line_repository.get_by_line_group_id(line_group_id)
        attach_line_symbols(lines)
        return lines

    # ==================== Companies and train types ====================

    async def find_company_by_id(self, company_id: int) -> Company:
        """
        Return a company.

        Raises:
            NotFoundError: If no active company has this id
        """
        company = await self.company_repository.find_by_id(company_id)
        if company is None:
            logger.info("company_not_found", company_id=company_id)
            raise NotFoundError("Company", company_id)
        return company

    async def get_train_types_by_station_id(self, station_id: int) -> list[TrainType]:
        """
        Return the service patterns stopping at a station.

        Raises:
            NotFoundError: If no active station has this id
        """
        station = await self.station_repository.find_by_id(station_id)
        if station is None:
            logger.info("station_not_found", station_id=station_id)
            raise NotFoundError("Station", station_id)
        return await self.train_type_repository.get_by_station_id(station_id)

    async def find_train_type_by_line_group_id(self, line_group_id: int) -> TrainType:
        """
        Return the service pattern that runs a line group.

        Raises:
            NotFoundError: If no service pattern is linked to the line group
        """
        train_type = await self.train_type_repository.find_by_line_group_id(line_group_id)
        if train_type is None:
            logger.info("train_type_not_found", line_group_id=line_group_id)
            raise NotFoundError("TrainType", line_group_id)
        return train_type

    # ==================== Enrichment ====================

    async def get_station_with_attributes(self, station: Station) -> Station:
        """
        Enrich a single station in place.

        Args:
            station: Station as read from the station repository

        Returns:
            The same station with line, lines and station_numbers set

        Raises:
            InconsistentDataError: If no active line matches station.line_cd
        """
        home_line = await self.line_repository.find_by_id(station.line_cd)
        if home_line is None:
            logger.error(
                "station_home_line_missing",
                station_id=station.station_cd,
                line_id=station.line_cd,
            )
            raise InconsistentDataError(station.station_cd, station.line_cd)

        siblings = await self.line_repository.get_by_station_group_id(station.station_g_cd)
        attach_station_attributes(station, home_line, siblings)
        return station

    async def get_stations_with_attributes(self, stations: list[Station]) -> list[Station]:
        """
        Enrich many stations with one home line query plus one sibling query per group.

        Sibling queries for distinct station groups run concurrently. A station
        whose home line cannot be resolved stays in the result with empty
        line, lines and station_numbers; the rest of the batch is unaffected.

        Args:
            stations: Stations as read from the station repository

        Returns:
            The same list, in the same order, enriched in place
        """
        if not stations:
            return stations

        line_ids = sorted({station.line_cd for station in stations})
        home_lines = {line.line_cd: line for line in await self.line_repository.get_by_ids(line_ids)}

        group_ids = sorted({station.station_g_cd for station in stations})
        try:
            async with asyncio.TaskGroup() as task_group:
                sibling_tasks = {
                    group_id: task_group.create_task(self.line_repository.get_by_station_group_id(group_id))
                    for group_id in group_ids
                }
        except ExceptionGroup as eg:
            # Callers see the repository's own error, not the group wrapper
            raise eg.exceptions[0]  # noqa: B904
        siblings_by_group = {group_id: task.result() for group_id, task in sibling_tasks.items()}

        skipped = 0
        for station in stations:
            home_line = home_lines.get(station.line_cd)
            if home_line is None:
                logger.warning(
                    "station_enrichment_skipped",
                    station_id=station.station_cd,
                    line_id=station.line_cd,
                )
                skipped += 1
                continue
            attach_station_attributes(station, home_line, siblings_by_group[station.station_g_cd])

        logger.debug(
            "stations_enriched",
            count=len(stations),
            skipped=skipped,
            line_queries=1,
            group_queries=len(group_ids),
        )
        return stations
