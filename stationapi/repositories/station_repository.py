"""SQLAlchemy-backed station repository."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import aliased
from sqlalchemy.sql import Select

from stationapi.core.config import settings
from stationapi.domain.entities import Station as StationEntity
from stationapi.domain.entities import StopCondition
from stationapi.domain.slots import SlotTriple
from stationapi.helpers.geo import spherical_distance_km
from stationapi.helpers.status_filters import add_active_filter, add_standard_order
from stationapi.helpers.text_search import (
    LIKE_ESCAPE_CHAR,
    build_contains_pattern,
    resolve_limit,
    sanitize_search_query,
)
from stationapi.models import ACTIVE_STATUS, Station, StationStationType
from stationapi.repositories.sqlalchemy_base import SqlAlchemyRepository


def station_types_count() -> ColumnElement[int]:
    """Correlated count of the service patterns that actually stop at the station."""
    return (
        select(func.count(StationStationType.id))
        .where(
            StationStationType.station_cd == Station.station_cd,
            StationStationType.pass_ != StopCondition.NOT,
        )
        .correlate(Station)
        .scalar_subquery()
        .label("station_types_count")
    )


def station_row_to_entity(row: Mapping[str, Any]) -> StationEntity:
    """Build a Station entity from a row keyed by stations column names."""
    stop_condition = row.get("stop_condition")
    return StationEntity(
        station_cd=row["station_cd"],
        station_g_cd=row["station_g_cd"],
        station_name=row["station_name"],
        station_name_k=row["station_name_k"],
        station_name_r=row["station_name_r"],
        station_name_zh=row["station_name_zh"],
        station_name_ko=row["station_name_ko"],
        numbers=SlotTriple(
            row["primary_station_number"],
            row["secondary_station_number"],
            row["extra_station_number"],
        ),
        three_letter_code=row["three_letter_code"],
        line_cd=row["line_cd"],
        pref_cd=row["pref_cd"],
        post=row["post"],
        address=row["address"],
        lon=float(row["lon"]),
        lat=float(row["lat"]),
        open_ymd=row["open_ymd"],
        close_ymd=row["close_ymd"],
        e_status=row["e_status"],
        e_sort=row["e_sort"],
        stop_condition=StopCondition(stop_condition) if stop_condition is not None else StopCondition.ALL,
        distance=row.get("distance"),
        station_types_count=row.get("station_types_count") or 0,
    )


class SqlStationRepository(SqlAlchemyRepository):
    """Station reads against the stations table."""

    name = "station_repository"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_query_length: int | None = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            session_factory: Factory producing short-lived async sessions
            max_query_length: Longest accepted name search (defaults to MAX_SEARCH_QUERY_LENGTH)
        """
        super().__init__(session_factory)
        self.max_query_length = max_query_length or settings.MAX_SEARCH_QUERY_LENGTH

    def _base_query(self) -> Select[Any]:
        """Active stations with their service pattern count."""
        query = select(*Station.__table__.c, station_types_count())
        return add_active_filter(query, Station)

    async def find_by_id(self, station_id: int) -> StationEntity | None:
        query = self._base_query().where(Station.station_cd == station_id)
        row = await self._fetch_one("find_by_id", query, station_id=station_id)
        return station_row_to_entity(row) if row else None

    async def get_by_group_id(self, station_group_id: int) -> list[StationEntity]:
        query = self._base_query().where(Station.station_g_cd == station_group_id)
        query = add_standard_order(query, Station, Station.station_cd)
        rows = await self._fetch_all("get_by_group_id", query, station_group_id=station_group_id)
        return [station_row_to_entity(row) for row in rows]

    async def get_by_line_id(self, line_id: int) -> list[StationEntity]:
        query = self._base_query().where(Station.line_cd == line_id)
        query = add_standard_order(query, Station, Station.station_cd)
        rows = await self._fetch_all("get_by_line_id", query, line_id=line_id)
        return [station_row_to_entity(row) for row in rows]

    async def get_by_line_group_id(self, line_group_id: int) -> list[StationEntity]:
        """
        Stations linked to a line group, including ones the pattern passes through.

        stop_condition carries the link's pass value, so callers can tell a
        passed station (StopCondition.NOT) from a stop.
        """
        query = (
            self._base_query()
            .add_columns(StationStationType.pass_.label("stop_condition"))
            .join(
                StationStationType,
                (StationStationType.station_cd == Station.station_cd)
                & (StationStationType.line_group_cd == line_group_id),
            )
        )
        query = add_standard_order(query, Station, Station.station_cd)
        rows = await self._fetch_all("get_by_line_group_id", query, line_group_id=line_group_id)
        return [station_row_to_entity(row) for row in rows]

    async def get_by_name(self, query: str, limit: int | None = None) -> list[StationEntity]:
        """
        Case-insensitive substring search over every localized name column.

        Raises:
            InvalidInputError: If the text is unusable or limit is not positive
        """
        text = sanitize_search_query(query, self.max_query_length)
        pattern = build_contains_pattern(text)
        resolved_limit = resolve_limit(limit)

        name_columns = (
            Station.station_name,
            Station.station_name_k,
            Station.station_name_r,
            Station.station_name_zh,
            Station.station_name_ko,
        )
        statement = self._base_query().where(
            or_(*(column.ilike(pattern, escape=LIKE_ESCAPE_CHAR) for column in name_columns))
        )
        statement = add_standard_order(statement, Station, Station.station_cd).limit(resolved_limit)
        rows = await self._fetch_all("get_by_name", statement, limit=resolved_limit)
        return [station_row_to_entity(row) for row in rows]

    async def get_by_coordinates(
        self,
        latitude: float,
        longitude: float,
        limit: int | None = None,
    ) -> list[StationEntity]:
        """
        Nearest stations to a point, one representative per station group.

        The representative of a group is its lowest active station_cd, so a
        physical station served by several lines is returned once.
        """
        resolved_limit = resolve_limit(limit)
        group_mate = aliased(Station)
        representative = (
            select(func.min(group_mate.station_cd))
            .where(
                group_mate.station_g_cd == Station.station_g_cd,
                group_mate.e_status == ACTIVE_STATUS,
            )
            .correlate(Station)
            .scalar_subquery()
        )
        distance = spherical_distance_km(Station.lat, Station.lon, latitude, longitude).label("distance")

        query = (
            self._base_query()
            .add_columns(distance)
            .where(Station.station_cd == representative)
            .order_by(distance.asc(), Station.station_cd.asc())
            .limit(resolved_limit)
        )
        rows = await self._fetch_all("get_by_coordinates", query, limit=resolved_limit)
        return [station_row_to_entity(row) for row in rows]
