"""
SQLAlchemy-backed line repository.

Lines read through a station carry that station's alias overrides: each
overridable column resolves as COALESCE(aliases.x, lines.x), so an alias may
replace only the name, only the color, or both.
"""

from collections.abc import Callable, Hashable, Mapping, Sequence
from typing import Any

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Select

from stationapi.core.config import settings
from stationapi.domain.entities import Line as LineEntity
from stationapi.domain.entities import StopCondition
from stationapi.domain.slots import SlotTriple
from stationapi.helpers.status_filters import add_active_filter, add_active_filters
from stationapi.helpers.text_search import (
    LIKE_ESCAPE_CHAR,
    build_contains_pattern,
    resolve_limit,
    sanitize_search_query,
)
from stationapi.models import Alias, Line, LineAlias, Station, StationStationType
from stationapi.repositories.sqlalchemy_base import SqlAlchemyRepository

# Line columns an alias may override
ALIASED_COLUMNS = (
    "line_name",
    "line_name_k",
    "line_name_h",
    "line_name_r",
    "line_name_zh",
    "line_name_ko",
    "line_color_c",
)


def _line_columns() -> list[ColumnElement[Any]]:
    """Every lines column, with the overridable ones coalesced against aliases."""
    columns: list[ColumnElement[Any]] = []
    for column in Line.__table__.c:
        if column.name in ALIASED_COLUMNS:
            columns.append(func.coalesce(getattr(Alias, column.name), column).label(column.name))
        else:
            columns.append(column)
    return columns


def _stop_line_group() -> ColumnElement[int | None]:
    """Lowest line group that stops at the joined station, or NULL."""
    return (
        select(func.min(StationStationType.line_group_cd))
        .where(
            StationStationType.station_cd == Station.station_cd,
            StationStationType.pass_ != StopCondition.NOT,
        )
        .correlate(Station)
        .scalar_subquery()
        .label("line_group_cd")
    )


def _with_aliases(query: Select[Any]) -> Select[Any]:
    """Outer join the alias tables through the already joined station."""
    return query.outerjoin(LineAlias, LineAlias.station_cd == Station.station_cd).outerjoin(
        Alias, Alias.id == LineAlias.alias_cd
    )


def _unique(rows: Sequence[Mapping[str, Any]], key: Callable[[Mapping[str, Any]], Hashable]) -> list[Mapping[str, Any]]:
    """Keep the first row per key, preserving order."""
    seen: set[Hashable] = set()
    unique_rows = []
    for row in rows:
        row_key = key(row)
        if row_key in seen:
            continue
        seen.add(row_key)
        unique_rows.append(row)
    return unique_rows


def line_row_to_entity(row: Mapping[str, Any]) -> LineEntity:
    """Build a Line entity from a row keyed by lines column names."""
    return LineEntity(
        line_cd=row["line_cd"],
        company_cd=row["company_cd"],
        line_name=row["line_name"] or "",
        line_name_k=row["line_name_k"] or "",
        line_name_h=row["line_name_h"] or "",
        line_name_r=row["line_name_r"],
        line_name_zh=row["line_name_zh"],
        line_name_ko=row["line_name_ko"],
        line_color_c=row["line_color_c"],
        line_type=row["line_type"],
        symbols=SlotTriple(
            row["line_symbol_primary"],
            row["line_symbol_secondary"],
            row["line_symbol_extra"],
        ),
        symbol_colors=SlotTriple(
            row["line_symbol_primary_color"],
            row["line_symbol_secondary_color"],
            row["line_symbol_extra_color"],
        ),
        symbol_shapes=SlotTriple(
            row["line_symbol_primary_shape"],
            row["line_symbol_secondary_shape"],
            row["line_symbol_extra_shape"],
        ),
        e_status=row["e_status"],
        e_sort=row["e_sort"],
        average_distance=row["average_distance"] or 0.0,
        line_group_cd=row.get("line_group_cd"),
        station_cd=row.get("station_cd"),
        station_g_cd=row.get("station_g_cd"),
    )


class SqlLineRepository(SqlAlchemyRepository):
    """Line reads against the lines table."""

    name = "line_repository"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        max_query_length: int | None = None,
    ) -> None:
        super().__init__(session_factory)
        self.max_query_length = max_query_length or settings.MAX_SEARCH_QUERY_LENGTH

    def _station_join_query(self) -> Select[Any]:
        """
        Active lines joined to the active stations whose home line they are.

        Rows are annotated with the station's ids and its stopping line group.
        """
        query = (
            select(
                *_line_columns(),
                Station.station_cd.label("station_cd"),
                Station.station_g_cd.label("station_g_cd"),
                _stop_line_group(),
            )
            .select_from(Line)
            .join(Station, Station.line_cd == Line.line_cd)
        )
        return add_active_filters(_with_aliases(query), Line, Station)

    def _line_group_query(self) -> Select[Any]:
        """Active lines reached through the stopping links of a line group."""
        query = (
            select(
                *_line_columns(),
                Station.station_cd.label("station_cd"),
                Station.station_g_cd.label("station_g_cd"),
                StationStationType.line_group_cd.label("line_group_cd"),
            )
            .select_from(Line)
            .join(Station, Station.line_cd == Line.line_cd)
            .join(
                StationStationType,
                (StationStationType.station_cd == Station.station_cd)
                & (StationStationType.pass_ != StopCondition.NOT),
            )
        )
        return add_active_filters(_with_aliases(query), Line, Station)

    async def find_by_id(self, line_id: int) -> LineEntity | None:
        query = add_active_filter(select(*Line.__table__.c), Line).where(Line.line_cd == line_id)
        row = await self._fetch_one("find_by_id", query, line_id=line_id)
        return line_row_to_entity(row) if row else None

    async def find_by_station_id(self, station_id: int) -> LineEntity | None:
        query = self._station_join_query().where(Station.station_cd == station_id)
        row = await self._fetch_one("find_by_station_id", query, station_id=station_id)
        return line_row_to_entity(row) if row else None

    async def get_by_ids(self, line_ids: Sequence[int]) -> list[LineEntity]:
        if not line_ids:
            return []
        ids = sorted(set(line_ids))
        query = (
            add_active_filter(select(*Line.__table__.c), Line)
            .where(Line.line_cd.in_(ids))
            .order_by(Line.e_sort.asc(), Line.line_cd.asc())
        )
        rows = await self._fetch_all("get_by_ids", query, line_count=len(ids))
        return [line_row_to_entity(row) for row in rows]

    async def get_by_station_group_id(self, station_group_id: int) -> list[LineEntity]:
        """
        Lines serving a station group, one per line.

        Each line is annotated with the group member whose home line it is.
        """
        query = (
            self._station_join_query()
            .where(Station.station_g_cd == station_group_id)
            .order_by(Line.e_sort.asc(), Line.line_cd.asc(), Station.station_cd.asc())
        )
        rows = await self._fetch_all("get_by_station_group_id", query, station_group_id=station_group_id)
        return [line_row_to_entity(row) for row in _unique(rows, lambda row: row["line_cd"])]

    async def get_by_station_group_id_batch(self, station_group_ids: Sequence[int]) -> list[LineEntity]:
        """
        Lines for many station groups in one query.

        One row per member station; callers regroup by station_g_cd.
        """
        if not station_group_ids:
            return []
        ids = sorted(set(station_group_ids))
        query = (
            self._station_join_query()
            .where(Station.station_g_cd.in_(ids))
            .order_by(Line.e_sort.asc(), Line.line_cd.asc(), Station.station_cd.asc())
        )
        rows = await self._fetch_all("get_by_station_group_id_batch", query, group_count=len(ids))
        return [line_row_to_entity(row) for row in _unique(rows, lambda row: row["station_cd"])]

    async def get_by_line_group_id(self, line_group_id: int) -> list[LineEntity]:
        query = (
            self._line_group_query()
            .where(StationStationType.line_group_cd == line_group_id)
            .order_by(Line.e_sort.asc(), Line.line_cd.asc(), StationStationType.id.asc())
        )
        rows = await self._fetch_all("get_by_line_group_id", query, line_group_id=line_group_id)
        return [line_row_to_entity(row) for row in _unique(rows, lambda row: row["line_cd"])]

    async def get_by_line_group_id_batch(self, line_group_ids: Sequence[int]) -> list[LineEntity]:
        """Lines for many line groups; one row per (line_group_cd, line_cd)."""
        if not line_group_ids:
            return []
        ids = sorted(set(line_group_ids))
        query = (
            self._line_group_query()
            .where(StationStationType.line_group_cd.in_(ids))
            .order_by(Line.e_sort.asc(), Line.line_cd.asc(), StationStationType.id.asc())
        )
        rows = await self._fetch_all("get_by_line_group_id_batch", query, group_count=len(ids))
        unique_rows = _unique(rows, lambda row: (row["line_group_cd"], row["line_cd"]))
        return [line_row_to_entity(row) for row in unique_rows]

    async def get_by_name(self, query: str, limit: int | None = None) -> list[LineEntity]:
        """
        Case-insensitive substring search over every localized line name.

        Raises:
            InvalidInputError: If the text is unusable or limit is not positive
        """
        text = sanitize_search_query(query, self.max_query_length)
        pattern = build_contains_pattern(text)
        resolved_limit = resolve_limit(limit)

        name_columns = (
            Line.line_name,
            Line.line_name_k,
            Line.line_name_h,
            Line.line_name_r,
            Line.line_name_zh,
            Line.line_name_ko,
        )
        statement = (
            add_active_filter(select(*Line.__table__.c), Line)
            .where(or_(*(column.ilike(pattern, escape=LIKE_ESCAPE_CHAR) for column in name_columns)))
            .order_by(Line.e_sort.asc(), Line.line_cd.asc())
            .limit(resolved_limit)
        )
        rows = await self._fetch_all("get_by_name", statement, limit=resolved_limit)
        return [line_row_to_entity(row) for row in rows]
