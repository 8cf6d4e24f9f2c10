"""SQLAlchemy-backed train type (service pattern) repository."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.sql import Select

from stationapi.domain.entities import StopCondition
from stationapi.domain.entities import TrainType as TrainTypeEntity
from stationapi.models import StationStationType, TrainType
from stationapi.repositories.sqlalchemy_base import SqlAlchemyRepository


def train_type_row_to_entity(row: Mapping[str, Any]) -> TrainTypeEntity:
    """Build a TrainType entity from a types row joined with its station link."""
    return TrainTypeEntity(
        type_cd=row["type_cd"],
        line_group_cd=row["line_group_cd"],
        type_name=row["type_name"],
        type_name_k=row["type_name_k"],
        type_name_r=row["type_name_r"],
        type_name_zh=row["type_name_zh"],
        type_name_ko=row["type_name_ko"],
        color=row["color"] or "",
        direction=row["direction"],
        kind=row["kind"],
        stop_condition=StopCondition(row["stop_condition"]),
    )


def _train_type_query() -> Select[Any]:
    return select(
        TrainType.type_cd,
        TrainType.type_name,
        TrainType.type_name_k,
        TrainType.type_name_r,
        TrainType.type_name_zh,
        TrainType.type_name_ko,
        TrainType.color,
        TrainType.direction,
        TrainType.kind,
        StationStationType.line_group_cd.label("line_group_cd"),
        StationStationType.pass_.label("stop_condition"),
    ).join(StationStationType, StationStationType.type_cd == TrainType.type_cd)


class SqlTrainTypeRepository(SqlAlchemyRepository):
    """Service pattern reads through station_station_types."""

    name = "train_type_repository"

    async def get_by_station_id(self, station_id: int) -> list[TrainTypeEntity]:
        """Service patterns that stop at the station, one per line group."""
        query = (
            _train_type_query()
            .where(
                StationStationType.station_cd == station_id,
                StationStationType.pass_ != StopCondition.NOT,
            )
            .order_by(TrainType.kind.asc(), StationStationType.line_group_cd.asc())
        )
        rows = await self._fetch_all("get_by_station_id", query, station_id=station_id)
        return [train_type_row_to_entity(row) for row in rows]

    async def find_by_line_group_id(self, line_group_id: int) -> TrainTypeEntity | None:
        query = (
            _train_type_query()
            .where(StationStationType.line_group_cd == line_group_id)
            .order_by(StationStationType.id.asc())
        )
        row = await self._fetch_one("find_by_line_group_id", query, line_group_id=line_group_id)
        return train_type_row_to_entity(row) if row else None
