"""Tests for SqlTrainTypeRepository."""

from typing import Any

from stationapi.domain.entities import StopCondition
from stationapi.repositories.train_type_repository import SqlTrainTypeRepository

from tests.helpers.sql_session import MockSessionFactory, compile_sql


def train_type_row(**overrides: Any) -> dict[str, Any]:  # noqa: ANN401
    row: dict[str, Any] = {
        "type_cd": 1,
        "line_group_cd": 500,
        "type_name": "各駅停車",
        "type_name_k": "カクエキテイシャ",
        "type_name_r": "Local",
        "type_name_zh": None,
        "type_name_ko": None,
        "color": None,
        "direction": 0,
        "kind": 0,
        "stop_condition": 0,
    }
    row.update(overrides)
    return row


class TestGetByStationId:
    """Tests for get_by_station_id."""

    async def test_maps_rows_with_link_stop_condition(self) -> None:
        """Test each row carries its line group and stop condition."""
        factory = MockSessionFactory(results=[[train_type_row(), train_type_row(type_cd=2, line_group_cd=501, kind=1, stop_condition=3)]])
        repository = SqlTrainTypeRepository(factory)  # type: ignore[arg-type]

        train_types = await repository.get_by_station_id(100101)

        assert [(t.type_cd, t.line_group_cd) for t in train_types] == [(1, 500), (2, 501)]
        assert train_types[0].stop_condition == StopCondition.ALL
        assert train_types[1].stop_condition == StopCondition(3)
        assert train_types[0].color == ""

    async def test_excludes_passed_links(self) -> None:
        """Test patterns that pass through the station are filtered out in SQL."""
        factory = MockSessionFactory()
        repository = SqlTrainTypeRepository(factory)  # type: ignore[arg-type]

        await repository.get_by_station_id(100201)

        sql, params = compile_sql(factory.statements[0])
        assert "station_station_types.pass != " in sql
        assert "ORDER BY types.kind ASC, station_station_types.line_group_cd ASC" in sql
        assert 100201 in params.values()


class TestFindByLineGroupId:
    """Tests for find_by_line_group_id."""

    async def test_returns_first_link(self) -> None:
        """Test the pattern is read from the first link of the line group."""
        factory = MockSessionFactory(results=[[train_type_row(type_cd=2, line_group_cd=501, kind=1)]])
        repository = SqlTrainTypeRepository(factory)  # type: ignore[arg-type]

        train_type = await repository.find_by_line_group_id(501)

        assert train_type is not None
        assert train_type.type_cd == 2
        sql, _ = compile_sql(factory.statements[0])
        assert "ORDER BY station_station_types.id ASC" in sql
        assert "LIMIT" in sql

    async def test_unknown_line_group(self) -> None:
        """Test an unknown line group maps to None."""
        repository = SqlTrainTypeRepository(MockSessionFactory())  # type: ignore[arg-type]

        assert await repository.find_by_line_group_id(999) is None
