"""
Status filter and ordering helpers for consistent read queries.

Every railway table soft-deletes through e_status: a row is visible only
while e_status = 0. These helpers keep that filter, and the standard
"e_sort then id" ordering, in one place.

Usage examples:
    query = select(Station).where(Station.line_cd == line_id)
    query = add_active_filter(query, Station)
    query = add_standard_order(query, Station, Station.station_cd)

    # Multiple models in a join
    query = select(Line).join(Station, Station.line_cd == Line.line_cd)
    query = add_active_filters(query, Line, Station)
"""

from typing import Any, TypeVar

from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import Select

from stationapi.models.base import ACTIVE_STATUS, StatusMixin

T = TypeVar("T", bound=tuple[Any, ...])


def add_active_filter(
    query: Select[T],
    model: type[StatusMixin],
) -> Select[T]:
    """
    Add e_status = 0 filter to a query for a single model.

    Args:
        query: SQLAlchemy select query
        model: Model class that carries StatusMixin columns

    Returns:
        Query with the status filter added
    """
    return query.where(model.e_status == ACTIVE_STATUS)


def add_active_filters(
    query: Select[T],
    *models: type[StatusMixin],
) -> Select[T]:
    """
    Add e_status = 0 filters to a query for multiple models.

    Useful when joining multiple tables that all use the status column.
    """
    for model in models:
        query = add_active_filter(query, model)
    return query


def add_standard_order(
    query: Select[T],
    model: type[StatusMixin],
    id_column: InstrumentedAttribute[int],
) -> Select[T]:
    """
    Order by e_sort, then primary id, both ascending.

    Args:
        query: SQLAlchemy select query
        model: Model providing the e_sort column
        id_column: Primary identifier column used as tie-breaker

    Returns:
        Ordered query
    """
    return query.order_by(model.e_sort.asc(), id_column.asc())
