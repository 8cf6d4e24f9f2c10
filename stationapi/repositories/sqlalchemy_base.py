"""Shared query execution for the SQLAlchemy-backed repositories."""

from collections.abc import Sequence
from typing import Any, ClassVar

import structlog
from opentelemetry.trace import SpanKind
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Select

from stationapi.core.exceptions import ProviderError
from stationapi.core.telemetry import AttributeValue, service_span

logger = structlog.get_logger(__name__)


class SqlAlchemyRepository:
    """
    Base class that runs one read query per session.

    A session (and its pooled connection) is opened right before the query
    and closed right after it, including when the query fails. Driver and
    SQLAlchemy errors are re-raised as ProviderError with the cause chained.
    """

    name: ClassVar[str] = "repository"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the repository.

        Args:
            session_factory: Factory producing short-lived async sessions
        """
        self._session_factory = session_factory

    async def _fetch_all(
        self,
        operation: str,
        query: Select[Any],
        **attributes: AttributeValue,
    ) -> Sequence[RowMapping]:
        """Execute query and return every row as a mapping keyed by column label."""
        with service_span(f"{self.name}.{operation}", "postgres", kind=SpanKind.CLIENT, **attributes) as span:
            try:
                async with self._session_factory() as session:
                    result = await session.execute(query)
                    rows = result.mappings().all()
            except SQLAlchemyError as e:
                logger.error("repository_query_failed", repository=self.name, operation=operation, error=str(e))
                raise ProviderError(f"{self.name}.{operation}") from e
            span.set_attribute("db.row_count", len(rows))

        logger.debug("repository_query", repository=self.name, operation=operation, rows=len(rows), **attributes)
        return rows

    async def _fetch_one(
        self,
        operation: str,
        query: Select[Any],
        **attributes: AttributeValue,
    ) -> RowMapping | None:
        """Execute query and return the first row, or None when nothing matched."""
        rows = await self._fetch_all(operation, query.limit(1), **attributes)
        return rows[0] if rows else None
