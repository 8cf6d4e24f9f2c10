"""SQLAlchemy-backed company repository with a read-through TTL cache."""

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stationapi.core.cache import CacheProtocol, build_cache_key
from stationapi.core.config import settings
from stationapi.domain.entities import Company as CompanyEntity
from stationapi.helpers.status_filters import add_active_filter
from stationapi.models import Company
from stationapi.repositories.sqlalchemy_base import SqlAlchemyRepository

logger = structlog.get_logger(__name__)


def company_row_to_entity(row: Mapping[str, Any]) -> CompanyEntity:
    """Build a Company entity from a row keyed by companies column names."""
    return CompanyEntity(
        company_cd=row["company_cd"],
        rr_cd=row["rr_cd"],
        company_name=row["company_name"],
        company_name_k=row["company_name_k"],
        company_name_h=row["company_name_h"],
        company_name_r=row["company_name_r"],
        company_name_en=row["company_name_en"],
        company_name_full_en=row["company_name_full_en"],
        company_url=row["company_url"] or "",
        company_type=row["company_type"],
        e_status=row["e_status"],
        e_sort=row["e_sort"],
    )


class SqlCompanyRepository(SqlAlchemyRepository):
    """
    Company reads against the companies table.

    find_by_id is cached under "company_repository:find_by_id:<id>" until the
    TTL expires. Misses are not cached, so a company added later is found on
    the next lookup.
    """

    name = "company_repository"

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        cache: CacheProtocol,
        ttl: int | None = None,
    ) -> None:
        """
        Initialize the repository.

        Args:
            session_factory: Factory producing short-lived async sessions
            cache: Shared TTL cache
            ttl: Entry lifetime in seconds (defaults to COMPANY_CACHE_TTL)
        """
        super().__init__(session_factory)
        self.cache = cache
        self.ttl = ttl or settings.COMPANY_CACHE_TTL

    async def find_by_id(self, company_id: int) -> CompanyEntity | None:
        cache_key = build_cache_key(self.name, "find_by_id", company_id)

        cached_company: CompanyEntity | None = await self.cache.get(cache_key)
        if cached_company is not None:
            logger.debug("company_cache_hit", company_id=company_id)
            return cached_company

        query = add_active_filter(select(*Company.__table__.c), Company).where(Company.company_cd == company_id)
        row = await self._fetch_one("find_by_id", query, company_id=company_id)
        if row is None:
            return None

        company = company_row_to_entity(row)
        await self.cache.set(cache_key, company, ttl=self.ttl)
        logger.debug("company_cached", company_id=company_id, ttl=self.ttl)
        return company
