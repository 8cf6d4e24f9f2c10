"""Pytest configuration and fixtures."""

import os

# Set DEBUG=true for all tests BEFORE any stationapi imports
# This must be done before stationapi.core.config loads settings
os.environ["DEBUG"] = "true"
os.environ["CACHE_BACKEND"] = "memory"

import uuid
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from urllib.parse import quote_plus, urlunparse

import psycopg
import pytest
from httpx import ASGITransport, AsyncClient
from pytest_postgresql.janitor import DatabaseJanitor
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import NullPool
from stationapi.api.railway import get_query_service
from stationapi.main import app
from stationapi.models import Base
from stationapi.services.query_service import QueryService

from tests.fixtures.otel import (  # noqa: F401
    in_memory_span_exporter,
    otel_enabled_provider,
    reset_tracer_provider,
)
from tests.helpers.fake_repositories import (
    FakeCompanyRepository,
    FakeLineRepository,
    FakeStationRepository,
    FakeTrainTypeRepository,
)
from tests.helpers.railway_network import TestRailwayNetwork
from tests.helpers.railway_rows import seed_railway_network


@dataclass
class FakeRepositories:
    """The in-memory repositories behind a QueryService under test."""

    stations: FakeStationRepository
    lines: FakeLineRepository
    companies: FakeCompanyRepository
    train_types: FakeTrainTypeRepository


@pytest.fixture
def fake_repositories() -> FakeRepositories:
    """
    In-memory repositories loaded with the test railway network.

    Each test gets fresh repositories with empty call logs.
    """
    stations = TestRailwayNetwork.create_stations()
    links = TestRailwayNetwork.create_station_links()
    return FakeRepositories(
        stations=FakeStationRepository(stations, links),
        lines=FakeLineRepository(TestRailwayNetwork.create_lines(), stations, links),
        companies=FakeCompanyRepository(TestRailwayNetwork.create_companies()),
        train_types=FakeTrainTypeRepository(TestRailwayNetwork.create_train_types(), links),
    )


@pytest.fixture
def query_service(fake_repositories: FakeRepositories) -> QueryService:
    """QueryService over the in-memory test network."""
    return QueryService(
        station_repository=fake_repositories.stations,
        line_repository=fake_repositories.lines,
        company_repository=fake_repositories.companies,
        train_type_repository=fake_repositories.train_types,
    )


@pytest.fixture
async def async_client(query_service: QueryService) -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app with the query service backed by the test network."""
    app.dependency_overrides[get_query_service] = lambda: query_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# Database connection configuration for tests
DB_HOST = os.environ.get("TEST_DB_HOST", "localhost")
DB_PORT = int(os.environ.get("TEST_DB_PORT", "5432"))
DB_USER = os.environ.get("TEST_DB_USER", "postgres")
DB_PASSWORD = os.environ.get("TEST_DB_PASSWORD", "postgres")
DB_VERSION = os.environ.get("TEST_DB_VERSION", "16")


@dataclass
class TestDatabaseContext:
    """
    Structured container for test database resources.

    Holds the async engine, session factory, and database name for the
    seeded railway network.
    """

    __test__ = False

    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    db_name: str


def database_url(driver: str, db_name: str) -> str:
    user_part = f"{quote_plus(DB_USER)}:{quote_plus(DB_PASSWORD)}"
    host_part = f"{quote_plus(DB_HOST)}:{DB_PORT}"
    return urlunparse((driver, f"{user_part}@{host_part}", f"/{quote_plus(db_name)}", "", "", ""))


@pytest.fixture(scope="session")
def db_engine() -> Generator[TestDatabaseContext]:
    """
    Create a PostgreSQL database holding the test railway network.

    DatabaseJanitor creates the database and drops it at the end of the
    session. Tables are created and seeded once over a sync psycopg engine;
    tests read through an asyncpg engine, as the application does. Every
    repository read is committed-data only, so tests share the database
    without per-test isolation.

    Skips when no PostgreSQL server is reachable.

    Yields:
        TestDatabaseContext: Engine, session factory and database name
    """
    try:
        with psycopg.connect(
            host=DB_HOST,
            port=DB_PORT,
            user=DB_USER,
            password=DB_PASSWORD,
            dbname="postgres",
            connect_timeout=3,
        ):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not reachable at {DB_HOST}:{DB_PORT}: {e}")

    # Generate unique database name to avoid conflicts
    test_db_name = f"test_{uuid.uuid4().hex[:8]}"

    with DatabaseJanitor(
        user=DB_USER,
        host=DB_HOST,
        port=DB_PORT,
        dbname=test_db_name,
        version=DB_VERSION,
        password=DB_PASSWORD,
    ):
        sync_engine = create_engine(database_url("postgresql+psycopg", test_db_name), poolclass=NullPool)
        try:
            Base.metadata.create_all(sync_engine)
            with Session(sync_engine) as session:
                seed_railway_network(session)
                session.commit()
        finally:
            sync_engine.dispose()

        # NullPool: no connection outlives the event loop of the test that opened it
        engine = create_async_engine(database_url("postgresql+asyncpg", test_db_name), echo=False, poolclass=NullPool)
        session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        yield TestDatabaseContext(engine=engine, session_factory=session_factory, db_name=test_db_name)

        # Cleanup handled by DatabaseJanitor context manager
