"""
API endpoints for stations, lines and companies.

All endpoints are read-only. Station responses are fully enriched: home
line, sibling lines, line symbols and station numbers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from stationapi.core.cache import get_cache
from stationapi.core.database import get_session_factory
from stationapi.core.exceptions import InvalidInputError
from stationapi.repositories import (
    SqlCompanyRepository,
    SqlLineRepository,
    SqlStationRepository,
    SqlTrainTypeRepository,
)
from stationapi.schemas.railway import (
    CompanyResponse,
    LineResponse,
    StationResponse,
    TrainTypeResponse,
)
from stationapi.services.query_service import QueryService

router = APIRouter(tags=["railway"])

# Ids are unsigned 32-bit integers
MAX_ID = 2**32 - 1

StationId = Annotated[int, Path(ge=0, le=MAX_ID, description="Station code (station_cd)")]
LineId = Annotated[int, Path(ge=0, le=MAX_ID, description="Line code (line_cd)")]
CompanyId = Annotated[int, Path(ge=0, le=MAX_ID, description="Company code (company_cd)")]
LineGroupId = Annotated[int, Path(ge=0, le=MAX_ID, description="Line group code (line_group_cd)")]
Limit = Annotated[int | None, Query(description="Maximum results; defaults to 1")]


def get_query_service() -> QueryService:
    """
    Dependency building a QueryService over the shared session factory and cache.

    Tests override this dependency with a service backed by in-memory fakes.
    """
    session_factory = get_session_factory()
    return QueryService(
        station_repository=SqlStationRepository(session_factory),
        line_repository=SqlLineRepository(session_factory),
        company_repository=SqlCompanyRepository(session_factory, get_cache()),
        train_type_repository=SqlTrainTypeRepository(session_factory),
    )


# ==================== Stations ====================


@router.get("/stations/search", response_model=list[StationResponse])
async def search_stations(
    name: Annotated[str, Query(description="Substring of any localized station name")],
    limit: Limit = None,
    service: QueryService = Depends(get_query_service),
) -> list[StationResponse]:
    """
    Search stations by name.

    Matching is case-insensitive and covers the Japanese, kana, romanized,
    Chinese and Korean names.

    Raises:
        InvalidInputError: 422 if the text is empty, too long or limit is not positive
    """
    stations = await service.get_stations_by_name(name, limit)
    return [StationResponse.model_validate(station) for station in stations]


@router.get("/stations/nearby", response_model=list[StationResponse])
async def get_nearby_stations(
    lat: Annotated[float, Query(ge=-90, le=90)],
    lon: Annotated[float, Query(ge=-180, le=180)],
    limit: Limit = None,
    service: QueryService = Depends(get_query_service),
) -> list[StationResponse]:
    """
    Get the stations nearest a point, one per station group, nearest first.

    Each station carries its distance in kilometres.
    """
    stations = await service.get_stations_by_coordinates(lat, lon, limit)
    return [StationResponse.model_validate(station) for station in stations]


@router.get("/stations", response_model=list[StationResponse])
async def get_stations(
    group_id: Annotated[int | None, Query(ge=0, le=MAX_ID)] = None,
    line_id: Annotated[int | None, Query(ge=0, le=MAX_ID)] = None,
    line_group_id: Annotated[int | None, Query(ge=0, le=MAX_ID)] = None,
    service: QueryService = Depends(get_query_service),
) -> list[StationResponse]:
    """
    List stations by station group, line or line group.

    Exactly one filter must be given. An unknown id yields an empty list.

    Raises:
        InvalidInputError: 422 unless exactly one filter is given
    """
    filters = {"group_id": group_id, "line_id": line_id, "line_group_id": line_group_id}
    given = [key for key, value in filters.items() if value is not None]
    if len(given) != 1:
        msg = "Exactly one of group_id, line_id or line_group_id is required."
        raise InvalidInputError(msg)

    if group_id is not None:
        stations = await service.get_stations_by_group_id(group_id)
    elif line_id is not None:
        stations = await service.get_stations_by_line_id(line_id)
    else:
        stations = await service.get_stations_by_line_group_id(line_group_id)  # type: ignore[arg-type]
    return [StationResponse.model_validate(station) for station in stations]


@router.get("/stations/{station_id}", response_model=StationResponse)
async def get_station(
    station_id: StationId,
    service: QueryService = Depends(get_query_service),
) -> StationResponse:
    """
    Get one station with its home line's company.

    Raises:
        NotFoundError: 404 if the station does not exist
        InconsistentDataError: 500 if the station's line is missing
    """
    station = await service.find_station_by_id(station_id)
    return StationResponse.model_validate(station)


@router.get("/stations/{station_id}/train-types", response_model=list[TrainTypeResponse])
async def get_station_train_types(
    station_id: StationId,
    service: QueryService = Depends(get_query_service),
) -> list[TrainTypeResponse]:
    """Get the service patterns that stop at a station."""
    train_types = await service.get_train_types_by_station_id(station_id)
    return [TrainTypeResponse.model_validate(train_type) for train_type in train_types]


# ==================== Lines ====================


@router.get("/lines/search", response_model=list[LineResponse])
async def search_lines(
    name: Annotated[str, Query(description="Substring of any localized line name")],
    limit: Limit = None,
    service: QueryService = Depends(get_query_service),
) -> list[LineResponse]:
    """Search lines by name (case-insensitive substring)."""
    lines = await service.get_lines_by_name(name, limit)
    return [LineResponse.model_validate(line) for line in lines]


@router.get("/lines", response_model=list[LineResponse])
async def get_lines_by_line_group(
    line_group_id: Annotated[int, Query(ge=0, le=MAX_ID)],
    service: QueryService = Depends(get_query_service),
) -> list[LineResponse]:
    """List the lines a service pattern runs on."""
    lines = await service.get_lines_by_line_group_id(line_group_id)
    return [LineResponse.model_validate(line) for line in lines]


@router.get("/lines/{line_id}", response_model=LineResponse)
async def get_line(
    line_id: LineId,
    service: QueryService = Depends(get_query_service),
) -> LineResponse:
    """Get one line with its company."""
    line = await service.find_line_by_id(line_id)
    return LineResponse.model_validate(line)


# ==================== Train types ====================


@router.get("/train-types/{line_group_id}", response_model=TrainTypeResponse)
async def get_train_type(
    line_group_id: LineGroupId,
    service: QueryService = Depends(get_query_service),
) -> TrainTypeResponse:
    """
    Get the service pattern that runs a line group.

    Raises:
        NotFoundError: 404 if no service pattern is linked to the line group
    """
    train_type = await service.find_train_type_by_line_group_id(line_group_id)
    return TrainTypeResponse.model_validate(train_type)


# ==================== Companies ====================


@router.get("/companies/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: CompanyId,
    service: QueryService = Depends(get_query_service),
) -> CompanyResponse:
    """Get one railway operator."""
    company = await service.find_company_by_id(company_id)
    return CompanyResponse.model_validate(company)
