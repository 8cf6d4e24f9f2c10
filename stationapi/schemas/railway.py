"""Pydantic response schemas for stations, lines and companies."""

from pydantic import BaseModel, ConfigDict, field_serializer

from stationapi.domain.entities import StopCondition

# ==================== Response Schemas ====================


class CompanyResponse(BaseModel):
    """Response schema for a railway operator."""

    model_config = ConfigDict(from_attributes=True)

    company_cd: int
    rr_cd: int
    company_name: str
    company_name_k: str
    company_name_h: str
    company_name_r: str
    company_name_en: str
    company_name_full_en: str
    company_url: str
    company_type: int


class LineSymbolResponse(BaseModel):
    """Response schema for one derived line symbol."""

    model_config = ConfigDict(from_attributes=True)

    symbol: str
    color: str
    shape: str  # e.g. "ROUND", "SQUARE"


class StationNumberResponse(BaseModel):
    """Response schema for one derived station number."""

    model_config = ConfigDict(from_attributes=True)

    line_symbol: str
    line_symbol_color: str
    line_symbol_shape: str
    station_number: str  # Display string, e.g. "M-12" or "5"


class LineResponse(BaseModel):
    """Response schema for a line, names and color possibly alias-overridden."""

    model_config = ConfigDict(from_attributes=True)

    line_cd: int
    company_cd: int
    line_name: str
    line_name_k: str
    line_name_h: str
    line_name_r: str | None = None
    line_name_zh: str | None = None
    line_name_ko: str | None = None
    line_color_c: str | None = None
    line_type: int | None = None
    line_symbols: list[LineSymbolResponse] = []
    average_distance: float
    # Only set when the line was read through a station
    line_group_cd: int | None = None
    station_cd: int | None = None
    station_g_cd: int | None = None
    company: CompanyResponse | None = None


class StationResponse(BaseModel):
    """Response schema for an enriched station."""

    model_config = ConfigDict(from_attributes=True)

    station_cd: int
    station_g_cd: int
    station_name: str
    station_name_k: str
    station_name_r: str | None = None
    station_name_zh: str | None = None
    station_name_ko: str | None = None
    station_numbers: list[StationNumberResponse] = []
    three_letter_code: str | None = None
    line_cd: int
    pref_cd: int
    post: str
    address: str
    lon: float
    lat: float
    open_ymd: str
    close_ymd: str
    stop_condition: StopCondition
    distance: float | None = None  # Kilometres; only set by nearby search
    has_train_types: bool
    line: LineResponse | None = None  # Home line
    lines: list[LineResponse] = []  # Every line serving the station group

    @field_serializer("stop_condition")
    def serialize_stop_condition(self, stop_condition: StopCondition) -> str:
        """Serialize the stop condition by name (e.g. "ALL", "WEEKDAY")."""
        return stop_condition.name


class TrainTypeResponse(BaseModel):
    """Response schema for a service pattern stopping at a station."""

    model_config = ConfigDict(from_attributes=True)

    type_cd: int
    line_group_cd: int
    type_name: str
    type_name_k: str
    type_name_r: str | None = None
    type_name_zh: str | None = None
    type_name_ko: str | None = None
    color: str
    direction: int
    kind: int
    stop_condition: StopCondition

    @field_serializer("stop_condition")
    def serialize_stop_condition(self, stop_condition: StopCondition) -> str:
        """Serialize the stop condition by name."""
        return stop_condition.name


class HealthResponse(BaseModel):
    """Response schema for the health endpoint."""

    status: str
    version: str
