"""
Domain entities returned by repositories and enriched by the query service.

Station and Line are built fresh per request from table rows, filled in by
the query service, and then treated as read-only. StationNumber, LineSymbol,
Company and TrainType are immutable value objects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from stationapi.domain.slots import SlotTriple


class StopCondition(IntEnum):
    """How a service pattern stops at a station."""

    ALL = 0
    NOT = 1
    PARTIAL = 2
    WEEKDAY = 3
    HOLIDAY = 4
    PARTIAL_STOP = 5


@dataclass(frozen=True, slots=True)
class LineSymbol:
    """Display symbol of a line (e.g. "G" on an orange circle)."""

    symbol: str
    color: str
    shape: str


@dataclass(frozen=True, slots=True)
class StationNumber:
    """Station number as shown on signage, composed from a line symbol and a number slot."""

    line_symbol: str
    line_symbol_color: str
    line_symbol_shape: str
    station_number: str


@dataclass(frozen=True, slots=True)
class Company:
    """Railway operator."""

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
    e_status: int
    e_sort: int


@dataclass(frozen=True, slots=True)
class TrainType:
    """Service pattern available within a line group."""

    type_cd: int
    line_group_cd: int
    type_name: str
    type_name_k: str
    type_name_r: str | None
    type_name_zh: str | None
    type_name_ko: str | None
    color: str
    direction: int
    kind: int
    stop_condition: StopCondition = StopCondition.ALL


@dataclass(slots=True)
class Line:
    """
    Railway line.

    line_group_cd, station_cd and station_g_cd are only set when the line was
    read through a station join; they identify the row the line came from.
    line_symbols is filled in by the query service, never by a repository.
    """

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
    symbols: SlotTriple = field(default_factory=SlotTriple)
    symbol_colors: SlotTriple = field(default_factory=SlotTriple)
    symbol_shapes: SlotTriple = field(default_factory=SlotTriple)
    e_status: int = 0
    e_sort: int = 0
    average_distance: float = 0.0
    line_group_cd: int | None = None
    station_cd: int | None = None
    station_g_cd: int | None = None
    line_symbols: list[LineSymbol] = field(default_factory=list)
    company: Company | None = None


@dataclass(slots=True)
class Station:
    """
    Per-line station record.

    ``line`` is the home line (the one station.line_cd references) and is
    kept apart from ``lines``, which lists every line serving the station group.
    """

    station_cd: int
    station_g_cd: int
    station_name: str
    station_name_k: str
    line_cd: int
    pref_cd: int
    lon: float
    lat: float
    station_name_r: str | None = None
    station_name_zh: str | None = None
    station_name_ko: str | None = None
    numbers: SlotTriple = field(default_factory=SlotTriple)
    three_letter_code: str | None = None
    post: str = ""
    address: str = ""
    open_ymd: str = ""
    close_ymd: str = ""
    e_status: int = 0
    e_sort: int = 0
    stop_condition: StopCondition = StopCondition.ALL
    distance: float | None = None
    station_types_count: int = 0
    station_numbers: list[StationNumber] = field(default_factory=list)
    line: Line | None = None
    lines: list[Line] = field(default_factory=list)

    @property
    def has_train_types(self) -> bool:
        """Whether any service pattern stops here."""
        return self.station_types_count > 0
