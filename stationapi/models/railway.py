"""Railway master data tables (companies, lines, stations and service patterns)."""

from sqlalchemy import Float, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from stationapi.models.base import Base, StatusMixin


class Company(Base, StatusMixin):
    """Railway operator."""

    __tablename__ = "companies"

    company_cd: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    rr_cd: Mapped[int] = mapped_column(Integer, nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name_k: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name_h: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name_r: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name_full_en: Mapped[str] = mapped_column(String(255), nullable=False)
    company_url: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    company_type: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        """String representation of the company."""
        return f"<Company(company_cd={self.company_cd}, name={self.company_name})>"


class Line(Base, StatusMixin):
    """Railway line with up to three positional symbol slots."""

    __tablename__ = "lines"

    line_cd: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    company_cd: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("companies.company_cd"),
        nullable=False,
        index=True,
    )
    line_type: Mapped[int | None] = mapped_column(Integer, nullable=True)
    line_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_k: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_h: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_r: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_zh: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_ko: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_color_c: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_primary: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_secondary: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_extra: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_primary_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_secondary_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_extra_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    line_symbol_primary_shape: Mapped[str | None] = mapped_column(String(32), nullable=True)
    line_symbol_secondary_shape: Mapped[str | None] = mapped_column(String(32), nullable=True)
    line_symbol_extra_shape: Mapped[str | None] = mapped_column(String(32), nullable=True)
    average_distance: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        """String representation of the line."""
        return f"<Line(line_cd={self.line_cd}, name={self.line_name})>"


class Station(Base, StatusMixin):
    """Per-line station record; records sharing station_g_cd are one physical station."""

    __tablename__ = "stations"

    station_cd: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    station_g_cd: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    station_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    station_name_k: Mapped[str] = mapped_column(String(255), nullable=False)
    station_name_r: Mapped[str | None] = mapped_column(String(255), nullable=True)
    station_name_zh: Mapped[str | None] = mapped_column(String(255), nullable=True)
    station_name_ko: Mapped[str | None] = mapped_column(String(255), nullable=True)
    primary_station_number: Mapped[str | None] = mapped_column(String(16), nullable=True)
    secondary_station_number: Mapped[str | None] = mapped_column(String(16), nullable=True)
    extra_station_number: Mapped[str | None] = mapped_column(String(16), nullable=True)
    three_letter_code: Mapped[str | None] = mapped_column(String(8), nullable=True)
    line_cd: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lines.line_cd"),
        nullable=False,
        index=True,
    )
    pref_cd: Mapped[int] = mapped_column(Integer, nullable=False)
    post: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    lon: Mapped[float] = mapped_column(Numeric(12, 9, asdecimal=False), nullable=False)
    lat: Mapped[float] = mapped_column(Numeric(12, 9, asdecimal=False), nullable=False)
    open_ymd: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    close_ymd: Mapped[str] = mapped_column(String(16), nullable=False, default="")

    def __repr__(self) -> str:
        """String representation of the station."""
        return f"<Station(station_cd={self.station_cd}, name={self.station_name})>"


class TrainType(Base):
    """Service pattern type (e.g. local, rapid, limited express)."""

    __tablename__ = "types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type_cd: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    type_name: Mapped[str] = mapped_column(String(255), nullable=False)
    type_name_k: Mapped[str] = mapped_column(String(255), nullable=False)
    type_name_r: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type_name_zh: Mapped[str | None] = mapped_column(String(255), nullable=True)
    type_name_ko: Mapped[str | None] = mapped_column(String(255), nullable=True)
    color: Mapped[str] = mapped_column(String(16), nullable=False, default="")
    direction: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    kind: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class StationStationType(Base):
    """Link between a station and a service pattern within a line group."""

    __tablename__ = "station_station_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    station_cd: Mapped[int] = mapped_column(Integer, ForeignKey("stations.station_cd"), nullable=False)
    type_cd: Mapped[int] = mapped_column(Integer, ForeignKey("types.type_cd"), nullable=False)
    line_group_cd: Mapped[int] = mapped_column(Integer, nullable=False)
    # StopCondition value; 1 (Not) means the pattern passes through without stopping
    pass_: Mapped[int] = mapped_column("pass", Integer, nullable=False, default=0)

    __table_args__ = (
        Index("ix_station_station_types_station", "station_cd"),
        Index("ix_station_station_types_line_group", "line_group_cd"),
    )


class Alias(Base):
    """Per-station override of a line's display names and color."""

    __tablename__ = "aliases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    line_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_k: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_h: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_r: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_zh: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_name_ko: Mapped[str | None] = mapped_column(String(255), nullable=True)
    line_color_c: Mapped[str | None] = mapped_column(String(16), nullable=True)


class LineAlias(Base):
    """Assigns an alias to a station."""

    __tablename__ = "line_aliases"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    station_cd: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("stations.station_cd"),
        nullable=False,
        index=True,
    )
    alias_cd: Mapped[int] = mapped_column(Integer, ForeignKey("aliases.id"), nullable=False)
