"""
Line symbol and station number derivation.

Pure functions used by QueryService to turn a line's positional symbol slots
and a station's number slots into ordered display collections. Every list is
recomputed from the raw slots, so deriving twice gives the same result.

Slot compaction stops at the first empty slot: a line with primary="M",
secondary=None, extra="X" yields a single symbol, and "X" is never read.
Station numbers read symbol slots up to the first absent one instead, so a
blank symbol yields the bare number.
"""

from __future__ import annotations

from stationapi.domain.entities import Line, LineSymbol, Station, StationNumber


def format_station_number(symbol: str, number: str) -> str:
    """
    Compose the display string for a station number.

    Examples:
        >>> format_station_number("M", "12")
        'M-12'
        >>> format_station_number("", "5")
        '5'
    """
    return number if not symbol else f"{symbol}-{number}"


def get_line_symbols(line: Line) -> list[LineSymbol]:
    """
    Build the ordered symbol list of a line.

    Colors fall back to the line color when a slot color is absent. A symbol
    without a shape at the same position ends the list.

    Args:
        line: Line with raw symbol slots

    Returns:
        Up to three LineSymbol values
    """
    symbols = line.symbols.compact()
    colors = line.symbol_colors.with_fallback(line.line_color_c or "")
    shapes = line.symbol_shapes.compact()

    line_symbols: list[LineSymbol] = []
    for index, symbol in enumerate(symbols):
        if index >= len(shapes):
            break
        line_symbols.append(
            LineSymbol(
                symbol=symbol,
                color=colors[index] or "",
                shape=shapes[index],
            )
        )
    return line_symbols


def get_station_numbers(station: Station, line: Line) -> list[StationNumber]:
    """
    Build the ordered station number list for a station on its home line.

    Number slots are compacted like symbol slots and drive the list. Symbol
    slots end only at an absent slot, so a blank symbol gives a bare number.
    Absent shapes are dropped rather than ending the shape list.

    Args:
        station: Station with raw number slots
        line: The station's home line

    Returns:
        Up to three StationNumber values
    """
    numbers = station.numbers.compact()
    symbols = line.symbols.until_absent()
    colors = line.symbol_colors.with_fallback(line.line_color_c or "")
    shapes = line.symbol_shapes.present()

    station_numbers: list[StationNumber] = []
    for index, number in enumerate(numbers):
        if index >= len(symbols) or index >= len(shapes):
            break
        symbol = symbols[index]
        station_numbers.append(
            StationNumber(
                line_symbol=symbol,
                line_symbol_color=colors[index] or "",
                line_symbol_shape=shapes[index],
                station_number=format_station_number(symbol, number),
            )
        )
    return station_numbers
