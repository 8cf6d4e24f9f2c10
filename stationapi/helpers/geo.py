"""Great-circle distance helpers (kilometres)."""

from __future__ import annotations

import math

from sqlalchemy import ColumnElement, func, literal

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates using the haversine formula."""
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def spherical_distance_km(
    lat_column: ColumnElement[float],
    lon_column: ColumnElement[float],
    latitude: float,
    longitude: float,
) -> ColumnElement[float]:
    """
    SQL expression for the spherical law of cosines distance to a point.

    The cosine term is clamped to 1.0 so rounding on identical coordinates
    cannot push acos out of its domain. Coordinates are bound parameters.
    """
    lat_param = literal(latitude)
    lon_param = literal(longitude)
    cosine = func.cos(func.radians(lat_param)) * func.cos(func.radians(lat_column)) * func.cos(
        func.radians(lon_column) - func.radians(lon_param)
    ) + func.sin(func.radians(lat_param)) * func.sin(func.radians(lat_column))
    return EARTH_RADIUS_KM * func.acos(func.least(literal(1.0), cosine))
