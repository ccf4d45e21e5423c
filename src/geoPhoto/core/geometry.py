"""Great-circle distance and coordinate formatting helpers.

Every component that measures distances between photos goes through
:func:`distance_km` so the clustering engine and the location validator
agree on the same spherical model.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable, Tuple

from ..config import COORDINATE_LABEL_DIGITS, EARTH_RADIUS_KM
from ..models.types import Photo


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Return the Haversine distance between two coordinates in kilometres.

    NaN inputs yield NaN; the function never raises for numeric input.
    """

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) * math.sin(d_lat / 2)
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2)
        * math.sin(d_lon / 2)
    )
    # Rounding can push ``a`` a hair above 1 for antipodal points.
    if a > 1.0:
        a = 1.0
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def centroid(photos: Iterable[Photo]) -> Tuple[float, float]:
    """Return the mean latitude and longitude of *photos*."""

    members = list(photos)
    if not members:
        return math.nan, math.nan
    count = len(members)
    latitude = sum(photo.latitude for photo in members) / count
    longitude = sum(photo.longitude for photo in members) / count
    return latitude, longitude


def to_fixed(value: float, digits: int) -> str:
    """Render *value* with *digits* decimals.

    Rounding operates on the exact binary value with ties away from zero,
    so labels match the ones produced by the mobile client.  Negative zero
    loses its sign and non-finite values render as ``NaN``/``Infinity``.
    """

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        value = 0.0
    with localcontext() as ctx:
        ctx.prec = 400
        quantum = Decimal(1).scaleb(-digits)
        rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return format(rounded, "f")


def format_coordinate_label(latitude: float, longitude: float) -> str:
    """Return the ``"lat, lon"`` label used for photos without a place name."""

    return (
        f"{to_fixed(latitude, COORDINATE_LABEL_DIGITS)}, "
        f"{to_fixed(longitude, COORDINATE_LABEL_DIGITS)}"
    )


__all__ = ["centroid", "distance_km", "format_coordinate_label", "to_fixed"]
