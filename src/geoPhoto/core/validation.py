"""Coordinate validation applied to photos before they reach the grouping core."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from ..config import COORDINATE_DISPLAY_DIGITS
from ..errors import LocationValidationError
from ..models.types import Photo
from ..utils.logging import get_logger
from .geometry import distance_km, to_fixed

LOGGER = get_logger(__name__)

LOCATION_REQUIRED = "Location data is required"
LATITUDE_RANGE = "Latitude must be between -90 and 90 degrees"
LONGITUDE_RANGE = "Longitude must be between -180 and 180 degrees"
ALTITUDE_INVALID = "Altitude must be a valid number"


@dataclass(slots=True, frozen=True)
class LocationData:
    latitude: float
    longitude: float
    altitude: Optional[float] = None


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


LocationLike = Union[Photo, LocationData, Mapping[str, Any]]


def _is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and not math.isnan(value)


def is_valid_latitude(latitude: object) -> bool:
    """Return ``True`` when *latitude* is a number within [-90, 90]."""

    return _is_number(latitude) and -90 <= latitude <= 90  # type: ignore[operator]


def is_valid_longitude(longitude: object) -> bool:
    """Return ``True`` when *longitude* is a number within [-180, 180]."""

    return _is_number(longitude) and -180 <= longitude <= 180  # type: ignore[operator]


def is_valid_altitude(altitude: object) -> bool:
    """Altitude is optional; when present it must be a real number."""

    if altitude is None:
        return True
    return _is_number(altitude)


def _field(location: LocationLike, name: str) -> Any:
    if isinstance(location, Mapping):
        return location.get(name)
    return getattr(location, name, None)


def validate_location(location: Optional[LocationLike]) -> ValidationResult:
    """Check *location* and collect every problem found."""

    if location is None:
        return ValidationResult(valid=False, errors=[LOCATION_REQUIRED])

    errors: List[str] = []
    if not is_valid_latitude(_field(location, "latitude")):
        errors.append(LATITUDE_RANGE)
    if not is_valid_longitude(_field(location, "longitude")):
        errors.append(LONGITUDE_RANGE)
    if not is_valid_altitude(_field(location, "altitude")):
        errors.append(ALTITUDE_INVALID)
    return ValidationResult(valid=not errors, errors=errors)


def require_valid_location(location: Optional[LocationLike]) -> None:
    """Raise :class:`LocationValidationError` unless *location* is valid."""

    result = validate_location(location)
    if not result.valid:
        raise LocationValidationError(result.errors)


def filter_valid_photos(photos: Optional[Iterable[Photo]]) -> List[Photo]:
    """Return the photos whose coordinates pass validation, in input order."""

    accepted: List[Photo] = []
    for photo in photos or ():
        result = validate_location(photo)
        if result.valid:
            accepted.append(photo)
            continue
        LOGGER.warning("Dropping photo %s: %s", photo.id, "; ".join(result.errors))
    return accepted


def calculate_distance(point1: LocationLike, point2: LocationLike) -> float:
    """Return the distance between two points in kilometres."""

    return distance_km(
        _field(point1, "latitude"),
        _field(point1, "longitude"),
        _field(point2, "latitude"),
        _field(point2, "longitude"),
    )


def _trim_decimal(value: float) -> str:
    text = to_fixed(abs(value), COORDINATE_DISPLAY_DIGITS)
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_coordinates(location: LocationLike) -> str:
    """Return a display string such as ``48.8566° N, 2.3522° E``."""

    latitude = _field(location, "latitude")
    longitude = _field(location, "longitude")
    lat_dir = "N" if latitude >= 0 else "S"
    lon_dir = "E" if longitude >= 0 else "W"
    return f"{_trim_decimal(latitude)}° {lat_dir}, {_trim_decimal(longitude)}° {lon_dir}"


def to_dms(value: float, is_latitude: bool) -> str:
    """Return *value* in degrees, minutes and seconds notation."""

    absolute = abs(value)
    degrees = math.floor(absolute)
    minutes_float = (absolute - degrees) * 60
    minutes = math.floor(minutes_float)
    seconds = to_fixed((minutes_float - minutes) * 60, 2)
    if is_latitude:
        direction = "N" if value >= 0 else "S"
    else:
        direction = "E" if value >= 0 else "W"
    return f"{degrees}° {minutes}' {seconds}\" {direction}"


__all__ = [
    "ALTITUDE_INVALID",
    "LATITUDE_RANGE",
    "LOCATION_REQUIRED",
    "LONGITUDE_RANGE",
    "LocationData",
    "ValidationResult",
    "calculate_distance",
    "filter_valid_photos",
    "format_coordinates",
    "is_valid_altitude",
    "is_valid_latitude",
    "is_valid_longitude",
    "require_valid_location",
    "to_dms",
    "validate_location",
]
