"""Helpers for reverse geocoding GPS coordinates."""

from __future__ import annotations

import math
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

import reverse_geocoder  # type: ignore[import]

from ..config import COORDINATE_LABEL_DIGITS
from ..models.types import Photo
from .logging import get_logger

LOGGER = get_logger(__name__)


@lru_cache(maxsize=1)
def _geocoder() -> "reverse_geocoder.RGeocoder":
    """Return a cached reverse geocoder instance."""

    return reverse_geocoder.RGeocoder(mode=1, verbose=False)


def _to_text(value: object) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="ignore")
    return str(value)


def resolve_location_name(latitude: float, longitude: float) -> Optional[str]:
    """Return a human readable place name for the coordinate.

    The label is the nearest city followed by its district or region.  When
    the coordinate is not finite or the lookup fails the function returns
    ``None``.
    """

    try:
        latitude = float(latitude)
        longitude = float(longitude)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None

    try:
        result = _geocoder().query([(latitude, longitude)])
    except Exception as exc:  # reverse_geocoder raises bare exceptions
        LOGGER.debug("Reverse geocoding failed for %s, %s: %s", latitude, longitude, exc)
        return None

    record: Optional[Dict[str, str]] = None
    if isinstance(result, dict):
        record = {key: _to_text(value) for key, value in result.items() if isinstance(key, str)}
    elif isinstance(result, list) and result and isinstance(result[0], dict):
        record = {key: _to_text(value) for key, value in result[0].items() if isinstance(key, str)}

    if not record:
        return None

    city = str(record.get("name", "")).strip()
    region = str(record.get("admin2") or record.get("admin1") or "").strip()
    if not city and not region:
        region = str(record.get("cc", "")).strip()

    components = [component for component in (city, region) if component]
    if not components:
        return None
    location_name = " — ".join(components)
    LOGGER.debug("Resolved location display name: %s", location_name)
    return location_name


def label_photos(photos: Optional[Iterable[Photo]]) -> List[Photo]:
    """Return *photos* with missing place labels filled in where possible.

    Lookups are memoised per rounded coordinate for the duration of the call.
    """

    resolved: Dict[Tuple[float, float], Optional[str]] = {}
    labelled: List[Photo] = []
    for photo in photos or ():
        if photo.location_name:
            labelled.append(photo)
            continue
        key = (
            round(photo.latitude, COORDINATE_LABEL_DIGITS),
            round(photo.longitude, COORDINATE_LABEL_DIGITS),
        )
        if key not in resolved:
            resolved[key] = resolve_location_name(photo.latitude, photo.longitude)
        name = resolved[key]
        labelled.append(photo.with_location_name(name) if name else photo)
    return labelled


__all__ = ["label_photos", "resolve_location_name"]
