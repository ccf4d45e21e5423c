"""Read photo catalogues from JSON and serialise grouping results.

A catalogue is either a bare list of photo records or an object of the form
``{"schema": "geoPhoto/photos@1", "photos": [...]}``.  Records use the same
camelCase keys as the mobile client (``locationName``); ``location_name`` is
accepted as an alias.  ``timestamp`` may be epoch milliseconds or an
ISO-8601 string.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dateutil.parser import isoparse
from jsonschema import Draft202012Validator

from ..config import PHOTOS_SCHEMA_ID
from ..errors import JsonIOError, PhotoSourceError, PhotoSourceInvalidError
from ..models.types import Photo, PhotoGroup
from ..utils.jsonio import read_json
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)

_NUMBER = {"type": "number"}
_OPTIONAL_LABEL = {"type": ["string", "null"]}

PHOTO_RECORD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["id", "latitude", "longitude", "timestamp"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "uri": {"type": "string"},
        "latitude": _NUMBER,
        "longitude": _NUMBER,
        "timestamp": {"type": ["number", "string"]},
        "locationName": _OPTIONAL_LABEL,
        "location_name": _OPTIONAL_LABEL,
    },
    "additionalProperties": True,
}

PHOTO_LIST_SCHEMA: dict[str, Any] = {"type": "array", "items": PHOTO_RECORD_SCHEMA}

PHOTOS_SCHEMA: dict[str, Any] = {
    "$id": "geoPhoto/photos.schema.json",
    "type": "object",
    "required": ["photos"],
    "properties": {
        "schema": {"const": PHOTOS_SCHEMA_ID},
        "photos": PHOTO_LIST_SCHEMA,
    },
    "additionalProperties": True,
}

_document_validator = Draft202012Validator(PHOTOS_SCHEMA)
_list_validator = Draft202012Validator(PHOTO_LIST_SCHEMA)


def _parse_timestamp(value: Any) -> int:
    """Return *value* as epoch milliseconds within the range of :class:`datetime`."""

    milliseconds = _timestamp_ms(value)
    try:
        datetime.fromtimestamp(milliseconds / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise PhotoSourceInvalidError(f"Timestamp out of range: {value!r}") from exc
    return milliseconds


def _timestamp_ms(value: Any) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return int(value)
        except (ValueError, OverflowError) as exc:
            raise PhotoSourceInvalidError(f"Invalid timestamp: {value!r}") from exc
    try:
        moment = isoparse(str(value))
    except (ValueError, TypeError, OverflowError) as exc:
        raise PhotoSourceInvalidError(f"Invalid timestamp: {value!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def _photo_from_record(record: Dict[str, Any]) -> Photo:
    location_name = record.get("locationName")
    if location_name is None:
        location_name = record.get("location_name")
    return Photo(
        id=record["id"],
        uri=str(record.get("uri") or ""),
        latitude=float(record["latitude"]),
        longitude=float(record["longitude"]),
        timestamp=_parse_timestamp(record["timestamp"]),
        location_name=location_name,
    )


def parse_photos(payload: Any) -> List[Photo]:
    """Validate a decoded catalogue and return its photos in document order."""

    if isinstance(payload, dict):
        validator = _document_validator
    elif isinstance(payload, list):
        validator = _list_validator
    else:
        raise PhotoSourceInvalidError("Photo catalogue must be a JSON array or object")

    errors = sorted(validator.iter_errors(payload), key=lambda err: [str(p) for p in err.absolute_path])
    if errors:
        first = errors[0]
        location = "/".join(str(part) for part in first.absolute_path) or "<root>"
        raise PhotoSourceInvalidError(f"Invalid photo catalogue at {location}: {first.message}")

    records = payload["photos"] if isinstance(payload, dict) else payload
    return [_photo_from_record(record) for record in records]


def load_photos(path: Path) -> List[Photo]:
    """Read and validate the catalogue stored at *path*."""

    try:
        payload = read_json(Path(path))
    except JsonIOError as exc:
        raise PhotoSourceError(str(exc)) from exc
    photos = parse_photos(payload)
    LOGGER.info("Loaded %d photos from %s", len(photos), path)
    return photos


def _photo_record(photo: Photo) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": photo.id,
        "uri": photo.uri,
        "latitude": photo.latitude,
        "longitude": photo.longitude,
        "timestamp": photo.timestamp,
    }
    if photo.location_name:
        record["locationName"] = photo.location_name
    return record


def dump_photos(photos: Iterable[Photo], *, schema: Optional[str] = PHOTOS_SCHEMA_ID) -> Dict[str, Any]:
    """Return a catalogue document for *photos*."""

    document: Dict[str, Any] = {}
    if schema is not None:
        document["schema"] = schema
    document["photos"] = [_photo_record(photo) for photo in photos]
    return document


def dump_groups(groups: Iterable[PhotoGroup]) -> List[Dict[str, Any]]:
    """Return JSON-friendly records for *groups*."""

    return [
        {
            "locationName": group.location_name,
            "latitude": group.latitude,
            "longitude": group.longitude,
            "photos": [_photo_record(photo) for photo in group.photos],
        }
        for group in groups
    ]


def describe_timestamp(timestamp: int) -> str:
    """Return an ISO-8601 UTC rendering of an epoch-millisecond timestamp.

    Values outside the supported calendar range are returned as plain numbers.
    """

    try:
        return datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        return str(timestamp)


__all__ = [
    "PHOTOS_SCHEMA",
    "describe_timestamp",
    "dump_groups",
    "dump_photos",
    "load_photos",
    "parse_photos",
]
