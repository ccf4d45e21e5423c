"""Schema helpers for the application settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import CLUSTER_REBUILD_RATIO, SETTINGS_SCHEMA_ID

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "geoPhoto/settings.schema.json",
    "type": "object",
    "required": ["schema", "map", "gallery", "validation"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_ID},
        "map": {
            "type": "object",
            "properties": {
                "rebuild_ratio": {"type": "number", "minimum": 0, "maximum": 1},
            },
            "additionalProperties": True,
        },
        "gallery": {
            "type": "object",
            "properties": {
                "geocode_missing": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
        "validation": {
            "type": "object",
            "properties": {
                "drop_invalid": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_ID,
    "map": {
        "rebuild_ratio": CLUSTER_REBUILD_RATIO,
    },
    "gallery": {
        "geocode_missing": False,
    },
    "validation": {
        "drop_invalid": True,
    },
}

_SECTIONS = ("map", "gallery", "validation")

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
