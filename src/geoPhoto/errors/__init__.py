"""Custom exception hierarchy for geoPhoto."""

from __future__ import annotations


class GeoPhotoError(Exception):
    """Base class for all custom errors raised by geoPhoto."""


# --- 3-layer hierarchy ---

class DomainError(GeoPhotoError):
    """Base class for domain-level errors."""


class InfrastructureError(GeoPhotoError):
    """Base class for infrastructure-level errors."""


class ApplicationError(GeoPhotoError):
    """Base class for application-level errors."""


# --- Domain errors ---

class LocationValidationError(DomainError):
    """Raised when a coordinate fails validation in strict mode."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid location")


# --- Infrastructure errors ---

class JsonIOError(InfrastructureError):
    """Raised when a JSON document cannot be read or written."""


class PhotoSourceError(InfrastructureError):
    """Raised when a photo catalogue cannot be loaded."""


class PhotoSourceInvalidError(PhotoSourceError):
    """Raised when a photo catalogue fails schema validation."""


# --- Settings errors ---

class SettingsError(ApplicationError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""


__all__ = [
    "ApplicationError",
    "DomainError",
    "GeoPhotoError",
    "InfrastructureError",
    "JsonIOError",
    "LocationValidationError",
    "PhotoSourceError",
    "PhotoSourceInvalidError",
    "SettingsError",
    "SettingsLoadError",
    "SettingsValidationError",
]
