"""Default configuration values for geoPhoto."""

from __future__ import annotations

from typing import Final

EARTH_RADIUS_KM: Final[float] = 6371.0

# Radius used when the viewport does not report a usable zoom span.
DEFAULT_CLUSTER_RADIUS_KM: Final[float] = 5.0

# ``CLUSTER_RADIUS_BANDS`` maps a viewport ``latitude_delta`` to a clustering
# radius in kilometres.  Bands are scanned top to bottom and the first one
# whose lower bound is strictly exceeded wins.  Discrete steps keep clusters
# stable while the user nudges the zoom level; the boundaries are tuned by
# hand and must not be interpolated.
CLUSTER_RADIUS_BANDS: Final[tuple[tuple[float, float], ...]] = (
    (50.0, 300.0),
    (20.0, 150.0),
    (10.0, 75.0),
    (5.0, 40.0),
    (2.0, 15.0),
    (1.0, 8.0),
    (0.5, 3.0),
    (0.2, 1.0),
    (0.05, 0.3),
)
MIN_CLUSTER_RADIUS_KM: Final[float] = 0.1

COORDINATE_LABEL_DIGITS: Final[int] = 4
COORDINATE_DISPLAY_DIGITS: Final[int] = 6

# ---------------------------------------------------------------------------
# Map viewport defaults
# ---------------------------------------------------------------------------

# (latitude, longitude, latitude_delta, longitude_delta) shown before any
# photo has been loaded.
DEFAULT_REGION: Final[tuple[float, float, float, float]] = (51.1657, 10.4515, 5.0, 5.0)
FOCUS_REGION_DELTA: Final[float] = 0.01
REGION_PADDING: Final[float] = 1.2
MIN_REGION_DELTA: Final[float] = 0.01

# Relative change of ``latitude_delta`` below which the map keeps its
# current clusters instead of rebuilding them.
CLUSTER_REBUILD_RATIO: Final[float] = 0.2

PHOTOS_SCHEMA_ID: Final[str] = "geoPhoto/photos@1"
SETTINGS_SCHEMA_ID: Final[str] = "geoPhoto/settings@1"
APP_DIR_NAME: Final[str] = "geoPhoto"
