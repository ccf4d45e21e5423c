import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from geoPhoto.events.bus import EventBus
from geoPhoto.models.types import Photo


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def vienna_graz_photos() -> list[Photo]:
    return [
        Photo(
            id="1",
            uri="photo1.jpg",
            latitude=48.2082,
            longitude=16.3738,
            timestamp=1700000000000,
            location_name="Vienna",
        ),
        Photo(
            id="2",
            uri="photo2.jpg",
            latitude=48.2085,
            longitude=16.374,
            timestamp=1700000001000,
            location_name="Vienna",
        ),
        Photo(
            id="3",
            uri="photo3.jpg",
            latitude=47.0707,
            longitude=15.4395,
            timestamp=1700000002000,
            location_name="Graz",
        ),
    ]
