import pytest
from datetime import datetime

from metar_parser.parsers.machine import MetarParser


@pytest.fixture
def observation_time() -> datetime:
    """Observation time handed over with the test reports."""
    return datetime(2024, 6, 21, 16, 50)


@pytest.fixture
def parser() -> MetarParser:
    """Parser with fixed display units, independent of the environment."""
    return MetarParser(distance_units="kilometers", height_units="meters")
