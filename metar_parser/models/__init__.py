"""
Data model for parsed METAR reports.

Provides:
- Unit-bearing values: Distance, Speed, Temperature, Pressure, Direction
- Group models: Wind, VariableWind, Visibility, RunwayVisibleRange,
  WeatherPhenomenon, SkyCondition, VerticalVisibility
- ParsedReport: the aggregate record produced by the parser
"""

from metar_parser.models.units import (
    Distance,
    DistanceUnit,
    Speed,
    SpeedUnit,
    Temperature,
    Pressure,
    PressureUnit,
    Direction,
)
from metar_parser.models.groups import (
    Comparator,
    Tendency,
    WindDirectionSentinel,
    WindSpeedSentinel,
    Modifier,
    Descriptor,
    Phenomenon,
    SkyQuantity,
    CloudType,
    Wind,
    VariableWind,
    Visibility,
    RunwayVisibleRange,
    WeatherPhenomenon,
    SkyCondition,
    VerticalVisibility,
)
from metar_parser.models.report import ParsedReport, ObserverMode

__all__ = [
    'Distance',
    'DistanceUnit',
    'Speed',
    'SpeedUnit',
    'Temperature',
    'Pressure',
    'PressureUnit',
    'Direction',
    'Comparator',
    'Tendency',
    'WindDirectionSentinel',
    'WindSpeedSentinel',
    'Modifier',
    'Descriptor',
    'Phenomenon',
    'SkyQuantity',
    'CloudType',
    'Wind',
    'VariableWind',
    'Visibility',
    'RunwayVisibleRange',
    'WeatherPhenomenon',
    'SkyCondition',
    'VerticalVisibility',
    'ParsedReport',
    'ObserverMode',
]
