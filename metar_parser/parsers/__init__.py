"""
Group grammars and the state machine that drives them.

The grammars (``groups``) are importable on their own; ``machine`` holds
the MetarParser.
"""

from metar_parser.parsers.result import GroupMatch, MatchStatus
from metar_parser.parsers.groups import (
    LocationGroup,
    DateTimeGroup,
    ObserverGroup,
    WindGroup,
    VariableWindGroup,
    VisibilityGroup,
    RunwayVisibleRangeGroup,
    WeatherPhenomenonGroup,
    SkyConditionGroup,
    VerticalVisibilityGroup,
    TemperatureDewPointGroup,
    PressureGroup,
)

__all__ = [
    'GroupMatch',
    'MatchStatus',
    'LocationGroup',
    'DateTimeGroup',
    'ObserverGroup',
    'WindGroup',
    'VariableWindGroup',
    'VisibilityGroup',
    'RunwayVisibleRangeGroup',
    'WeatherPhenomenonGroup',
    'SkyConditionGroup',
    'VerticalVisibilityGroup',
    'TemperatureDewPointGroup',
    'PressureGroup',
]
