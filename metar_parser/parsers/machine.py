"""
State machine driving a METAR parse.

Each state names the last section of the report that has been dealt with.
A handler per state consumes tokens from the front of the stream, applies
the grammar(s) of the next section and returns the next state together with
the fields it parsed. One loop runs handlers until the END state.

Order of states:

    START -> LOCATION -> DATETIME -> WIND -> VARIABLE_WIND -> VISIBILITY
          -> RUNWAY_VISIBLE_RANGE -> PRESENT_WEATHER -> SKY_CONDITIONS
          -> TEMPERATURE_DEW_POINT -> SEA_LEVEL_PRESSURE -> REMARKS -> END

CAVOK jumps from VARIABLE_WIND straight to SKY_CONDITIONS.
"""

import logging
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from metar_parser import config
from metar_parser.exceptions import (
    InvalidTransitionError,
    MalformedDateTimeError,
    MalformedLocationError,
    MalformedTemperatureDewPointError,
    ParseError,
    UnexpectedTrailingTokensError,
)
from metar_parser.models.units import DistanceUnit
from metar_parser.models.groups import (
    Phenomenon,
    SkyCondition,
    SkyQuantity,
    Visibility,
    WeatherPhenomenon,
)
from metar_parser.models.report import ObserverMode, ParsedReport
from metar_parser.parsers.groups import (
    DateTimeGroup,
    LocationGroup,
    ObserverGroup,
    PressureGroup,
    RunwayVisibleRangeGroup,
    SkyConditionGroup,
    TemperatureDewPointGroup,
    VariableWindGroup,
    VerticalVisibilityGroup,
    VisibilityGroup,
    WeatherPhenomenonGroup,
    WindGroup,
)
from metar_parser.parsers.result import GroupMatch
from metar_parser.raw import coerce_observation_time
from metar_parser.tokenizer import TokenStream, tokenize

logger = logging.getLogger(__name__)


class ParserState(Enum):
    START = "start"
    LOCATION = "location"
    DATETIME = "datetime"
    WIND = "wind"
    VARIABLE_WIND = "variable_wind"
    VISIBILITY = "visibility"
    RUNWAY_VISIBLE_RANGE = "runway_visible_range"
    PRESENT_WEATHER = "present_weather"
    SKY_CONDITIONS = "sky_conditions"
    TEMPERATURE_DEW_POINT = "temperature_dew_point"
    SEA_LEVEL_PRESSURE = "sea_level_pressure"
    REMARKS = "remarks"
    END = "end"


TRANSITIONS: Mapping[ParserState, FrozenSet[ParserState]] = MappingProxyType({
    ParserState.START: frozenset({ParserState.LOCATION}),
    ParserState.LOCATION: frozenset({ParserState.DATETIME}),
    ParserState.DATETIME: frozenset({ParserState.WIND}),
    ParserState.WIND: frozenset({ParserState.VARIABLE_WIND}),
    ParserState.VARIABLE_WIND: frozenset({ParserState.VISIBILITY, ParserState.SKY_CONDITIONS}),
    ParserState.VISIBILITY: frozenset({ParserState.RUNWAY_VISIBLE_RANGE}),
    ParserState.RUNWAY_VISIBLE_RANGE: frozenset({ParserState.PRESENT_WEATHER}),
    ParserState.PRESENT_WEATHER: frozenset({ParserState.SKY_CONDITIONS}),
    ParserState.SKY_CONDITIONS: frozenset({ParserState.TEMPERATURE_DEW_POINT}),
    ParserState.TEMPERATURE_DEW_POINT: frozenset({ParserState.SEA_LEVEL_PRESSURE, ParserState.REMARKS}),
    ParserState.SEA_LEVEL_PRESSURE: frozenset({ParserState.REMARKS}),
    ParserState.REMARKS: frozenset({ParserState.END}),
    ParserState.END: frozenset(),
})

# Tokens
CAVOK = 'CAVOK'
REMARKS_MARKER = 'RMK'
AUTO_VISIBILITY_NOT_OBSERVED = '////'
AUTO_WEATHER_NOT_OBSERVED = '//'
AUTO_SKY_NOT_OBSERVED = ('///', '//////')

Fields = Mapping[str, Any]
Transition = Tuple[ParserState, Dict[str, Any]]
TransitionListener = Callable[[ParserState, ParserState, int], None]


def _optional(tokens: TokenStream, match: GroupMatch) -> Any:
    """Consume an optional group; None when it is not present."""
    if match.is_invalid:
        raise match.error
    if not match.is_match:
        return None
    tokens.pop_many(match.consumed)
    return match.value


def _required(tokens: TokenStream, match: GroupMatch, error_class) -> Any:
    """Consume a mandatory group, raising ``error_class`` when it is absent."""
    if match.is_invalid:
        raise match.error
    if not match.is_match:
        raise error_class(tokens.peek())
    tokens.pop_many(match.consumed)
    return match.value


def _collect(tokens: TokenStream, grammar: Callable[[Optional[str]], GroupMatch]) -> list:
    """Consume consecutive groups of one kind, stopping at the first non-match."""
    collected = []
    while True:
        value = _optional(tokens, grammar(tokens.peek()))
        if value is None:
            return collected
        collected.append(value)


class MetarParser:
    """
    Parse METAR reports into ParsedReport objects.

    A parser holds only configuration; every call to ``parse`` works on its
    own token stream, so one instance can be shared between threads.

    Example:
        report = MetarParser().parse(
            "KJFK 211651Z 18010KT 10SM FEW250 24/18 A3000",
            datetime(2024, 6, 21, 16, 51),
        )
        report.wind.speed  # Speed(value=10, unit=SpeedUnit.KNOTS)
    """

    def __init__(
        self,
        distance_units: Union[DistanceUnit, str, None] = None,
        height_units: Union[DistanceUnit, str, None] = None,
        listener: Optional[TransitionListener] = None,
    ):
        """
        Args:
            distance_units: Display units for WMO visibility (default from config)
            height_units: Display units for cloud base and vertical visibility
            listener: Called after every transition with (source, target, tokens left)

        Raises:
            ValueError: If a unit name is not a DistanceUnit value
        """
        self.distance_units = DistanceUnit(distance_units or config.DISTANCE_UNITS)
        self.height_units = DistanceUnit(height_units or config.HEIGHT_UNITS)
        self.listener = listener
        self._handlers: Dict[ParserState, Callable[[TokenStream, Fields], Transition]] = {
            ParserState.START: self._seek_location,
            ParserState.LOCATION: self._seek_datetime,
            ParserState.DATETIME: self._seek_wind,
            ParserState.WIND: self._seek_variable_wind,
            ParserState.VARIABLE_WIND: self._seek_visibility,
            ParserState.VISIBILITY: self._seek_runway_visible_range,
            ParserState.RUNWAY_VISIBLE_RANGE: self._seek_present_weather,
            ParserState.PRESENT_WEATHER: self._seek_sky_conditions,
            ParserState.SKY_CONDITIONS: self._seek_temperature_dew_point,
            ParserState.TEMPERATURE_DEW_POINT: self._seek_sea_level_pressure,
            ParserState.SEA_LEVEL_PRESSURE: self._seek_remarks,
            ParserState.REMARKS: self._seek_end,
        }

    def parse(self, raw_text: str, observation_time: Union[datetime, str]) -> ParsedReport:
        """
        Parse a METAR report.

        Args:
            raw_text: Whitespace separated report text
            observation_time: Time of observation, as datetime or ISO-8601 string

        Returns:
            ParsedReport

        Raises:
            ParseError: On the first missing or malformed mandatory group
        """
        observation_time = coerce_observation_time(observation_time)
        tokens = tokenize(raw_text)
        fields: Dict[str, Any] = {
            'observer': ObserverMode.REAL,
            'runway_visible_range': [],
            'present_weather': [],
            'sky_conditions': [],
            'remarks': [],
        }

        state = ParserState.START
        while state != ParserState.END:
            try:
                target, updates = self._handlers[state](tokens, MappingProxyType(fields))
            except ParseError as e:
                logger.debug("Failed to parse METAR after %s: %s - %s", state.name, raw_text[:80], e)
                raise
            if target not in TRANSITIONS[state]:
                raise InvalidTransitionError(state, target)
            fields.update(updates)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s -> %s, %d tokens left: %s", state.name, target.name, len(tokens), tokens)
            if self.listener is not None:
                self.listener(state, target, len(tokens))
            state = target

        return ParsedReport(
            station_code=fields['station_code'],
            observation_time=observation_time,
            temperature=fields['temperature'],
            dew_point=fields['dew_point'],
            observer=fields['observer'],
            observation_group=fields['observation_group'],
            wind=fields.get('wind'),
            variable_wind=fields.get('variable_wind'),
            visibility=fields.get('visibility'),
            runway_visible_range=tuple(fields['runway_visible_range']),
            present_weather=tuple(fields['present_weather']),
            sky_conditions=tuple(fields['sky_conditions']),
            vertical_visibility=fields.get('vertical_visibility'),
            sea_level_pressure=fields.get('sea_level_pressure'),
            remarks=tuple(fields['remarks']),
            raw_text=raw_text,
        )

    # --- State handlers ---

    def _seek_location(self, tokens: TokenStream, fields: Fields) -> Transition:
        station_code = _required(tokens, LocationGroup.match(tokens.peek()), MalformedLocationError)
        return ParserState.LOCATION, {'station_code': station_code}

    def _seek_datetime(self, tokens: TokenStream, fields: Fields) -> Transition:
        group = _required(tokens, DateTimeGroup.match(tokens.peek()), MalformedDateTimeError)
        return ParserState.DATETIME, {'observation_group': group}

    def _seek_wind(self, tokens: TokenStream, fields: Fields) -> Transition:
        updates: Dict[str, Any] = {}
        observer = _optional(tokens, ObserverGroup.match(tokens.peek()))
        if observer is not None:
            updates['observer'] = observer
        wind = _optional(tokens, WindGroup.match(tokens.peek()))
        if wind is not None:
            updates['wind'] = wind
        return ParserState.WIND, updates

    def _seek_variable_wind(self, tokens: TokenStream, fields: Fields) -> Transition:
        variable_wind = _optional(tokens, VariableWindGroup.match(tokens.peek()))
        if variable_wind is None:
            return ParserState.VARIABLE_WIND, {}
        return ParserState.VARIABLE_WIND, {'variable_wind': variable_wind}

    def _seek_visibility(self, tokens: TokenStream, fields: Fields) -> Transition:
        front = tokens.peek()

        # Runway visible range, present weather and clouds are never looked for after CAVOK
        if front == CAVOK:
            tokens.pop()
            return ParserState.SKY_CONDITIONS, {
                'visibility': Visibility.more_than_10km(self.distance_units),
                'present_weather': fields['present_weather'] + [
                    WeatherPhenomenon(Phenomenon.NO_SIGNIFICANT_WEATHER)
                ],
                'sky_conditions': fields['sky_conditions'] + [
                    SkyCondition(SkyQuantity.NO_SIGNIFICANT_CLOUD)
                ],
            }

        if fields['observer'] == ObserverMode.AUTO and front == AUTO_VISIBILITY_NOT_OBSERVED:
            tokens.pop()
            return ParserState.VISIBILITY, {'visibility': Visibility.not_observed()}

        visibility = _optional(tokens, VisibilityGroup.match(front, tokens.peek(1), self.distance_units))
        if visibility is None:
            return ParserState.VISIBILITY, {}
        return ParserState.VISIBILITY, {'visibility': visibility}

    def _seek_runway_visible_range(self, tokens: TokenStream, fields: Fields) -> Transition:
        ranges = _collect(tokens, RunwayVisibleRangeGroup.match)
        return ParserState.RUNWAY_VISIBLE_RANGE, {
            'runway_visible_range': fields['runway_visible_range'] + ranges,
        }

    def _seek_present_weather(self, tokens: TokenStream, fields: Fields) -> Transition:
        if fields['observer'] == ObserverMode.AUTO and tokens.peek() == AUTO_WEATHER_NOT_OBSERVED:
            tokens.pop()
            return ParserState.PRESENT_WEATHER, {
                'present_weather': fields['present_weather'] + [WeatherPhenomenon(Phenomenon.NOT_OBSERVED)],
            }

        weather = _collect(tokens, WeatherPhenomenonGroup.match)
        return ParserState.PRESENT_WEATHER, {
            'present_weather': fields['present_weather'] + weather,
        }

    def _seek_sky_conditions(self, tokens: TokenStream, fields: Fields) -> Transition:
        if fields['observer'] == ObserverMode.AUTO and tokens.peek() in AUTO_SKY_NOT_OBSERVED:
            tokens.pop()
            return ParserState.SKY_CONDITIONS, {
                'sky_conditions': fields['sky_conditions'] + [SkyCondition(SkyQuantity.NOT_OBSERVED)],
            }

        updates: Dict[str, Any] = {}
        conditions = []
        while True:
            sky_condition = _optional(tokens, SkyConditionGroup.match(tokens.peek(), self.height_units))
            if sky_condition is not None:
                conditions.append(sky_condition)
                continue
            # VV sits among the cloud groups when the sky is obscured
            vertical_visibility = _optional(tokens, VerticalVisibilityGroup.match(tokens.peek(), self.height_units))
            if vertical_visibility is None:
                break
            updates['vertical_visibility'] = vertical_visibility

        updates['sky_conditions'] = fields['sky_conditions'] + conditions
        return ParserState.SKY_CONDITIONS, updates

    def _seek_temperature_dew_point(self, tokens: TokenStream, fields: Fields) -> Transition:
        temperature, dew_point = _required(
            tokens, TemperatureDewPointGroup.match(tokens.peek()), MalformedTemperatureDewPointError
        )
        return ParserState.TEMPERATURE_DEW_POINT, {'temperature': temperature, 'dew_point': dew_point}

    def _seek_sea_level_pressure(self, tokens: TokenStream, fields: Fields) -> Transition:
        pressure = _optional(tokens, PressureGroup.match(tokens.peek()))
        if pressure is None:
            return ParserState.SEA_LEVEL_PRESSURE, {}
        return ParserState.SEA_LEVEL_PRESSURE, {'sea_level_pressure': pressure}

    def _seek_remarks(self, tokens: TokenStream, fields: Fields) -> Transition:
        if tokens.peek() == REMARKS_MARKER:
            tokens.pop()
        return ParserState.REMARKS, {'remarks': fields['remarks'] + tokens.drain()}

    def _seek_end(self, tokens: TokenStream, fields: Fields) -> Transition:
        if tokens:
            raise UnexpectedTrailingTokensError(" ".join(tokens.remaining()))
        return ParserState.END, {}


def parse(raw_text: str, observation_time: Union[datetime, str], **kwargs) -> ParsedReport:
    """Parse a METAR report with a one-off MetarParser (see MetarParser.__init__ for kwargs)."""
    return MetarParser(**kwargs).parse(raw_text, observation_time)
