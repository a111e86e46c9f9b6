"""
Grammars for the individual METAR groups.

Each grammar looks at the front of the token stream (passed in as plain
strings) and returns a GroupMatch. Grammars never consume tokens and never
raise: the parser decides what to do with the outcome.

Example:
    WindGroup.match("24015G25KT").value
    # Wind(direction=Direction(degrees=240), speed=Speed(15, KNOTS), gust=Speed(25, KNOTS))
"""

import re
from typing import Optional

from metar_parser import config
from metar_parser.exceptions import MalformedDateTimeError, UnknownSkyConditionTypeError
from metar_parser.models.units import (
    Distance,
    DistanceUnit,
    Direction,
    Speed,
    Temperature,
    Pressure,
    PressureUnit,
    COMPASS_POINTS,
)
from metar_parser.models.groups import (
    Comparator,
    WindDirectionSentinel,
    WindSpeedSentinel,
    Wind,
    VariableWind,
    Visibility,
    RunwayVisibleRange,
    WeatherPhenomenon,
    SkyCondition,
    SkyQuantity,
    VerticalVisibility,
)
from metar_parser.parsers import tables
from metar_parser.parsers.result import GroupMatch

_COMPASS = '|'.join(COMPASS_POINTS)


def _height(coded: str, units: DistanceUnit) -> Distance:
    """Convert a 3-digit height in hundreds of feet to a Distance."""
    return Distance(int(coded) * config.METERS_PER_HEIGHT_UNIT, units)


class LocationGroup:
    """ICAO location indicator: one letter followed by three alphanumerics."""

    PATTERN = re.compile(r'^[A-Z][A-Z0-9]{3}$')

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        if token is None or not cls.PATTERN.match(token):
            return GroupMatch.no_match()
        return GroupMatch.matched(token)


class DateTimeGroup:
    """
    Day and time of observation (DDHHMMZ).

    Only validated; the observation time itself is supplied by the caller.
    The matched value is the (day, hour, minute) triple.
    """

    PATTERN = re.compile(r'^(\d{2})(\d{2})(\d{2})Z$')

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        m = cls.PATTERN.match(token) if token is not None else None
        if not m:
            return GroupMatch.no_match()
        day, hour, minute = (int(g) for g in m.groups())
        if not (1 <= day <= 31 and hour <= 23 and minute <= 59):
            return GroupMatch.invalid(MalformedDateTimeError(token, "datetime with day 01-31, hour 00-23, minute 00-59"))
        return GroupMatch.matched((day, hour, minute))


class ObserverGroup:
    """AUTO or COR flag following the datetime group."""

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        mode = tables.OBSERVER_CODES.get(token)
        if mode is None:
            return GroupMatch.no_match()
        return GroupMatch.matched(mode)


class WindGroup:
    """
    Surface wind: direction, speed, optional gust and unit.

    Forms:
        24010KT, 24015G25KT   - compass degrees
        VRB03KT               - variable direction
        ///10KT               - unknown direction
        /////KT, /////        - unknown direction and speed
        24010                 - no unit suffix, km/h
    """

    PATTERN = re.compile(
        r'^(?P<direction>\d{3}|VRB|///)'
        r'(?P<speed>\d{2,3}|//)'
        r'(?:G(?P<gust>\d{2,3}))?'
        r'(?P<unit>KT|MPS|KMH)?$'
    )

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        m = cls.PATTERN.match(token) if token is not None else None
        if not m:
            return GroupMatch.no_match()

        unit = tables.SPEED_UNITS[m.group('unit') or '']

        coded_direction = m.group('direction')
        if coded_direction == 'VRB':
            direction = WindDirectionSentinel.VARIABLE
        elif coded_direction == '///':
            direction = WindDirectionSentinel.UNKNOWN
        else:
            direction = Direction(int(coded_direction))

        coded_speed = m.group('speed')
        if coded_speed == '//':
            speed = WindSpeedSentinel.UNKNOWN
        else:
            speed = Speed(int(coded_speed), unit)

        gust = Speed(int(m.group('gust')), unit) if m.group('gust') else None
        return GroupMatch.matched(Wind(direction, speed, gust))


class VariableWindGroup:
    """Extremes of a varying wind direction (DDDVDDD)."""

    PATTERN = re.compile(r'^(\d{3})V(\d{3})$')

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        m = cls.PATTERN.match(token) if token is not None else None
        if not m:
            return GroupMatch.no_match()
        return GroupMatch.matched(VariableWind(Direction(int(m.group(1))), Direction(int(m.group(2)))))


class VisibilityGroup:
    """
    Prevailing visibility in the WMO (meters) or US (statute miles) forms.

    US mixed fractions are written as two tokens ('1 1/2SM'); when the
    front token is '1' or '2' the grammar tries to combine it with the next
    token and consumes both on success.
    """

    MORE_THAN_10KM = '9999'
    NDV_PATTERN = re.compile(r'^(\d{4})NDV$')
    FRACTION_PATTERN = re.compile(r'^(?:([12]) )?([13])/([248])SM$')
    MILES_PATTERN = re.compile(r'^(\d+)SM$')
    LESS_THAN_QUARTER_MILE = 'M1/4SM'
    KILOMETERS_PATTERN = re.compile(r'^(\d+)KM$')
    METERS_PATTERN = re.compile(r'^(\d{4})$')
    DIRECTIONAL_METERS_PATTERN = re.compile(r'^(\d{4})(%s)$' % _COMPASS)
    DIRECTIONAL_KILOMETERS_PATTERN = re.compile(r'^(\d{1,2})(%s)$' % _COMPASS)

    MIXED_FRACTION_WHOLES = ('1', '2')

    @classmethod
    def match(
        cls,
        token: Optional[str],
        next_token: Optional[str] = None,
        units: Optional[DistanceUnit] = None,
    ) -> GroupMatch:
        """
        Args:
            token: Front token
            next_token: Token after it, used for two-token US fractions
            units: Display units for WMO distances (default from config)
        """
        if units is None:
            units = DistanceUnit(config.DISTANCE_UNITS)
        if token is None:
            return GroupMatch.no_match()

        if token in cls.MIXED_FRACTION_WHOLES:
            if next_token is None:
                return GroupMatch.no_match()
            visibility = cls._fraction(f"{token} {next_token}")
            if visibility is None:
                return GroupMatch.no_match()
            return GroupMatch.matched(visibility, consumed=2)

        visibility = cls._single(token, units)
        if visibility is None:
            return GroupMatch.no_match()
        return GroupMatch.matched(visibility)

    @classmethod
    def _fraction(cls, text: str) -> Optional[Visibility]:
        m = cls.FRACTION_PATTERN.match(text)
        if not m:
            return None
        whole, numerator, denominator = m.groups()
        miles = float(whole or 0) + float(numerator) / float(denominator)
        return Visibility(Distance.from_miles(miles))

    @classmethod
    def _single(cls, token: str, units: DistanceUnit) -> Optional[Visibility]:
        if token == cls.MORE_THAN_10KM:
            return Visibility.more_than_10km(units)

        m = cls.NDV_PATTERN.match(token)
        if m:
            # No directional variation; the marker does not change the value
            return Visibility(Distance(float(m.group(1)), units))

        fraction = cls._fraction(token)
        if fraction is not None:
            return fraction

        m = cls.MILES_PATTERN.match(token)
        if m:
            return Visibility(Distance.from_miles(float(m.group(1))))

        if token == cls.LESS_THAN_QUARTER_MILE:
            return Visibility(Distance.from_miles(0.25), comparator=Comparator.LESS_THAN)

        m = cls.KILOMETERS_PATTERN.match(token)
        if m:
            return Visibility(Distance.from_kilometers(float(m.group(1))).with_units(units))

        m = cls.METERS_PATTERN.match(token)
        if m:
            return Visibility(Distance(float(m.group(1)), units))

        m = cls.DIRECTIONAL_METERS_PATTERN.match(token)
        if m:
            return Visibility(Distance(float(m.group(1)), units), Direction.from_compass(m.group(2)))

        m = cls.DIRECTIONAL_KILOMETERS_PATTERN.match(token)
        if m:
            distance = Distance.from_kilometers(float(m.group(1))).with_units(units)
            return Visibility(distance, Direction.from_compass(m.group(2)))

        return None


class RunwayVisibleRangeGroup:
    """
    Runway visible range.

    Forms:
        R24/0600N, R09L/P1500U, R27/M0050D, R24/1200FT
        R24/0600V1500FT - variable, two readings
    """

    SINGLE_PATTERN = re.compile(r'^R(\d+[RLC]?)/(P|M|)(\d{4})(N|U|D|)(FT|)$')
    VARIABLE_PATTERN = re.compile(r'^R(\d+[RLC]?)/(P|M|)(\d{4})V(P|M|)(\d{4})(N|U|D|)(FT|)$')

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        if token is None:
            return GroupMatch.no_match()

        m = cls.SINGLE_PATTERN.match(token)
        if m:
            designator, comparator, count, tendency, unit_code = m.groups()
            units = tables.RVR_UNITS[unit_code]
            visibility = Visibility(Distance.from_units(float(count), units), comparator=tables.RVR_COMPARATORS[comparator])
            return GroupMatch.matched(
                RunwayVisibleRange(designator, visibility, None, tables.RVR_TENDENCIES[tendency], units)
            )

        m = cls.VARIABLE_PATTERN.match(token)
        if m:
            designator, comparator1, count1, comparator2, count2, tendency, unit_code = m.groups()
            units = tables.RVR_UNITS[unit_code]
            visibility1 = Visibility(Distance.from_units(float(count1), units), comparator=tables.RVR_COMPARATORS[comparator1])
            visibility2 = Visibility(Distance.from_units(float(count2), units), comparator=tables.RVR_COMPARATORS[comparator2])
            return GroupMatch.matched(
                RunwayVisibleRange(designator, visibility1, visibility2, tables.RVR_TENDENCIES[tendency], units)
            )

        return GroupMatch.no_match()


class WeatherPhenomenonGroup:
    """
    Present weather: optional modifier, optional descriptor, phenomenon.

    The whole token must match. Components are taken in structural order,
    so 'TSRA' reads as descriptor TS plus phenomenon RA.
    """

    PATTERN = re.compile(
        '^(%s)?(%s)?(%s)$' % (
            '|'.join(re.escape(code) for code in tables.MODIFIERS),
            '|'.join(tables.DESCRIPTORS),
            '|'.join(sorted(tables.PHENOMENA, key=len, reverse=True)),
        )
    )

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        m = cls.PATTERN.match(token) if token is not None else None
        if not m:
            return GroupMatch.no_match()
        modifier_code, descriptor_code, phenomenon_code = m.groups()
        return GroupMatch.matched(WeatherPhenomenon(
            tables.PHENOMENA[phenomenon_code],
            tables.MODIFIERS.get(modifier_code),
            tables.DESCRIPTORS.get(descriptor_code),
        ))


class SkyConditionGroup:
    """
    Cloud layer (FEW025, BKN010CB, OVC008///) or a clear-sky code.

    A layer with a type suffix other than CB, TCU or /// is recognized but
    invalid.
    """

    LAYER_PATTERN = re.compile(r'^(BKN|FEW|OVC|SCT)(\d{3})([A-Z/]*)$')

    @classmethod
    def match(cls, token: Optional[str], height_units: DistanceUnit = DistanceUnit.METERS) -> GroupMatch:
        if token is None:
            return GroupMatch.no_match()

        if token in tables.CLEAR_SKY_CODES:
            return GroupMatch.matched(SkyCondition(SkyQuantity.CLEAR))

        m = cls.LAYER_PATTERN.match(token)
        if not m:
            return GroupMatch.no_match()

        quantity_code, height, type_code = m.groups()
        if type_code not in tables.CLOUD_TYPES:
            return GroupMatch.invalid(UnknownSkyConditionTypeError(token))
        return GroupMatch.matched(SkyCondition(
            tables.SKY_QUANTITIES[quantity_code],
            _height(height, height_units),
            tables.CLOUD_TYPES[type_code],
        ))


class VerticalVisibilityGroup:
    """Vertical visibility (VV002); VV/// or /// when unavailable."""

    PATTERN = re.compile(r'^VV(\d{3})$')
    UNAVAILABLE = ('VV///', '///')

    @classmethod
    def match(cls, token: Optional[str], height_units: DistanceUnit = DistanceUnit.METERS) -> GroupMatch:
        if token is None:
            return GroupMatch.no_match()
        if token in cls.UNAVAILABLE:
            return GroupMatch.matched(VerticalVisibility(Distance.unknown(height_units)))
        m = cls.PATTERN.match(token)
        if not m:
            return GroupMatch.no_match()
        return GroupMatch.matched(VerticalVisibility(_height(m.group(1), height_units)))


class TemperatureDewPointGroup:
    """
    Temperature and dew point (17/12, M02/M05, XX/XX, //, 10/).

    XX and // mean missing data; the value is a pair of Temperature.
    """

    PATTERN = re.compile(r'^(M?\d+|XX|//)/(M?\d+|XX|//)?$')
    VALUE_PATTERN = re.compile(r'^(M?)(\d+)$')

    @classmethod
    def parse_temperature(cls, code: Optional[str]) -> Temperature:
        """Degrees Celsius from 'M05' or '12'; missing for anything else."""
        m = cls.VALUE_PATTERN.match(code) if code else None
        if not m:
            return Temperature(None)
        value = int(m.group(2))
        if m.group(1) == 'M':
            value = -value
        return Temperature(value)

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        m = cls.PATTERN.match(token) if token is not None else None
        if not m:
            return GroupMatch.no_match()
        return GroupMatch.matched((cls.parse_temperature(m.group(1)), cls.parse_temperature(m.group(2))))


class PressureGroup:
    """Altimeter setting: Q1013 (hPa) or A2992 (inches of mercury x 100)."""

    HECTOPASCALS_PATTERN = re.compile(r'^Q(\d{4})$')
    INCHES_PATTERN = re.compile(r'^A(\d{4})$')

    @classmethod
    def match(cls, token: Optional[str]) -> GroupMatch:
        if token is None:
            return GroupMatch.no_match()
        m = cls.HECTOPASCALS_PATTERN.match(token)
        if m:
            return GroupMatch.matched(Pressure(float(m.group(1)), PressureUnit.HECTOPASCALS))
        m = cls.INCHES_PATTERN.match(token)
        if m:
            return GroupMatch.matched(Pressure(float(m.group(1)) / 100.0, PressureUnit.INCHES_OF_MERCURY))
        return GroupMatch.no_match()
