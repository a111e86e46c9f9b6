"""
Unit-bearing value types.

Every value keeps the unit it was reported in. Conversions are available
on demand but nothing is normalized behind the caller's back.
"""

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import Optional, Dict, Any

from metar_parser import config


class DistanceUnit(Enum):
    """Display units for distances."""

    METERS = "meters"
    KILOMETERS = "kilometers"
    MILES = "miles"
    FEET = "feet"

    @property
    def meters(self) -> float:
        """Length of one unit in meters."""
        return _METERS_PER_UNIT[self]


_METERS_PER_UNIT = MappingProxyType({
    DistanceUnit.METERS: 1.0,
    DistanceUnit.KILOMETERS: config.METERS_PER_KILOMETER,
    DistanceUnit.MILES: config.METERS_PER_MILE,
    DistanceUnit.FEET: config.METERS_PER_FOOT,
})


class SpeedUnit(Enum):
    """Wind speed units as coded in reports (KMH, MPS, KT)."""

    KILOMETERS_PER_HOUR = "kilometers_per_hour"
    METERS_PER_SECOND = "meters_per_second"
    KNOTS = "knots"


_MPS_PER_UNIT = MappingProxyType({
    SpeedUnit.KILOMETERS_PER_HOUR: config.METERS_PER_SECOND_PER_KILOMETER_PER_HOUR,
    SpeedUnit.METERS_PER_SECOND: 1.0,
    SpeedUnit.KNOTS: config.METERS_PER_SECOND_PER_KNOT,
})


class PressureUnit(Enum):
    """Altimeter setting units: Q group (hPa) or A group (inHg)."""

    HECTOPASCALS = "hectopascals"
    INCHES_OF_MERCURY = "inches_of_mercury"


@dataclass(frozen=True)
class Distance:
    """
    A distance stored in meters, with the unit it should be displayed in.

    ``meters`` of None means the value is unavailable.

    Example:
        d = Distance.from_miles(10)
        d.value        # 10.0 (miles)
        d.kilometers   # 16.09344
    """

    meters: Optional[float] = None
    units: DistanceUnit = DistanceUnit.METERS

    @classmethod
    def from_units(cls, value: float, units: DistanceUnit) -> 'Distance':
        return cls(float(value) * units.meters, units)

    @classmethod
    def from_kilometers(cls, value: float) -> 'Distance':
        return cls.from_units(value, DistanceUnit.KILOMETERS)

    @classmethod
    def from_miles(cls, value: float) -> 'Distance':
        return cls.from_units(value, DistanceUnit.MILES)

    @classmethod
    def from_feet(cls, value: float) -> 'Distance':
        return cls.from_units(value, DistanceUnit.FEET)

    @classmethod
    def unknown(cls, units: DistanceUnit = DistanceUnit.METERS) -> 'Distance':
        return cls(None, units)

    @property
    def is_unknown(self) -> bool:
        return self.meters is None

    @property
    def value(self) -> Optional[float]:
        """Distance expressed in the display units."""
        return self.to(self.units)

    def to(self, units: DistanceUnit) -> Optional[float]:
        if self.meters is None:
            return None
        return self.meters / units.meters

    @property
    def kilometers(self) -> Optional[float]:
        return self.to(DistanceUnit.KILOMETERS)

    @property
    def miles(self) -> Optional[float]:
        return self.to(DistanceUnit.MILES)

    @property
    def feet(self) -> Optional[float]:
        return self.to(DistanceUnit.FEET)

    def with_units(self, units: DistanceUnit) -> 'Distance':
        """Same distance, displayed in other units."""
        return replace(self, units=units)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'value': self.value,
            'units': self.units.value,
            'meters': self.meters,
        }


@dataclass(frozen=True)
class Speed:
    """A speed in the unit it was reported in."""

    value: float
    unit: SpeedUnit = SpeedUnit.KILOMETERS_PER_HOUR

    def to(self, unit: SpeedUnit) -> float:
        meters_per_second = self.value * _MPS_PER_UNIT[self.unit]
        return meters_per_second / _MPS_PER_UNIT[unit]

    @property
    def knots(self) -> float:
        return self.to(SpeedUnit.KNOTS)

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'unit': self.unit.value}


@dataclass(frozen=True)
class Temperature:
    """Whole degrees Celsius; ``value`` of None means missing data (XX or //)."""

    value: Optional[int] = None

    @property
    def is_missing(self) -> bool:
        return self.value is None

    @property
    def fahrenheit(self) -> Optional[float]:
        if self.value is None:
            return None
        return self.value * 9 / 5 + 32

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'unit': 'celsius'}


@dataclass(frozen=True)
class Pressure:
    """Altimeter setting in the unit it was reported in."""

    value: float
    unit: PressureUnit = PressureUnit.HECTOPASCALS

    @property
    def hectopascals(self) -> float:
        if self.unit == PressureUnit.HECTOPASCALS:
            return self.value
        return self.value * config.HECTOPASCALS_PER_INCH_OF_MERCURY

    @property
    def inches_of_mercury(self) -> float:
        if self.unit == PressureUnit.INCHES_OF_MERCURY:
            return self.value
        return self.value / config.HECTOPASCALS_PER_INCH_OF_MERCURY

    def to_dict(self) -> Dict[str, Any]:
        return {'value': self.value, 'unit': self.unit.value}


COMPASS_POINTS = ('N', 'NE', 'E', 'SE', 'S', 'SW', 'W', 'NW')


@dataclass(frozen=True)
class Direction:
    """A compass direction in degrees (0-360, 0 = north)."""

    degrees: int

    @classmethod
    def from_compass(cls, point: str) -> 'Direction':
        """
        Create a direction from an 8-point compass name.

        Raises:
            ValueError: If ``point`` is not one of N, NE, E, SE, S, SW, W, NW
        """
        try:
            index = COMPASS_POINTS.index(point.upper())
        except ValueError:
            raise ValueError(f"Unknown compass point: {point}")
        return cls(index * 45)

    @property
    def compass(self) -> str:
        """Nearest 8-point compass name."""
        return COMPASS_POINTS[int(((self.degrees % 360) + 22.5) // 45) % 8]

    def to_dict(self) -> Dict[str, Any]:
        return {'degrees': self.degrees, 'compass': self.compass}
