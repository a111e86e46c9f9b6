"""
Data models for the individual groups of a METAR report.

Every enumerable choice is an Enum whose value is a stable semantic key.
Rendering those keys into human-readable text is left to the caller.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union, Dict, Any

from metar_parser import config
from metar_parser.models.units import Distance, DistanceUnit, Direction, Speed


class Comparator(Enum):
    MORE_THAN = "more_than"
    LESS_THAN = "less_than"


class Tendency(Enum):
    """Runway visible range tendency (N, U, D)."""

    NO_CHANGE = "no_change"
    IMPROVING = "improving"
    WORSENING = "worsening"


class WindDirectionSentinel(Enum):
    VARIABLE = "variable_direction"
    UNKNOWN = "unknown_direction"


class WindSpeedSentinel(Enum):
    UNKNOWN = "unknown_speed"


class Modifier(Enum):
    """Present weather intensity or proximity (+, -, VC)."""

    HEAVY = "heavy"
    LIGHT = "light"
    NEARBY = "nearby"


class Descriptor(Enum):
    PATCHES_OF = "patches_of"
    BLOWING = "blowing"
    LOW_DRIFTING = "low_drifting"
    FREEZING = "freezing"
    SHALLOW = "shallow"
    PARTIAL = "partial"
    SHOWER_OF = "shower_of"
    THUNDERSTORM_AND = "thunderstorm_and"


class Phenomenon(Enum):
    MIST = "mist"
    DUST = "dust"
    DRIZZLE = "drizzle"
    FOG = "fog"
    SMOKE = "smoke"
    HAIL = "hail"
    SMALL_HAIL = "small_hail"
    HAZE = "haze"
    ICE_CRYSTALS = "ice_crystals"
    ICE_PELLETS = "ice_pellets"
    DUST_WHIRLS = "dust_whirls"
    SPRAY = "spray"
    RAIN = "rain"
    SAND = "sand"
    SHOWER = "shower"
    SNOW = "snow"
    SNOW_GRAINS = "snow_grains"
    SNOW_AND_RAIN = "snow_and_rain"
    SQUALL = "squall"
    UNKNOWN_PHENOMENON = "unknown_phenomenon"
    VOLCANIC_ASH = "volcanic_ash"
    FUNNEL_CLOUD = "funnel_cloud"
    SAND_STORM = "sand_storm"
    DUST_STORM = "dust_storm"
    THUNDERSTORM = "thunderstorm"
    # Not produced by the grammar, which splits these into TS + phenomenon
    THUNDERSTORM_AND_HAIL = "thunderstorm_and_hail"
    THUNDERSTORM_AND_SMALL_HAIL = "thunderstorm_and_small_hail"
    THUNDERSTORM_AND_RAIN = "thunderstorm_and_rain"
    # Sentinels
    NO_SIGNIFICANT_WEATHER = "no_significant_weather"
    NOT_OBSERVED = "not_observed"


class SkyQuantity(Enum):
    """Cloud amount, plus the sentinels that replace a cloud layer."""

    FEW = "few"
    SCATTERED = "scattered"
    BROKEN = "broken"
    OVERCAST = "overcast"
    # Sentinels
    CLEAR = "clear_skies"
    NO_SIGNIFICANT_CLOUD = "no_significant_cloud"
    NOT_OBSERVED = "not_observed"


class CloudType(Enum):
    CUMULONIMBUS = "cumulonimbus"
    TOWERING_CUMULUS = "towering_cumulus"


def _key(value: Optional[Enum]) -> Optional[str]:
    return value.value if value is not None else None


@dataclass(frozen=True)
class Wind:
    """
    Surface wind.

    Attributes:
        direction: Direction the wind blows from, or a sentinel for VRB / ///
        speed: Mean speed, or a sentinel when coded as //
        gust: Gust speed in the same unit as ``speed``
    """

    direction: Union[Direction, WindDirectionSentinel]
    speed: Union[Speed, WindSpeedSentinel]
    gust: Optional[Speed] = None

    @property
    def is_variable(self) -> bool:
        return self.direction == WindDirectionSentinel.VARIABLE

    @property
    def is_calm(self) -> bool:
        return isinstance(self.speed, Speed) and self.speed.value == 0

    def to_dict(self) -> Dict[str, Any]:
        direction = self.direction.value if isinstance(self.direction, WindDirectionSentinel) else self.direction.to_dict()
        speed = self.speed.value if isinstance(self.speed, WindSpeedSentinel) else self.speed.to_dict()
        data = {'direction': direction, 'speed': speed}
        if self.gust is not None:
            data['gust'] = self.gust.to_dict()
        return data


@dataclass(frozen=True)
class VariableWind:
    """Range the wind direction oscillates within (e.g. 200V280)."""

    direction1: Direction
    direction2: Direction

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction1': self.direction1.to_dict(),
            'direction2': self.direction2.to_dict(),
        }


@dataclass(frozen=True)
class Visibility:
    """
    Horizontal visibility.

    ``observed`` is False for the automatic-station '////' group, in which
    case the distance is unknown.
    """

    distance: Distance
    direction: Optional[Direction] = None
    comparator: Optional[Comparator] = None
    observed: bool = True

    @classmethod
    def more_than_10km(cls, units: DistanceUnit = DistanceUnit.KILOMETERS) -> 'Visibility':
        return cls(Distance(config.MORE_THAN_10KM_METERS, units), comparator=Comparator.MORE_THAN)

    @classmethod
    def not_observed(cls) -> 'Visibility':
        return cls(Distance.unknown(), observed=False)

    def to_dict(self) -> Dict[str, Any]:
        data = {'distance': self.distance.to_dict()}
        if self.direction is not None:
            data['direction'] = self.direction.to_dict()
        if self.comparator is not None:
            data['comparator'] = self.comparator.value
        if not self.observed:
            data['observed'] = False
        return data


@dataclass(frozen=True)
class RunwayVisibleRange:
    """
    Runway visible range for one runway.

    A variable range (R24/0600V1500FT) carries two readings sharing the
    tendency and display units.
    """

    designator: str
    visibility1: Visibility
    visibility2: Optional[Visibility] = None
    tendency: Optional[Tendency] = None
    units: DistanceUnit = DistanceUnit.METERS

    @property
    def is_variable(self) -> bool:
        return self.visibility2 is not None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'designator': self.designator,
            'visibility1': self.visibility1.to_dict(),
            'units': self.units.value,
        }
        if self.visibility2 is not None:
            data['visibility2'] = self.visibility2.to_dict()
        if self.tendency is not None:
            data['tendency'] = self.tendency.value
        return data


@dataclass(frozen=True)
class WeatherPhenomenon:
    """One present weather group, e.g. '+TSRA' or 'BR'."""

    phenomenon: Phenomenon
    modifier: Optional[Modifier] = None
    descriptor: Optional[Descriptor] = None

    @property
    def key(self) -> str:
        """Space-separated semantic keys, e.g. 'heavy thunderstorm_and rain'."""
        parts = [self.modifier, self.descriptor, self.phenomenon]
        return " ".join(p.value for p in parts if p is not None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'phenomenon': self.phenomenon.value,
            'modifier': _key(self.modifier),
            'descriptor': _key(self.descriptor),
        }


@dataclass(frozen=True)
class SkyCondition:
    """A cloud layer, or a sentinel such as clear skies."""

    quantity: SkyQuantity
    height: Optional[Distance] = None
    type: Optional[CloudType] = None

    @property
    def is_clear(self) -> bool:
        return self.quantity == SkyQuantity.CLEAR

    @property
    def key(self) -> str:
        """Semantic summary key, e.g. 'broken cumulonimbus'."""
        if self.type is None:
            return self.quantity.value
        return f"{self.quantity.value} {self.type.value}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'quantity': self.quantity.value,
            'height': self.height.to_dict() if self.height is not None else None,
            'type': _key(self.type),
        }


@dataclass(frozen=True)
class VerticalVisibility:
    """Vertical visibility into an obscured sky; unknown distance for VV///."""

    distance: Distance

    @property
    def is_unknown(self) -> bool:
        return self.distance.is_unknown

    def to_dict(self) -> Dict[str, Any]:
        return {'distance': self.distance.to_dict()}
