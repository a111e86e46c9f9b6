"""Parsed METAR report model."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple, Dict, Any, Union

from metar_parser.models.units import Temperature, Pressure
from metar_parser.models.groups import (
    Wind,
    VariableWind,
    Visibility,
    RunwayVisibleRange,
    WeatherPhenomenon,
    SkyCondition,
    VerticalVisibility,
)


class ObserverMode(Enum):
    """How the observation was made (AUTO / COR flags)."""

    REAL = "real"
    AUTO = "auto"
    CORRECTED = "corrected"


@dataclass(frozen=True)
class ParsedReport:
    """
    A fully parsed METAR report.

    Instances are only ever produced by a successful parse; a report that
    fails on a mandatory group yields an exception, never a partial report.

    Attributes:
        station_code: ICAO location indicator
        observation_time: Observation time supplied alongside the raw text
        temperature: Air temperature (value may be missing)
        dew_point: Dew point (value may be missing)
        observer: Real, automatic or corrected observation
        observation_group: (day, hour, minute) from the DDHHMMZ group
        wind: Surface wind
        variable_wind: Direction variation range
        visibility: Prevailing visibility
        runway_visible_range: RVR groups in report order
        present_weather: Weather groups in report order
        sky_conditions: Cloud layers in report order
        vertical_visibility: Vertical visibility (VV group)
        sea_level_pressure: Altimeter setting (Q or A group)
        remarks: Tokens following RMK, verbatim
        raw_text: Original report text

    Example:
        report = ParsedReport.from_metar(
            "EGLL 211650Z 24010KT CAVOK 17/12 Q1020",
            datetime(2024, 6, 21, 16, 50),
        )
    """

    station_code: str
    observation_time: datetime
    temperature: Temperature
    dew_point: Temperature
    observer: ObserverMode = ObserverMode.REAL
    observation_group: Optional[Tuple[int, int, int]] = None
    wind: Optional[Wind] = None
    variable_wind: Optional[VariableWind] = None
    visibility: Optional[Visibility] = None
    runway_visible_range: Tuple[RunwayVisibleRange, ...] = ()
    present_weather: Tuple[WeatherPhenomenon, ...] = ()
    sky_conditions: Tuple[SkyCondition, ...] = ()
    vertical_visibility: Optional[VerticalVisibility] = None
    sea_level_pressure: Optional[Pressure] = None
    remarks: Tuple[str, ...] = ()
    raw_text: str = ""

    @classmethod
    def from_metar(cls, raw_text: str, observation_time: Union[datetime, str]) -> 'ParsedReport':
        """
        Parse a METAR string.

        Raises:
            ParseError: If a mandatory group is missing or malformed
        """
        from metar_parser.parsers.machine import MetarParser
        return MetarParser().parse(raw_text, observation_time)

    def to_dict(self) -> Dict[str, Any]:
        """
        Key/value projection of the report.

        Optional groups are omitted when absent; temperature and dew point
        are always present.
        """
        data: Dict[str, Any] = {
            'station_code': self.station_code,
            'time': self.observation_time.isoformat(),
            'observer': self.observer.value,
        }
        if self.wind is not None:
            data['wind'] = self.wind.to_dict()
        if self.variable_wind is not None:
            data['variable_wind'] = self.variable_wind.to_dict()
        if self.visibility is not None:
            data['visibility'] = self.visibility.to_dict()
        if self.runway_visible_range:
            data['runway_visible_range'] = [r.to_dict() for r in self.runway_visible_range]
        if self.present_weather:
            data['present_weather'] = [w.to_dict() for w in self.present_weather]
        if self.sky_conditions:
            data['sky_conditions'] = [s.to_dict() for s in self.sky_conditions]
        if self.vertical_visibility is not None:
            data['vertical_visibility'] = self.vertical_visibility.to_dict()
        data['temperature'] = self.temperature.to_dict()
        data['dew_point'] = self.dew_point.to_dict()
        if self.sea_level_pressure is not None:
            data['sea_level_pressure'] = self.sea_level_pressure.to_dict()
        if self.remarks:
            data['remarks'] = list(self.remarks)
        return data
