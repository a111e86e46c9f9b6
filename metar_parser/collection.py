"""Collection of parsed reports with filters and tabular export."""

import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional

import pandas as pd

from metar_parser.exceptions import ParseError
from metar_parser.models.groups import WindDirectionSentinel, WindSpeedSentinel
from metar_parser.models.report import ObserverMode, ParsedReport
from metar_parser.raw import RawReport

logger = logging.getLogger(__name__)

DATAFRAME_COLUMNS = [
    'station_code',
    'time',
    'observer',
    'wind_direction',
    'wind_speed',
    'wind_gust',
    'wind_unit',
    'variable_wind_from',
    'variable_wind_to',
    'visibility_meters',
    'visibility_comparator',
    'runway_visible_range',
    'present_weather',
    'sky_conditions',
    'vertical_visibility_meters',
    'temperature',
    'dew_point',
    'pressure_hpa',
    'remarks',
]


class ReportCollection:
    """
    Chainable collection of ParsedReport objects.

    Example:
        reports = ReportCollection.from_raw(raw_reports, skip_errors=True)
        latest = reports.for_station("EGLL").latest()
        df = reports.with_observer(ObserverMode.AUTO).to_dataframe()
    """

    def __init__(self, items: Iterable[ParsedReport]):
        self._items: List[ParsedReport] = list(items)

    @classmethod
    def from_raw(
        cls,
        raw_reports: Iterable[RawReport],
        parser=None,
        skip_errors: bool = False,
    ) -> 'ReportCollection':
        """
        Parse a batch of raw reports.

        Args:
            raw_reports: Reports to parse
            parser: MetarParser to use (default: a new one with configured units)
            skip_errors: Log and skip reports that fail to parse instead of raising

        Raises:
            ParseError: On the first failing report, unless skip_errors is set
        """
        if parser is None:
            from metar_parser.parsers.machine import MetarParser
            parser = MetarParser()

        reports = []
        for raw in raw_reports:
            try:
                reports.append(parser.parse(raw.report_text, raw.observation_time))
            except ParseError as e:
                if not skip_errors:
                    raise
                logger.warning("Skipping unparseable report %r: %s", raw.report_text[:80], e)
        return cls(reports)

    # --- Filters ---

    def filter(self, predicate: Callable[[ParsedReport], bool]) -> 'ReportCollection':
        return ReportCollection(r for r in self._items if predicate(r))

    def for_station(self, station_code: str) -> 'ReportCollection':
        code = station_code.upper()
        return self.filter(lambda r: r.station_code == code)

    def with_observer(self, observer: ObserverMode) -> 'ReportCollection':
        return self.filter(lambda r: r.observer == observer)

    def chronological(self) -> 'ReportCollection':
        return ReportCollection(sorted(self._items, key=lambda r: r.observation_time))

    # --- Results ---

    def all(self) -> List[ParsedReport]:
        return list(self._items)

    def first(self) -> Optional[ParsedReport]:
        return self._items[0] if self._items else None

    def latest(self) -> Optional[ParsedReport]:
        """Most recent report by observation time, or None when empty."""
        if not self._items:
            return None
        return max(self._items, key=lambda r: r.observation_time)

    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ParsedReport]:
        return iter(self._items)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self._items]

    def to_dataframe(self) -> pd.DataFrame:
        """One row per report with the groups flattened into scalar columns."""
        return pd.DataFrame([_flatten(r) for r in self._items], columns=DATAFRAME_COLUMNS)


def _flatten(report: ParsedReport) -> Dict[str, Any]:
    row: Dict[str, Any] = {
        'station_code': report.station_code,
        'time': report.observation_time,
        'observer': report.observer.value,
        'temperature': report.temperature.value,
        'dew_point': report.dew_point.value,
        'runway_visible_range': len(report.runway_visible_range),
        'present_weather': "; ".join(w.key for w in report.present_weather) or None,
        'sky_conditions': "; ".join(s.key for s in report.sky_conditions) or None,
        'remarks': " ".join(report.remarks) or None,
    }

    wind = report.wind
    if wind is not None:
        if isinstance(wind.direction, WindDirectionSentinel):
            row['wind_direction'] = wind.direction.value
        else:
            row['wind_direction'] = wind.direction.degrees
        if not isinstance(wind.speed, WindSpeedSentinel):
            row['wind_speed'] = wind.speed.value
            row['wind_unit'] = wind.speed.unit.value
        if wind.gust is not None:
            row['wind_gust'] = wind.gust.value

    if report.variable_wind is not None:
        row['variable_wind_from'] = report.variable_wind.direction1.degrees
        row['variable_wind_to'] = report.variable_wind.direction2.degrees

    if report.visibility is not None:
        row['visibility_meters'] = report.visibility.distance.meters
        if report.visibility.comparator is not None:
            row['visibility_comparator'] = report.visibility.comparator.value

    if report.vertical_visibility is not None:
        row['vertical_visibility_meters'] = report.vertical_visibility.distance.meters

    if report.sea_level_pressure is not None:
        row['pressure_hpa'] = report.sea_level_pressure.hectopascals

    return row
