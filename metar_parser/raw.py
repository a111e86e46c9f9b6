"""
Raw report input: the report text and the time it was observed.

Fetching reports is left to the caller; this module only normalizes what
the caller hands over.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from metar_parser.parsers.groups import DateTimeGroup

# How far back to look for a month containing the reported day
_MAX_MONTHS_BACK = 12


def coerce_observation_time(value: Union[datetime, str]) -> datetime:
    """
    Accept a datetime or an ISO-8601 string.

    Raises:
        ValueError: If the value is neither
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value)
        except ValueError as e:
            raise ValueError(f"Invalid observation time: {value!r}") from e
    raise ValueError(f"Observation time must be a datetime or ISO-8601 string, got {type(value).__name__}")


def observation_time_from_group(group: str, reference: datetime) -> datetime:
    """
    Resolve a DDHHMMZ group to a full datetime.

    Returns the latest instant not after ``reference`` whose day, hour and
    minute match the group. The reference keeps its timezone, if any.

    Example:
        observation_time_from_group("302350Z", datetime(2024, 3, 1, 0, 10))
        # datetime(2024, 1, 30, 23, 50): February has no 30th

    Raises:
        ValueError: If the group is malformed or no month matches
    """
    match = DateTimeGroup.match(group)
    if not match.is_match:
        raise ValueError(f"Invalid datetime group: {group!r}")
    day, hour, minute = match.value

    for months_back in range(_MAX_MONTHS_BACK + 1):
        month = reference - relativedelta(months=months_back)
        try:
            candidate = month.replace(day=day, hour=hour, minute=minute, second=0, microsecond=0)
        except ValueError:
            continue
        if candidate <= reference:
            return candidate
    raise ValueError(f"No month before {reference.isoformat()} has day {day}")


@dataclass(frozen=True)
class RawReport:
    """
    A METAR report as handed over by the retrieval layer.

    Attributes:
        report_text: The report, tokens separated by whitespace
        observation_time: When the observation was made
    """

    report_text: str
    observation_time: datetime

    def __post_init__(self):
        object.__setattr__(self, 'observation_time', coerce_observation_time(self.observation_time))

    @classmethod
    def from_report_text(cls, report_text: str, reference: Optional[datetime] = None) -> 'RawReport':
        """
        Build a RawReport, deriving the observation time from the DDHHMMZ group.

        Args:
            report_text: Report text; the datetime group must be its second token
            reference: Instant the report is known not to be later than (default: now, UTC)

        Raises:
            ValueError: If the report has no valid datetime group
        """
        tokens = report_text.split()
        if len(tokens) < 2:
            raise ValueError(f"Report too short to hold a datetime group: {report_text!r}")
        if reference is None:
            reference = datetime.now(timezone.utc)
        return cls(report_text, observation_time_from_group(tokens[1], reference))

    def parse(self, **kwargs):
        """Parse this report (kwargs are passed to MetarParser)."""
        from metar_parser.parsers.machine import MetarParser
        return MetarParser(**kwargs).parse(self.report_text, self.observation_time)
