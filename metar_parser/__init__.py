"""
METAR aviation weather report parser.

Parses whitespace-separated METAR reports (WMO and US variants, AUTO and
COR observations) into typed, unit-aware data structures.

The main public API includes:
- MetarParser / parse: Parse a report into a ParsedReport
- ParsedReport: The parsed report and its key/value projection
- RawReport: Report text plus observation time, as supplied by a fetcher
- ReportCollection: Batch parsing, filtering and DataFrame export
- ParseError and subclasses: Raised on missing or malformed mandatory groups

Example:
    from datetime import datetime
    from metar_parser import parse

    report = parse("EGLL 211650Z 24010KT CAVOK 17/12 Q1020", datetime(2024, 6, 21, 16, 50))
    report.to_dict()
"""

from metar_parser.exceptions import (
    MetarError,
    ParseError,
    MalformedLocationError,
    MalformedDateTimeError,
    MalformedTemperatureDewPointError,
    UnknownSkyConditionTypeError,
    UnexpectedTrailingTokensError,
    InvalidTransitionError,
)
from metar_parser.models import ParsedReport, ObserverMode
from metar_parser.tokenizer import TokenStream, tokenize
from metar_parser.parsers.machine import MetarParser, ParserState, parse
from metar_parser.raw import RawReport, observation_time_from_group
from metar_parser.collection import ReportCollection

__version__ = '0.1.0'
__all__ = [
    'MetarError',
    'ParseError',
    'MalformedLocationError',
    'MalformedDateTimeError',
    'MalformedTemperatureDewPointError',
    'UnknownSkyConditionTypeError',
    'UnexpectedTrailingTokensError',
    'InvalidTransitionError',
    'ParsedReport',
    'ObserverMode',
    'TokenStream',
    'tokenize',
    'MetarParser',
    'ParserState',
    'parse',
    'RawReport',
    'observation_time_from_group',
    'ReportCollection',
]
