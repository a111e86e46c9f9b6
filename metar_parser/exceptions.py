"""Exceptions raised while parsing METAR reports."""

from typing import Optional


class MetarError(Exception):
    """Base class for all errors raised by this package."""


class ParseError(MetarError):
    """
    A mandatory group did not match, or matched but was invalid.

    Attributes:
        token: The offending token (None when the report ran out of tokens)
        expected: Description of the grammar that was expected
    """

    expected_grammar = "group"

    def __init__(self, token: Optional[str], expected: Optional[str] = None):
        self.token = token
        self.expected = expected or self.expected_grammar
        super().__init__(f"Expecting {self.expected}, found '{token if token is not None else ''}'")


class MalformedLocationError(ParseError):
    expected_grammar = "location (ICAO code, e.g. 'EGLL')"


class MalformedDateTimeError(ParseError):
    expected_grammar = "datetime (DDHHMMZ)"


class MalformedTemperatureDewPointError(ParseError):
    expected_grammar = "temperature/dew point (e.g. '17/12', 'M02/M05')"


class UnknownSkyConditionTypeError(ParseError):
    expected_grammar = "sky condition type (CB, TCU or ///)"


class UnexpectedTrailingTokensError(ParseError):
    expected_grammar = "end of report"


class InvalidTransitionError(MetarError):
    """A state handler asked for a transition the automaton does not allow."""

    def __init__(self, source, target):
        self.source = source
        self.target = target
        super().__init__(f"Invalid transition from {source.name} to {target.name}")
