"""Outcome of applying a group grammar to the front of the token stream."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from metar_parser.exceptions import ParseError


class MatchStatus(Enum):
    NO_MATCH = "no_match"
    MATCHED = "matched"
    INVALID = "invalid"


@dataclass(frozen=True)
class GroupMatch:
    """
    Result of a group grammar.

    Three outcomes are possible:
    - no match: the tokens are not this group; nothing is consumed
    - matched: ``value`` holds the parsed group, ``consumed`` the token count
    - invalid: the syntax was recognized but the content is not valid;
      ``error`` holds the exception the caller should raise
    """

    status: MatchStatus
    value: Any = None
    consumed: int = 0
    error: Optional[ParseError] = None

    @classmethod
    def no_match(cls) -> 'GroupMatch':
        return cls(MatchStatus.NO_MATCH)

    @classmethod
    def matched(cls, value: Any, consumed: int = 1) -> 'GroupMatch':
        return cls(MatchStatus.MATCHED, value=value, consumed=consumed)

    @classmethod
    def invalid(cls, error: ParseError) -> 'GroupMatch':
        return cls(MatchStatus.INVALID, error=error)

    @property
    def is_match(self) -> bool:
        return self.status == MatchStatus.MATCHED

    @property
    def is_invalid(self) -> bool:
        return self.status == MatchStatus.INVALID

    def __bool__(self) -> bool:
        return self.is_match
