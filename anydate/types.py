from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto


class ScanState(Enum):
    """What kind of token sequence the scanner has seen so far."""

    START = auto()
    DIGIT = auto()

    # 2006-01-02, 2013-Feb-03
    YEAR_DASH = auto()
    YEAR_DASH_DASH = auto()
    YEAR_DASH_DASH_WS = auto()
    YEAR_DASH_DASH_T = auto()
    YEAR_DASH_ALPHA_DASH = auto()

    # 29-Jun-2016, 03-31-2014
    DIGIT_DASH = auto()
    DIGIT_DASH_ALPHA = auto()
    DIGIT_DASH_ALPHA_DASH = auto()
    DIGIT_DASH_DIGIT = auto()
    DIGIT_DASH_DIGIT_DASH = auto()

    # 03/31/2005, 2014/02/24
    DIGIT_SLASH = auto()

    # 2014:03:31
    DIGIT_COLON = auto()
    DIGIT_COLON_COLON = auto()

    # 3.31.2014, 2014.05
    DIGIT_DOT = auto()
    DIGIT_DOT_DOT = auto()

    # 8 jan 2018, 18 January 2018
    DIGIT_WS = auto()
    DIGIT_WS_MONTH_YEAR = auto()
    DIGIT_WS_MONTH_LONG = auto()

    # oct 7, 1970 / October 7, 1970 / Mon, 02 Jan 2006
    ALPHA = auto()
    ALPHA_WS = auto()
    ALPHA_WS_DIGIT = auto()
    ALPHA_WS_DIGIT_MORE = auto()
    ALPHA_WS_DIGIT_MORE_WS = auto()
    ALPHA_WS_DIGIT_MORE_WS_YEAR = auto()
    ALPHA_WS_DIGIT_YEAR_POSSIBLE = auto()
    ALPHA_WS_MONTH = auto()
    ALPHA_WS_MORE = auto()
    ALPHA_WS_MONTH_MORE = auto()
    ALPHA_WS_MONTH_SUFFIX = auto()
    ALPHA_PERIOD_WS_DIGIT = auto()
    WEEKDAY_COMMA = auto()
    WEEKDAY_ABBR_COMMA = auto()


@dataclass
class Span:
    """Position and width of one date unit inside the scanned text.

    A zero length with a non-zero position means the start is known but the
    unit has not been closed by a separator yet.
    """

    pos: int = 0
    length: int = 0

    @property
    def is_open(self) -> bool:
        return self.pos > 0 and self.length == 0

    @property
    def end(self) -> int:
        return self.pos + self.length


@dataclass(frozen=True)
class InferredFormat:
    """Result of one successful inference run."""

    pattern: str
    text: str  # the scanned text after suffix/weekday rewrites
    year: Span
    month: Span
    day: Span
    restarts: int = 0

    @property
    def month_text(self) -> str:
        return self.text[self.month.pos : self.month.end]


@dataclass(frozen=True)
class ParseResult:
    """A constructed date plus the pattern and policy that produced it."""

    value: datetime
    pattern: str
    text: str
    prefer_month_first: bool
    attempts: int = 1
