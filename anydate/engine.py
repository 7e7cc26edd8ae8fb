"""Character-scanning state machine that infers a date pattern.

The scanner walks the text once, one char at a time, and writes Y/M/D tokens
into a copy of the text as soon as a unit is delimited. Some transitions rewrite
the text itself (ordinal suffixes, leading weekday names, "sept."); those throw
the current scan away and start again on the rewritten text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .buffer import CharBuffer
from .calendar_ops import is_full_month_name, is_weekday_name
from .errors import (
    InvalidUnitLength,
    RestartLimitExceeded,
    UnexpectedCharAt,
    UnexpectedStartChar,
    UnsupportedSeparatorCombination,
)
from .types import InferredFormat, ScanState, Span

log = logging.getLogger(__name__)

DASHES = ("-", "−")

# first letter of an ordinal suffix -> accepted second letters
ORDINAL_SUFFIXES = {
    "s": ("t", "T"),
    "n": ("d", "D"),
    "r": ("d", "D"),
    "t": ("h", "H"),
}

# " 31, 2018" is the longest tail a short "<Month> <day>, <year>" can have
SHORT_MONTH_TAIL = 10

# " Sep": anything longer between the day and the year is a full month name
ABBR_MONTH_WIDTH = len(" Sep")


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_alpha(ch: str) -> bool:
    return "a" <= ch <= "z" or "A" <= ch <= "Z"


class _StartOver(Exception):
    """Raised by a transition that rewrote the buffer."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class _Scan:
    """A single pass of the state machine over one buffer."""

    def __init__(self, buf: CharBuffer, prefer_month_first: bool) -> None:
        self.buf = buf
        self.prefer_month_first = prefer_month_first
        self.state = ScanState.START
        self.pattern = list(str(buf))
        self.year = Span()
        self.month = Span()
        self.day = Span()
        self.first_part_len = 0
        self.full_month = ""
        self.skip_pos = 0
        self.i = 0

        self.handlers: dict[ScanState, Callable[[str], None]] = {
            ScanState.START: self._start,
            ScanState.DIGIT: self._digit,
            ScanState.YEAR_DASH: self._year_dash,
            ScanState.YEAR_DASH_DASH: self._year_dash_dash,
            ScanState.YEAR_DASH_DASH_WS: self._passthrough,
            ScanState.YEAR_DASH_DASH_T: self._passthrough,
            ScanState.YEAR_DASH_ALPHA_DASH: self._year_dash_alpha_dash,
            ScanState.DIGIT_DASH: self._digit_dash,
            ScanState.DIGIT_DASH_ALPHA: self._digit_dash_alpha,
            ScanState.DIGIT_DASH_ALPHA_DASH: self._tail,
            ScanState.DIGIT_DASH_DIGIT: self._digit_dash_digit,
            ScanState.DIGIT_DASH_DIGIT_DASH: self._tail,
            ScanState.DIGIT_SLASH: self._digit_slash,
            ScanState.DIGIT_COLON: self._digit_colon,
            ScanState.DIGIT_COLON_COLON: self._tail,
            ScanState.DIGIT_DOT: self._digit_dot,
            ScanState.DIGIT_DOT_DOT: self._tail,
            ScanState.DIGIT_WS: self._digit_ws,
            ScanState.DIGIT_WS_MONTH_YEAR: self._digit_ws_month_year,
            ScanState.DIGIT_WS_MONTH_LONG: self._tail,
            ScanState.ALPHA: self._alpha,
            ScanState.ALPHA_WS: self._alpha_ws,
            ScanState.ALPHA_WS_DIGIT: self._alpha_ws_digit,
            ScanState.ALPHA_WS_DIGIT_MORE: self._alpha_ws_digit_more,
            ScanState.ALPHA_WS_DIGIT_MORE_WS: self._alpha_ws_digit_more_ws,
            ScanState.ALPHA_WS_DIGIT_MORE_WS_YEAR: self._passthrough,
            ScanState.ALPHA_WS_DIGIT_YEAR_POSSIBLE: self._alpha_ws_digit_year_possible,
            ScanState.ALPHA_WS_MONTH: self._alpha_ws_month,
            ScanState.ALPHA_WS_MORE: self._alpha_ws_more,
            ScanState.ALPHA_WS_MONTH_MORE: self._tail,
            ScanState.ALPHA_WS_MONTH_SUFFIX: self._alpha_ws_month_suffix,
            ScanState.ALPHA_PERIOD_WS_DIGIT: self._alpha_period_ws_digit,
            ScanState.WEEKDAY_COMMA: self._weekday_comma,
            ScanState.WEEKDAY_ABBR_COMMA: self._weekday_comma,
        }

    def run(self) -> str:
        if not len(self.buf):
            raise UnexpectedStartChar("")
        while self.i < len(self.buf):
            self.handlers[self.state](self.buf[self.i])
            self.i += 1
        return self._finalize(len(self.buf))

    # Unit writers

    def _write(self, pos: int, token: str) -> None:
        self.pattern[pos : pos + len(token)] = list(token)

    def _set_year(self) -> None:
        if self.year.length not in (2, 4):
            raise InvalidUnitLength("year", self.year.length)
        self._write(self.year.pos, "Y" * self.year.length)

    def _set_month(self) -> None:
        if not 1 <= self.month.length <= 4:
            raise InvalidUnitLength("month", self.month.length)
        self._write(self.month.pos, "M" * self.month.length)

    def _set_day(self) -> None:
        if self.day.length not in (1, 2):
            raise InvalidUnitLength("day", self.day.length)
        self._write(self.day.pos, "D" * self.day.length)

    def _close_open_span(self, i: int) -> None:
        """Close whichever unit is still waiting for its end at `i`."""
        if self.year.is_open:
            self.year.length = i - self.year.pos
            self._set_year()
        elif self.month.is_open:
            self.month.length = i - self.month.pos
            self._set_month()
        elif self.day.is_open:
            self.day.length = i - self.day.pos
            self._set_day()

    def _close_alpha_month(self, i: int) -> None:
        """Close a month written as a word; full names become MMMM at the end."""
        self.month.length = i - self.month.pos
        word = self.buf.slice(self.month.pos, self.month.length)
        if self.month.length > 3 and is_full_month_name(word):
            self.full_month = word.lower()
            return
        self._set_month()

    def _pivot_first_group(self, length: int) -> None:
        """Decide whether a leading 1-2 digit group is the month or the day."""
        if self.prefer_month_first and self.month.length == 0:
            self.month = Span(0, length)
            self.day.pos = length + 1
            self._set_month()
        elif self.day.length == 0:
            self.day = Span(0, length)
            self.month.pos = length + 1
            self._set_day()

    def _close_second_group(self, i: int) -> None:
        """Second numeric separator: close the middle group."""
        if self.year.length > 0:
            if self.month.length > 0:
                raise UnexpectedCharAt(i)
            # 2014/07/10
            self.month.length = i - self.month.pos
            self.day.pos = i + 1
            self._set_month()
        elif self.month.length > 0:
            if self.day.length > 0:
                raise UnexpectedCharAt(i)
            # 07/10/2014
            self.day.length = i - self.day.pos
            self.year.pos = i + 1
            self._set_day()
        else:
            # 10/07/2014
            self.month.length = i - self.month.pos
            self.year.pos = i + 1
            self._set_month()

    def _strip_ordinal_suffix(self, i: int, ch: str) -> None:
        """Splice out "st"/"nd"/"rd"/"th" at `i` and restart, or fail."""
        seconds = ORDINAL_SUFFIXES.get(ch.lower())
        if not seconds or not self.buf.next_char_is(i, *seconds):
            raise UnexpectedCharAt(i)
        self.buf.remove_range(i, 2)
        raise _StartOver(f"ordinal suffix at {i}")

    # States

    def _start(self, ch: str) -> None:
        if _is_digit(ch):
            self.state = ScanState.DIGIT
        elif _is_alpha(ch):
            self.state = ScanState.ALPHA
        else:
            raise UnexpectedStartChar(ch)

    def _digit(self, ch: str) -> None:
        i = self.i
        if _is_digit(ch):
            return

        if ch in DASHES:
            # 2006-01-02, 2013-Feb-03 / 29-Jun-2016, 03-31-2014
            if i == 4:
                self.state = ScanState.YEAR_DASH
                self.year = Span(0, i)
                self.month.pos = i + 1
                self._set_year()
            else:
                self.state = ScanState.DIGIT_DASH
        elif ch == "/":
            # 03/31/2005, 2014/02/24
            self.state = ScanState.DIGIT_SLASH
            if i == 4:
                self.year = Span(0, i)
                self.month.pos = i + 1
                self._set_year()
            else:
                self._pivot_first_group(i)
        elif ch == ":":
            # 2014:03:31
            self.state = ScanState.DIGIT_COLON
            if i == 4:
                self.year = Span(0, i)
                self.month.pos = i + 1
                self._set_year()
            elif self.month.length == 0:
                self.month = Span(0, i)
                self.day.pos = i + 1
                self._set_month()
        elif ch == ".":
            # 3.31.2014, 08.21.71, 2014.05
            self.state = ScanState.DIGIT_DOT
            if i == 4:
                self.year = Span(0, i)
                self.month.pos = i + 1
                self._set_year()
            else:
                self._pivot_first_group(i)
        elif ch == " ":
            # 18 January 2018, 8 jan 2018, 12 Feb 2006, 19:17
            self.state = ScanState.DIGIT_WS
            self.day = Span(0, i)
        elif _is_alpha(ch):
            # 8th May 2020
            self._strip_ordinal_suffix(i, ch)
        else:
            raise UnexpectedCharAt(i)

        self.first_part_len = i

    def _year_dash(self, ch: str) -> None:
        # 2006-01-02 / 2013-Feb-03
        if ch in DASHES:
            self.month.length = self.i - self.month.pos
            self.day.pos = self.i + 1
            self.state = ScanState.YEAR_DASH_DASH
            self._set_month()
        elif _is_alpha(ch):
            self.state = ScanState.YEAR_DASH_ALPHA_DASH
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _year_dash_dash(self, ch: str) -> None:
        # 2013-04-01 22:43:22 / 2006-01-02T15:04:05Z07:00
        if ch == " ":
            self._close_open_span(self.i)
            self.state = ScanState.YEAR_DASH_DASH_WS
        elif ch in ("T", "t"):
            self._close_open_span(self.i)
            self.state = ScanState.YEAR_DASH_DASH_T
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _year_dash_alpha_dash(self, ch: str) -> None:
        # 2013-Feb-03
        if ch in DASHES and self.month.length == 0:
            self._close_alpha_month(self.i)
            self.day.pos = self.i + 1
        elif ch == " " and self.day.is_open:
            self._close_open_span(self.i)
            self.state = ScanState.YEAR_DASH_DASH_WS

    def _digit_dash(self, ch: str) -> None:
        if _is_alpha(ch):
            # 13-Feb-03, 29-Jun-2016
            self.day = Span(0, self.first_part_len)
            self._set_day()
            self.month.pos = self.i
            self.state = ScanState.DIGIT_DASH_ALPHA
        elif _is_digit(ch):
            # 03-31-2014
            self._pivot_first_group(self.first_part_len)
            self.state = ScanState.DIGIT_DASH_DIGIT
        else:
            raise UnexpectedCharAt(self.i)

    def _digit_dash_alpha(self, ch: str) -> None:
        if ch in DASHES:
            self._close_alpha_month(self.i)
            self.year.pos = self.i + 1
            self.state = ScanState.DIGIT_DASH_ALPHA_DASH
        elif not _is_alpha(ch):
            raise UnexpectedCharAt(self.i)

    def _digit_dash_digit(self, ch: str) -> None:
        if ch in DASHES:
            self._close_second_group(self.i)
            self.state = ScanState.DIGIT_DASH_DIGIT_DASH
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _digit_slash(self, ch: str) -> None:
        # 03/19/2012, 3/1/2014, 2014/07/10
        if ch == " ":
            raise UnsupportedSeparatorCombination(self.i)
        if ch == "/":
            self._close_second_group(self.i)
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _digit_colon(self, ch: str) -> None:
        if ch == ":":
            self._close_second_group(self.i)
            self.state = ScanState.DIGIT_COLON_COLON
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _digit_dot(self, ch: str) -> None:
        # the second period: 3.31.2014, 2018.09.30
        if ch == ".":
            self._close_second_group(self.i)
            self.state = ScanState.DIGIT_DOT_DOT
        elif not _is_digit(ch):
            raise UnexpectedCharAt(self.i)

    def _digit_ws(self, ch: str) -> None:
        # 18 January 2018, 8 jan 18, 02 Jan 2018 23:59
        i = self.i
        if ch == " ":
            self.year.pos = i + 1
            self.day = Span(0, self.first_part_len)
            self._set_day()

            if i > self.day.length + ABBR_MONTH_WIDTH:
                # month span is sized at the end, once the name is checked
                self.state = ScanState.DIGIT_WS_MONTH_LONG
            else:
                self.month = Span(self.day.length + 1, i - self.day.length - 1)
                self._set_month()
                self.state = ScanState.DIGIT_WS_MONTH_YEAR
        elif not (_is_alpha(ch) or _is_digit(ch)):
            raise UnexpectedCharAt(i)

    def _digit_ws_month_year(self, ch: str) -> None:
        # 12 Feb 2006, 19:17
        if ch == ",":
            self._close_open_span(self.i)
            self.i += 1
        elif ch == " ":
            self._close_open_span(self.i)

    def _alpha(self, ch: str) -> None:
        i = self.i
        if _is_alpha(ch):
            return

        if ch == " ":
            word = self.buf.slice(0, i).lower()
            if i > 3 and is_full_month_name(word):
                # April 8, 2009 / January 02, 2006, 15:04:05
                self.full_month = word
                self.month = Span(0, i)
                self.day.pos = i + 1
                if len(self.buf) - i < SHORT_MONTH_TAIL:
                    self.state = ScanState.ALPHA_WS_MONTH
                else:
                    self.state = ScanState.ALPHA_WS_MORE
            elif is_weekday_name(word):
                # Tue 05 May 2020, Mon Jan  2 15:04:05 2006
                self.buf.drop_prefix(i + 1)
                raise _StartOver(f"weekday {word!r}")
            elif i == 3:
                # oct 7, 1970 / May 8 17:57:51 2009
                self.state = ScanState.ALPHA_WS
            else:
                raise UnexpectedCharAt(i)
        elif ch == ",":
            # Monday, 02 Jan 2006 / Mon, 02-Jan-06
            if not is_weekday_name(self.buf.slice(0, i)):
                raise UnexpectedCharAt(i)
            self.state = ScanState.WEEKDAY_ABBR_COMMA if i == 3 else ScanState.WEEKDAY_COMMA
            self.skip_pos = i + 1
        elif ch == ".":
            # jan. 28, 2017 / sept. 28, 2017
            if i == 3:
                self.month = Span(0, i)
                self._set_month()
                self.state = ScanState.ALPHA_PERIOD_WS_DIGIT
            elif i == 4:
                self.buf.remove_range(3, 1)
                raise _StartOver("four letter month abbreviation")
            else:
                raise UnexpectedCharAt(i)
        else:
            raise UnexpectedCharAt(i)

    def _weekday_comma(self, ch: str) -> None:
        if ch.isspace():
            self.skip_pos = self.i + 1
            return
        self.buf.drop_prefix(self.skip_pos)
        raise _StartOver("weekday before comma")

    def _alpha_ws(self, ch: str) -> None:
        # oct 1, 1970 / May  8 17:57:51 2009
        if _is_digit(ch):
            self.month = Span(0, 3)
            self.day.pos = self.i
            self._set_month()
            self.state = ScanState.ALPHA_WS_DIGIT
        elif ch != " ":
            raise UnexpectedCharAt(self.i)

    def _alpha_ws_digit(self, ch: str) -> None:
        # May 8, 2009 / May 8 2009 / oct. 7, 1970 / May 8th, 2009
        i = self.i
        if ch == ",":
            self.day.length = i - self.day.pos
            self._set_day()
            self.state = ScanState.ALPHA_WS_DIGIT_MORE
        elif ch == " ":
            self.day.length = i - self.day.pos
            self.year.pos = i + 1
            self._set_day()
            self.state = ScanState.ALPHA_WS_DIGIT_YEAR_POSSIBLE
        elif _is_alpha(ch):
            self.state = ScanState.ALPHA_WS_MONTH_SUFFIX
            self.i -= 1
        elif not _is_digit(ch):
            raise UnexpectedCharAt(i)

    def _alpha_ws_digit_more(self, ch: str) -> None:
        # oct 1, 1970 / oct 7,1970
        if ch == " ":
            self.year.pos = self.i + 1
            self.state = ScanState.ALPHA_WS_DIGIT_MORE_WS
        elif _is_digit(ch) or ch == "'":
            self.state = ScanState.ALPHA_WS_DIGIT_MORE_WS
            self.i -= 1
        else:
            raise UnexpectedCharAt(self.i)

    def _alpha_ws_digit_more_ws(self, ch: str) -> None:
        # oct 7, '70 / May 8, 2009 5:57:51 PM / May 05, 2005, 05:05:05
        i = self.i
        if ch == "'":
            self.year.pos = i + 1
        elif ch in (" ", ","):
            self.year.length = i - self.year.pos
            self._set_year()
            self.state = ScanState.ALPHA_WS_DIGIT_MORE_WS_YEAR
        elif _is_digit(ch):
            if self.year.pos == 0:
                self.year.pos = i
        else:
            raise UnexpectedCharAt(i)

    def _alpha_ws_digit_year_possible(self, ch: str) -> None:
        # May 8 2009 5:57:51 PM / May 8 17:57:51 2009 / Jan 02 15:04:05 -0700 2006
        i = self.i
        if self.year.length:
            return
        if ch == ":":
            # that group was a time of day, the year comes later
            self.year.pos = 0
        elif ch in (" ", ","):
            if self.year.pos == 0:
                if ch == " ":
                    self.year.pos = i + 1
                return
            group = self.buf.slice(self.year.pos, i - self.year.pos)
            if not group:
                if ch == ",":
                    raise UnexpectedCharAt(i)
                self.year.pos = i + 1
            elif all(_is_digit(c) for c in group):
                self._close_open_span(i)
            else:
                # zone offset or name, not the year
                self.year.pos = i + 1 if ch == " " else 0

    def _alpha_ws_month(self, ch: str) -> None:
        # April 8, 2009 / April 8 2009 / April 8th, 2009
        i = self.i
        if ch in (" ", ","):
            if self.day.length == 0:
                self.day.length = i - self.day.pos
                self._set_day()
        elif ch.lower() in ORDINAL_SUFFIXES:
            self.state = ScanState.ALPHA_WS_MONTH_SUFFIX
            self.i -= 1
        elif ch == "'":
            if self.day.length > 0 and self.year.pos == 0:
                self.year.pos = i + 1
        elif self.day.length > 0 and self.year.pos == 0:
            self.year.pos = i

    def _alpha_ws_more(self, ch: str) -> None:
        # January 02, 2006, 15:04:05 / January 2nd 2006, 15:04:05
        i = self.i
        if ch == ",":
            self.day.length = i - self.day.pos
            self._set_day()
            if self.buf.next_char_is(i, " "):
                self.year.pos = i + 2
                self.i += 1
            else:
                self.year.pos = i + 1
            self.state = ScanState.ALPHA_WS_MONTH_MORE
        elif ch == " ":
            self.day.length = i - self.day.pos
            self.year.pos = i + 1
            self._set_day()
            self.state = ScanState.ALPHA_WS_MONTH_MORE
        elif _is_alpha(ch):
            self.state = ScanState.ALPHA_WS_MONTH_SUFFIX
            self.i -= 1
        elif not _is_digit(ch):
            raise UnexpectedCharAt(i)

    def _alpha_ws_month_suffix(self, ch: str) -> None:
        # April 8th, 2009
        self._strip_ordinal_suffix(self.i, ch)

    def _alpha_period_ws_digit(self, ch: str) -> None:
        # oct. 7, '70
        if _is_digit(ch):
            self.day.pos = self.i
            self.state = ScanState.ALPHA_WS_DIGIT
        elif ch != " ":
            raise UnexpectedCharAt(self.i)

    def _tail(self, ch: str) -> None:
        """After the last separator: the first space or comma ends the date."""
        if ch in (" ", ","):
            self._close_open_span(self.i)

    def _passthrough(self, ch: str) -> None:
        pass

    # Finalization

    def _finalize(self, end: int) -> str:
        if self.year.pos > 0:
            if self.year.length == 0:
                self.year.length = end - self.year.pos
            self._set_year()

        if self.month.is_open:
            self.month.length = end - self.month.pos
            self._set_month()

        if self.day.is_open:
            self.day.length = end - self.day.pos
            self._set_day()

        if self.state is ScanState.YEAR_DASH_ALPHA_DASH and self.day.pos > 0:
            # 2013-Feb-03, 2013-Feb-3
            self.day.length = end - self.day.pos
            self._set_day()
        elif self.state is ScanState.DIGIT_WS_MONTH_LONG:
            # 18 January 2018, 8 January 2018
            self.month = Span(self.day.length + 1, self.year.pos - self.day.length - 2)
            word = self.buf.slice(self.month.pos, self.month.length)
            if not is_full_month_name(word):
                raise InvalidUnitLength("month", self.month.length)
            self.full_month = word.lower()

        if self.full_month:
            # goes last: MMMM may be shorter than the name it replaces
            pos = self.month.pos
            self.pattern[pos : pos + len(self.full_month)] = list("MMMM")

        return "".join(self.pattern)


def infer(text: str, prefer_month_first: bool = True, max_restarts: int | None = None) -> InferredFormat:
    """Infer the pattern of `text`.

    Transitions that rewrite the text restart the scan from scratch on the
    rewritten buffer. Every rewrite shortens it, and the number of restarts
    is additionally capped by `max_restarts` (default: length of the text).
    """
    text = text.strip()
    limit = len(text) if max_restarts is None else max_restarts
    buf = CharBuffer(text)
    restarts = 0

    while True:
        scan = _Scan(buf, prefer_month_first)
        try:
            pattern = scan.run()
        except _StartOver as so:
            restarts += 1
            log.debug("restart %d (%s): %r", restarts, so.reason, str(buf))
            if restarts > limit:
                raise RestartLimitExceeded(limit) from None
            continue

        return InferredFormat(
            pattern=pattern,
            text=str(buf),
            year=scan.year,
            month=scan.month,
            day=scan.day,
            restarts=restarts,
        )


def infer_format(text: str, prefer_month_first: bool = True) -> str:
    """Return only the inferred pattern, e.g. "MMM D, YYYY"."""
    return infer(text, prefer_month_first).pattern
