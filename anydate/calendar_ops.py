"""Calendar helpers the scanner and the parser lean on.

Name recognition uses the calendar module's tables (C locale by default) and
construction goes through datetime.strptime, so both agree on what a month or
weekday name is.
"""

from __future__ import annotations

import calendar
import re
from datetime import datetime

from .errors import ConstructionMismatch

_FULL_MONTHS = {name.lower() for name in calendar.month_name if name}
_WEEKDAYS = {name.lower() for name in calendar.day_name} | {name.lower() for name in calendar.day_abbr}

STRPTIME_TOKENS = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "DD": "%d",
    "D": "%d",
}

# A token must not touch a letter on the left; on the right only the ISO "T"
# separator may follow it (2006-01-02T15:04). Keeps "PM" and "MST" literal.
TOKEN_RE = re.compile(r"(?<![^\W\d_])(Y+|M+|D+)(?![^\W\d_T])")
_ALPHA_RUN_RE = re.compile(r"[A-Za-z]+")


def is_valid_numeric_month(text: str) -> bool:
    if not (1 <= len(text) <= 2 and text.isascii() and text.isdigit()):
        return False
    return 1 <= int(text) <= 12


def is_full_month_name(text: str) -> bool:
    return text.strip().lower() in _FULL_MONTHS


def is_weekday_name(text: str) -> bool:
    return text.strip().lower() in _WEEKDAYS


def pattern_to_strptime(pattern: str, text: str | None = None) -> str:
    """Translate a Y/M/D pattern into a strptime format string.

    Everything outside recognised tokens is literal, so "%" is escaped. With
    `text`, a token run that equals the source text at the same offset was
    copied from the text (the "M" in "10:00 M") and stays literal.
    """
    out: list[str] = []
    last = 0
    shift = 0  # len(full month name) - len("MMMM") once MMMM has been passed
    for m in TOKEN_RE.finditer(pattern):
        run = m.group(1)
        directive = STRPTIME_TOKENS.get(run)
        if directive is None:
            continue
        if text is not None:
            t = m.start() + shift
            if text[t : t + len(run)] == run:
                continue
            if run == "MMMM":
                name = _ALPHA_RUN_RE.match(text, t)
                if name:
                    shift += len(name.group()) - len(run)
        out.append(pattern[last : m.start()].replace("%", "%%"))
        out.append(directive)
        last = m.end()
    out.append(pattern[last:].replace("%", "%%"))
    return "".join(out)


def construct_from_pattern(pattern: str, text: str) -> datetime:
    """Build a datetime from `text` laid out as `pattern`.

    Raises ConstructionMismatch when the text does not fit the pattern, e.g.
    a day group read as a month.
    """
    fmt = pattern_to_strptime(pattern, text)
    if "%" not in fmt.replace("%%", ""):
        # nothing but literals: strptime would happily return 1900-01-01
        raise ConstructionMismatch(pattern, text)
    try:
        return datetime.strptime(text, fmt)
    except (ValueError, re.error) as e:
        # re.error: the same directive twice
        raise ConstructionMismatch(pattern, text) from e
