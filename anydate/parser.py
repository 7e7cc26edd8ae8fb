"""Parse a date string of unknown layout.

Inference runs with the month-first preference, then two cheap corrections:

1. the month group is numeric but not 1..12 ("30/04/2025"): re-infer day-first;
2. the pattern does not construct a valid date: flip the preference once more.
"""

from __future__ import annotations

import logging
from datetime import datetime

from .calendar_ops import construct_from_pattern, is_valid_numeric_month
from .config import ParserPolicy
from .engine import infer
from .errors import ConstructionMismatch, ParseError
from .types import ParseResult

log = logging.getLogger(__name__)


def resolve(text: str, policy: ParserPolicy | None = None) -> ParseResult:
    """Infer, disambiguate and construct. Raises ParseError subclasses."""

    policy = policy or ParserPolicy()
    prefer = policy.prefer_month_first
    attempts = 1

    inferred = infer(text, prefer, policy.max_restarts)

    month = inferred.month_text
    if prefer and month.isdigit() and not is_valid_numeric_month(month):
        log.debug("%r: %r is not a month, retrying day-first", text, month)
        prefer = False
        attempts += 1
        inferred = infer(text, prefer, policy.max_restarts)

    try:
        value = construct_from_pattern(inferred.pattern, inferred.text)
    except ConstructionMismatch:
        if not policy.swap_on_mismatch:
            raise
        # Swap month with day and retry.
        prefer = not prefer
        attempts += 1
        log.debug("%r: %r did not construct, retrying with prefer_month_first=%s", text, inferred.pattern, prefer)
        inferred = infer(text, prefer, policy.max_restarts)
        value = construct_from_pattern(inferred.pattern, inferred.text)

    return ParseResult(
        value=value,
        pattern=inferred.pattern,
        text=inferred.text,
        prefer_month_first=prefer,
        attempts=attempts,
    )


def parse(text: str, policy: ParserPolicy | None = None) -> datetime:
    """Parse `text` or raise the specific ParseError that stopped it."""
    return resolve(text, policy).value


def parse_silent(text: str, policy: ParserPolicy | None = None) -> datetime | None:
    """Parse `text`; None when no date could be determined."""
    try:
        return parse(text, policy)
    except ParseError as e:
        log.debug("unrecognized date %r: %s", text, e)
        return None
