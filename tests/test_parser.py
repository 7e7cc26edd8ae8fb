from __future__ import annotations

from datetime import datetime

import pytest

from anydate import ParserPolicy, parse, parse_silent, resolve
from anydate.errors import ConstructionMismatch, ParseError, UnexpectedStartChar


def test_policy_decides_ambiguous_numeric_date() -> None:
    assert parse("03/04/2014") == datetime(2014, 3, 4)
    assert parse("03/04/2014", ParserPolicy(prefer_month_first=False)) == datetime(2014, 4, 3)


def test_invalid_month_group_retries_day_first() -> None:
    res = resolve("30/04/2025")
    assert res.value == datetime(2025, 4, 30)
    assert res.pattern == "DD/MM/YYYY"
    assert res.prefer_month_first is False
    assert res.attempts == 2


def test_construction_mismatch_swaps_preference() -> None:
    res = resolve("04/30/2014", ParserPolicy(prefer_month_first=False))
    assert res.value == datetime(2014, 4, 30)
    assert res.pattern == "MM/DD/YYYY"
    assert res.prefer_month_first is True
    assert res.attempts == 2


def test_construction_mismatch_without_swap_raises() -> None:
    policy = ParserPolicy(prefer_month_first=False, swap_on_mismatch=False)
    with pytest.raises(ConstructionMismatch):
        resolve("04/30/2014", policy)


def test_impossible_date_raises_after_swap() -> None:
    with pytest.raises(ConstructionMismatch):
        parse("02/30/2014")


def test_ordinal_suffix_does_not_change_the_date() -> None:
    a = resolve("April 8th, 2009")
    b = resolve("April 8, 2009")
    assert a.value == b.value == datetime(2009, 4, 8)
    assert a.pattern == b.pattern


def test_weekday_prefix_parses() -> None:
    res = resolve("Tue 05 May 2020, 05:05:05")
    assert res.value == datetime(2020, 5, 5)
    assert res.text == "05 May 2020, 05:05:05"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("oct 7, 1970", datetime(1970, 10, 7)),
        ("oct 7, '70", datetime(1970, 10, 7)),
        ("sept. 28, 2017", datetime(2017, 9, 28)),
        ("03 February 2013", datetime(2013, 2, 3)),
        ("2013-Feb-03", datetime(2013, 2, 3)),
        ("29-Jun-2016", datetime(2016, 6, 29)),
        ("08.21.71", datetime(1971, 8, 21)),
        ("2006-01-02T15:04:05", datetime(2006, 1, 2)),
        ("May 8, 2009 5:57:51 PM", datetime(2009, 5, 8)),
        ("Monday, 02 Jan 2006 15:04:05 MST", datetime(2006, 1, 2)),
    ],
)
def test_parse_dates(text: str, expected: datetime) -> None:
    assert parse(text) == expected


def test_strict_parse_propagates_specific_error() -> None:
    with pytest.raises(UnexpectedStartChar):
        parse("#2014")


def test_parse_silent_returns_none() -> None:
    assert parse_silent("#2014") is None
    assert parse_silent("Tue") is None
    assert parse_silent("") is None
    assert parse_silent("oct 7, 1970") == datetime(1970, 10, 7)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        parse("3/123/2014")
    assert issubclass(ConstructionMismatch, ParseError)


def test_letters_after_the_date_stay_literal() -> None:
    assert parse_silent("Jul 4 2020 D-Day") == datetime(2020, 7, 4)

    res = resolve("April 8, 2009 M")
    assert res.value == datetime(2009, 4, 8)
    assert res.pattern == "MMMM D, YYYY M"
    assert res.attempts == 1
