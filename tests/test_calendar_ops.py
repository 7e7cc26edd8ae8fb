from __future__ import annotations

from datetime import datetime

import pytest

from anydate.calendar_ops import (
    construct_from_pattern,
    is_full_month_name,
    is_valid_numeric_month,
    is_weekday_name,
    pattern_to_strptime,
)
from anydate.errors import ConstructionMismatch


def test_numeric_month_range() -> None:
    assert is_valid_numeric_month("1")
    assert is_valid_numeric_month("09")
    assert is_valid_numeric_month("12")
    assert not is_valid_numeric_month("0")
    assert not is_valid_numeric_month("13")
    assert not is_valid_numeric_month("001")
    assert not is_valid_numeric_month("ab")
    assert not is_valid_numeric_month("")


def test_names_are_case_insensitive() -> None:
    assert is_full_month_name("September")
    assert is_full_month_name("may")
    assert not is_full_month_name("Sept")
    assert is_weekday_name("TUESDAY")
    assert is_weekday_name("tue")
    assert not is_weekday_name("Tues")


@pytest.mark.parametrize(
    "pattern, fmt",
    [
        ("MM/DD/YYYY", "%m/%d/%Y"),
        ("D MMMM YY", "%d %B %y"),
        ("MMM. D, 'YY", "%b. %d, '%y"),
        ("YYYY-MM-DDT15:04:05", "%Y-%m-%dT15:04:05"),
        ("MMM D, YYYY 5:57:51 PM", "%b %d, %Y 5:57:51 PM"),
        ("DD MMM YYYY 15:04:05 MST", "%d %b %Y 15:04:05 MST"),
        ("YYYY 100%", "%Y 100%%"),
    ],
)
def test_pattern_to_strptime(pattern: str, fmt: str) -> None:
    assert pattern_to_strptime(pattern) == fmt


def test_construct_from_pattern() -> None:
    assert construct_from_pattern("MMMM D, YYYY", "october 7, 1970") == datetime(1970, 10, 7)
    assert construct_from_pattern("DD/MM/YYYY", "30/04/2025") == datetime(2025, 4, 30)


def test_construct_rejects_invalid_dates() -> None:
    with pytest.raises(ConstructionMismatch) as ei:
        construct_from_pattern("MM/DD/YYYY", "30/04/2025")
    assert ei.value.pattern == "MM/DD/YYYY"
    assert ei.value.text == "30/04/2025"


def test_construct_needs_at_least_one_unit() -> None:
    with pytest.raises(ConstructionMismatch):
        construct_from_pattern("Tue", "Tue")


def test_token_runs_copied_from_text_stay_literal() -> None:
    assert pattern_to_strptime("MMMM D, YYYY M", "April 8, 2009 M") == "%B %d, %Y M"
    assert pattern_to_strptime("MMM D YYYY D-Day", "Jul 4 2020 D-Day") == "%b %d %Y D-Day"
    assert construct_from_pattern("DD MMMM YYYY 10:00 M", "03 February 2013 10:00 M") == datetime(2013, 2, 3)
