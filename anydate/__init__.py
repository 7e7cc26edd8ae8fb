"""Infer the layout of a date string and parse it.

    >>> infer_format("oct 7, 1970")
    'MMM D, YYYY'
    >>> parse("30/04/2025").month
    4
"""

from .config import ParserPolicy
from .engine import infer, infer_format
from .errors import (
    ConstructionMismatch,
    InvalidUnitLength,
    ParseError,
    RestartLimitExceeded,
    UnexpectedCharAt,
    UnexpectedStartChar,
    UnsupportedSeparatorCombination,
)
from .parser import parse, parse_silent, resolve
from .types import InferredFormat, ParseResult, ScanState, Span
