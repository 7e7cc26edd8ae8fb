from __future__ import annotations


class ParseError(ValueError):
    """Base class for every failure to infer or construct a date."""


class UnexpectedStartChar(ParseError):
    def __init__(self, char: str) -> None:
        super().__init__("Unexpected date start char.")
        self.char = char


class UnexpectedCharAt(ParseError):
    def __init__(self, position: int) -> None:
        super().__init__(f"Unexpected char at {position} position.")
        self.position = position


class UnsupportedSeparatorCombination(ParseError):
    """A known layout the scanner does not handle (space after a slash date)."""

    def __init__(self, position: int) -> None:
        super().__init__("Not implemented case.")
        self.position = position


class InvalidUnitLength(ParseError):
    def __init__(self, unit: str, length: int) -> None:
        super().__init__(f"Unexpected {unit} unit length. Got {length}.")
        self.unit = unit
        self.length = length


class RestartLimitExceeded(ParseError):
    def __init__(self, limit: int) -> None:
        super().__init__(f"Scan restarted more than {limit} times.")
        self.limit = limit


class ConstructionMismatch(ParseError):
    """The inferred pattern does not describe the text it was inferred from."""

    def __init__(self, pattern: str, text: str) -> None:
        super().__init__(f"Pattern {pattern!r} does not match {text!r}.")
        self.pattern = pattern
        self.text = text
