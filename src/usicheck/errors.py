"""
Failures raised by the checksum engine.

Both kinds derive from `UsiError` (itself a `ValueError`) so callers can catch
either one, or both at once, and branch on the result.
"""

from __future__ import annotations


class UsiError(ValueError):
    """Base class for every identifier validation failure."""


class InvalidLength(UsiError):
    """The input is not the fixed length an operation requires."""

    def __init__(self, message: str, expected: int, actual: int) -> None:
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidCharacter(UsiError):
    """A symbol of the input is not part of the USI alphabet."""

    def __init__(self, message: str, symbol: str, position: int) -> None:
        super().__init__(message)
        self.symbol = symbol
        self.position = position
