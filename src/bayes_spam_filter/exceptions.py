"""Exception types raised by the spam filter pipeline."""

from __future__ import annotations

from typing import Optional


class SpamFilterError(Exception):
    """Base class for all spam filter errors."""


class MalformedRecordError(SpamFilterError, ValueError):
    """A corpus line could not be parsed into a feature record."""

    def __init__(self, reason: str, line_number: Optional[int] = None) -> None:
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"Malformed record ({where}{reason})")


class VectorLengthError(SpamFilterError, ValueError):
    """Two feature vectors that must line up have different lengths."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Vector length mismatch: expected {expected}, got {actual}"
        )


class DegenerateTrainingDataError(SpamFilterError, ValueError):
    """Training data cannot produce a model (e.g. a class has no records)."""
