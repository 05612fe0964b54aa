"""Data models for spam filtering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Label(str, Enum):
    """Binary email labels.

    On the wire a spam email is encoded as ``0`` and a ham email as ``1``.
    """

    SPAM = "spam"
    HAM = "ham"

    @classmethod
    def from_code(cls, code: int) -> "Label":
        """Map a wire label code (0 = spam, 1 = ham) to a Label."""
        if code == 0:
            return cls.SPAM
        if code == 1:
            return cls.HAM
        raise ValueError(f"Unknown label code: {code!r} (expected 0 or 1)")

    @property
    def code(self) -> int:
        return 0 if self is Label.SPAM else 1

    @property
    def other(self) -> "Label":
        return Label.HAM if self is Label.SPAM else Label.SPAM


@dataclass(frozen=True)
class FeatureRecord:
    """One parsed email: smoothed word frequencies plus its label."""

    features: tuple[float, ...]
    label: Label

    @property
    def total_words(self) -> float:
        """Sum of the (offset-adjusted) word frequencies."""
        return sum(self.features)

    @property
    def is_spam(self) -> bool:
        return self.label is Label.SPAM

    def __len__(self) -> int:
        return len(self.features)

    def to_dict(self) -> dict:
        return {
            "features": list(self.features),
            "label": self.label.value,
            "total_words": self.total_words,
        }
