"""Per-class accumulation of word counts over a training stream."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from .exceptions import VectorLengthError
from .models import FeatureRecord, Label

logger = logging.getLogger(__name__)


def add_vectors(a: Sequence[float], b: Sequence[float]) -> list[float]:
    """Element-wise sum of two equal-length vectors.

    Raises:
        VectorLengthError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise VectorLengthError(len(a), len(b))
    return [x + y for x, y in zip(a, b)]


class ClassAccumulator:
    """Running per-class sums of feature vectors.

    Both classes start with a zero vector of length ``word_set_size``; every
    training record adds its features into the totals of its own class.

    Args:
        word_set_size: Length of every feature vector (``K``).
    """

    def __init__(self, word_set_size: int) -> None:
        self.word_set_size = word_set_size
        self.class_word_totals: dict[Label, list[float]] = {
            label: [0.0] * word_set_size for label in Label
        }
        self.class_count: dict[Label, int] = {label: 0 for label in Label}

    @property
    def total_records(self) -> int:
        return sum(self.class_count.values())

    def add(self, record: FeatureRecord) -> None:
        """Fold one training record into its class totals."""
        self.class_word_totals[record.label] = add_vectors(
            self.class_word_totals[record.label], record.features
        )
        self.class_count[record.label] += 1

    def add_all(self, records: Iterable[FeatureRecord]) -> "ClassAccumulator":
        """Consume a whole training stream.

        Returns:
            Self (for method chaining).
        """
        for record in records:
            self.add(record)
        logger.info(
            f"Accumulated {self.total_records} training records "
            f"(spam={self.class_count[Label.SPAM]}, ham={self.class_count[Label.HAM]})."
        )
        return self
