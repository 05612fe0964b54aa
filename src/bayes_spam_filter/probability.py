"""Naive Bayes probability model derived from accumulated word counts.

For each class ``c`` and word ``i``::

    P(word i | c) = class_word_totals[c][i] / sum_j class_word_totals[c][j]

The model stores these as natural logs, together with the log-prior ratio
``log(#spam) - log(#ham)``. Derivation happens exactly once, after the whole
training stream has been accumulated; the resulting model is immutable.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from .accumulator import ClassAccumulator
from .exceptions import DegenerateTrainingDataError
from .models import Label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbabilityModel:
    """Frozen per-class word log-probabilities and class counts."""

    class_word_totals: Mapping[Label, tuple[float, ...]]
    class_count: Mapping[Label, int]
    class_log_prob: Mapping[Label, tuple[float, ...]]
    log_prior_ratio: float

    @property
    def word_set_size(self) -> int:
        return len(self.class_log_prob[Label.SPAM])

    @property
    def total_records(self) -> int:
        return sum(self.class_count.values())

    @property
    def class_log_prior(self) -> dict[Label, float]:
        """log(P(class)) for each class."""
        n_total = self.total_records
        return {
            label: math.log(count / n_total) for label, count in self.class_count.items()
        }

    @property
    def log_prob_diff(self) -> tuple[float, ...]:
        """Per-word weight ``log P(i|spam) - log P(i|ham)``."""
        return tuple(
            s - h
            for s, h in zip(self.class_log_prob[Label.SPAM], self.class_log_prob[Label.HAM])
        )

    @classmethod
    def from_accumulator(cls, accumulator: ClassAccumulator) -> "ProbabilityModel":
        """Derive the model from a fully consumed training stream."""
        return derive_model(accumulator.class_word_totals, accumulator.class_count)

    def most_informative_features(
        self,
        label: Label = Label.SPAM,
        top_n: int = 10,
    ) -> list[tuple[int, float]]:
        """Return the word indices that most favour ``label`` over the other class.

        Args:
            label: Target class.
            top_n: Number of word indices to return.

        Returns:
            List of (word_index, log_likelihood_ratio) tuples, sorted by
            ratio (descending).
        """
        target = self.class_log_prob[label]
        other = self.class_log_prob[label.other]
        ratios = [(i, round(t - o, 4)) for i, (t, o) in enumerate(zip(target, other))]
        ratios.sort(key=lambda x: x[1], reverse=True)
        return ratios[:top_n]

    def to_dict(self) -> dict:
        return {
            "word_set_size": self.word_set_size,
            "class_count": {label.value: n for label, n in self.class_count.items()},
            "log_prior_ratio": self.log_prior_ratio,
            "class_log_prob": {
                label.value: list(lp) for label, lp in self.class_log_prob.items()
            },
        }


def derive_model(
    class_word_totals: Mapping[Label, Sequence[float]],
    class_count: Mapping[Label, int],
) -> ProbabilityModel:
    """Turn per-class word totals and record counts into a ProbabilityModel.

    Args:
        class_word_totals: Smoothed word totals per class.
        class_count: Number of training records per class.

    Returns:
        The derived, immutable ProbabilityModel.

    Raises:
        DegenerateTrainingDataError: If a class has no training records or a
            word total that is not strictly positive.
    """
    class_log_prob: dict[Label, tuple[float, ...]] = {}

    for label in Label:
        count = class_count.get(label, 0)
        if count <= 0:
            raise DegenerateTrainingDataError(
                f"No training records for class '{label.value}'; "
                "at least one record per class is required."
            )
        totals = class_word_totals[label]
        total = sum(totals)
        if total <= 0 or any(t <= 0 for t in totals):
            raise DegenerateTrainingDataError(
                f"Word totals for class '{label.value}' must be strictly positive."
            )
        if not math.isfinite(total):
            raise DegenerateTrainingDataError(
                f"Word totals for class '{label.value}' overflow; "
                "frequencies are too large to normalize."
            )
        probs = [t / total for t in totals]
        if any(p <= 0 for p in probs):
            raise DegenerateTrainingDataError(
                f"Word probabilities for class '{label.value}' underflow to zero."
            )
        class_log_prob[label] = tuple(math.log(p) for p in probs)

    log_prior_ratio = math.log(class_count[Label.SPAM]) - math.log(class_count[Label.HAM])
    logger.debug(f"Derived model with log prior ratio {log_prior_ratio:.4f}.")

    return ProbabilityModel(
        class_word_totals={label: tuple(class_word_totals[label]) for label in Label},
        class_count={label: class_count[label] for label in Label},
        class_log_prob=class_log_prob,
        log_prior_ratio=log_prior_ratio,
    )
