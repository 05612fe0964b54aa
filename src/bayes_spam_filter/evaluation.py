"""Confusion-matrix evaluation of a trained spam classifier."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .models import FeatureRecord, Label

if TYPE_CHECKING:
    from .classifier import SpamClassifier

logger = logging.getLogger(__name__)


@dataclass
class ConfusionMatrix:
    """2x2 tally of true label versus predicted label.

    Attributes:
        counts: Nested dict of {true_label: {predicted_label: count}}.
    """

    counts: dict[Label, dict[Label, int]] = field(
        default_factory=lambda: {t: {p: 0 for p in Label} for t in Label}
    )

    def add(self, true: Label, predicted: Label) -> None:
        self.counts[true][predicted] += 1

    def cell(self, true: Label, predicted: Label) -> int:
        return self.counts[true][predicted]

    @property
    def spam_as_spam(self) -> int:
        return self.counts[Label.SPAM][Label.SPAM]

    @property
    def spam_as_ham(self) -> int:
        return self.counts[Label.SPAM][Label.HAM]

    @property
    def ham_as_ham(self) -> int:
        return self.counts[Label.HAM][Label.HAM]

    @property
    def ham_as_spam(self) -> int:
        return self.counts[Label.HAM][Label.SPAM]

    def support(self, true: Label) -> int:
        """Number of records whose true label is ``true``."""
        return sum(self.counts[true].values())

    @property
    def total(self) -> int:
        return sum(self.support(label) for label in Label)

    @property
    def correct(self) -> int:
        return self.spam_as_spam + self.ham_as_ham

    def to_dict(self) -> dict:
        return {
            t.value: {p.value: n for p, n in row.items()} for t, row in self.counts.items()
        }


@dataclass
class EvaluationResult:
    """Outcome of scoring a labeled test stream."""

    confusion: ConfusionMatrix = field(default_factory=ConfusionMatrix)
    ties: int = 0

    @property
    def total(self) -> int:
        return self.confusion.total

    @property
    def accuracy(self) -> float:
        """Fraction of correct predictions (0.0 for an empty test set)."""
        n = self.total
        return self.confusion.correct / n if n > 0 else 0.0

    @property
    def precision(self) -> float:
        """Spam precision: spam_as_spam / everything predicted spam."""
        predicted_spam = self.confusion.spam_as_spam + self.confusion.ham_as_spam
        return self.confusion.spam_as_spam / predicted_spam if predicted_spam > 0 else 0.0

    @property
    def recall(self) -> float:
        """Spam recall: spam_as_spam / all true spam."""
        actual_spam = self.confusion.support(Label.SPAM)
        return self.confusion.spam_as_spam / actual_spam if actual_spam > 0 else 0.0

    @property
    def f1(self) -> float:
        p, r = self.precision, self.recall
        return 2 * p * r / (p + r) if (p + r) > 0 else 0.0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "spam": self.confusion.support(Label.SPAM),
            "ham": self.confusion.support(Label.HAM),
            "ham_as_ham": self.confusion.ham_as_ham,
            "spam_as_spam": self.confusion.spam_as_spam,
            "spam_as_ham": self.confusion.spam_as_ham,
            "ham_as_spam": self.confusion.ham_as_spam,
            "ties": self.ties,
            "accuracy": round(self.accuracy, 4),
            "precision": round(self.precision, 4),
            "recall": round(self.recall, 4),
            "f1": round(self.f1, 4),
        }

    def summary(self) -> str:
        """Human-readable summary of the evaluation."""
        c = self.confusion
        lines = [
            f"Test records: {self.total} "
            f"(spam={c.support(Label.SPAM)}, ham={c.support(Label.HAM)})",
            f"Ham predicted as ham: {c.ham_as_ham}",
            f"Spam predicted as spam: {c.spam_as_spam}",
            f"Spam predicted as ham: {c.spam_as_ham}",
            f"Ham predicted as spam: {c.ham_as_spam}",
            f"Accuracy: {self.accuracy:.2%}",
        ]
        return "\n".join(lines)


def evaluate(
    classifier: "SpamClassifier",
    records: Iterable[FeatureRecord],
) -> EvaluationResult:
    """Run every test record through the classifier and tally the outcomes.

    Args:
        classifier: Classifier built from a fully derived model.
        records: Labeled test records, consumed once.

    Returns:
        EvaluationResult holding the confusion matrix and derived metrics.
    """
    result = EvaluationResult()
    for record in records:
        outcome = classifier.classify(record)
        result.confusion.add(record.label, outcome.predicted)
        if outcome.is_tie:
            result.ties += 1

    logger.info(
        f"Evaluated {result.total} test records, accuracy {result.accuracy:.2%}."
    )
    return result
