"""Log-likelihood-ratio spam classifier.

Scores a feature vector ``X`` against a trained ProbabilityModel::

    log(P(spam|X) / P(ham|X)) = sum_i X[i] * (log P(i|spam) - log P(i|ham))
                                + log(#spam) - log(#ham)

A positive ratio predicts spam and a negative one predicts ham. An exact
zero is a tie and resolves to the configured ``tie_label`` (ham by default).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

from .accumulator import ClassAccumulator
from .config import FilterConfig
from .evaluation import EvaluationResult, evaluate
from .exceptions import VectorLengthError
from .models import FeatureRecord, Label
from .probability import ProbabilityModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    """Result of scoring a single feature record."""

    log_ratio: float
    predicted: Label
    is_tie: bool = False

    @property
    def is_spam(self) -> bool:
        return self.predicted is Label.SPAM

    def to_dict(self) -> dict:
        return {
            "log_ratio": round(self.log_ratio, 6),
            "predicted": self.predicted.value,
            "is_tie": self.is_tie,
        }


class SpamClassifier:
    """Applies a frozen ProbabilityModel to feature records.

    Args:
        model: Derived probability model.
        tie_label: Prediction when the log-likelihood ratio is exactly 0.
    """

    def __init__(self, model: ProbabilityModel, tie_label: Label = Label.HAM) -> None:
        self.model = model
        self.tie_label = tie_label
        self._weights = model.log_prob_diff

    def log_ratio(self, features: tuple[float, ...] | list[float]) -> float:
        """Compute the spam/ham log-likelihood ratio for a feature vector.

        Raises:
            VectorLengthError: If the vector length differs from the model's.
        """
        if len(features) != len(self._weights):
            raise VectorLengthError(len(self._weights), len(features))
        score = sum(x * w for x, w in zip(features, self._weights))
        return score + self.model.log_prior_ratio

    def classify(self, record: FeatureRecord) -> ClassificationResult:
        """Score one record and derive the binary prediction."""
        ratio = self.log_ratio(record.features)
        if ratio > 0:
            return ClassificationResult(log_ratio=ratio, predicted=Label.SPAM)
        if ratio < 0:
            return ClassificationResult(log_ratio=ratio, predicted=Label.HAM)
        logger.debug(f"Tie at log ratio 0, defaulting to {self.tie_label.value}.")
        return ClassificationResult(log_ratio=ratio, predicted=self.tie_label, is_tie=True)

    def predict(self, records: Iterable[FeatureRecord]) -> list[Label]:
        """Predict labels for a batch of records."""
        return [self.classify(r).predicted for r in records]


class SpamFilter:
    """High-level train/classify/evaluate pipeline.

    Example::

        spam_filter = SpamFilter(FilterConfig())
        spam_filter.train(read_records("training_set.data", config))

        result = spam_filter.evaluate(read_records("test_set.data", config))
        print(f"{result.accuracy:.2%}")

    Args:
        config: Filter configuration (``K``, offset, tie policy).
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()
        self._model: Optional[ProbabilityModel] = None
        self._classifier: Optional[SpamClassifier] = None

    @property
    def is_trained(self) -> bool:
        return self._classifier is not None

    @property
    def model(self) -> ProbabilityModel:
        if self._model is None:
            raise RuntimeError("Filter not trained. Call train() first.")
        return self._model

    def train(self, records: Iterable[FeatureRecord]) -> ProbabilityModel:
        """Accumulate a full training stream and derive the model.

        Raises:
            VectorLengthError: If a record does not have ``K`` features.
            DegenerateTrainingDataError: If a class has no records.
        """
        accumulator = ClassAccumulator(self.config.word_set_size).add_all(records)
        self._model = ProbabilityModel.from_accumulator(accumulator)
        self._classifier = SpamClassifier(self._model, tie_label=self.config.tie_label)
        return self._model

    def classify(self, record: FeatureRecord) -> ClassificationResult:
        return self._require_classifier().classify(record)

    def classify_batch(self, records: Iterable[FeatureRecord]) -> list[ClassificationResult]:
        classifier = self._require_classifier()
        return [classifier.classify(r) for r in records]

    def evaluate(self, records: Iterable[FeatureRecord]) -> EvaluationResult:
        """Score a labeled test stream and tally the confusion matrix."""
        return evaluate(self._require_classifier(), records)

    def _require_classifier(self) -> SpamClassifier:
        if self._classifier is None:
            raise RuntimeError("Filter not trained. Call train() first.")
        return self._classifier
