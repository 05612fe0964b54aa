"""Two-phase train-then-test batch job over corpus files.

The ``run_pipeline`` function is the main entry point. It reads the training
corpus to exhaustion, derives the probability model, then reads and scores
the test corpus, returning a ``PipelineReport`` for the report sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .classifier import SpamFilter
from .config import FilterConfig
from .evaluation import EvaluationResult
from .models import Label
from .parsers import ParseStats, read_records
from .probability import ProbabilityModel

logger = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    """Aggregate counters produced by one train/test run."""

    train_path: str
    test_path: str
    model: ProbabilityModel
    evaluation: EvaluationResult
    config: FilterConfig = field(default_factory=FilterConfig)
    train_stats: ParseStats = field(default_factory=ParseStats)
    test_stats: ParseStats = field(default_factory=ParseStats)

    @property
    def training_size(self) -> int:
        return self.model.total_records

    @property
    def training_spam(self) -> int:
        return self.model.class_count[Label.SPAM]

    @property
    def training_ham(self) -> int:
        return self.model.class_count[Label.HAM]

    @property
    def accuracy_percent(self) -> float:
        return self.evaluation.accuracy * 100

    def to_dict(self) -> dict:
        return {
            "config": self.config.to_dict(),
            "training": {
                "path": self.train_path,
                "total": self.training_size,
                "spam": self.training_spam,
                "ham": self.training_ham,
                "skipped": self.train_stats.skipped,
                "blank": self.train_stats.blank,
            },
            "test": {
                "path": self.test_path,
                "skipped": self.test_stats.skipped,
                "blank": self.test_stats.blank,
                **self.evaluation.to_dict(),
            },
            "accuracy_percent": round(self.accuracy_percent, 2),
        }

    def summary(self) -> str:
        lines = [
            f"The training set has {self.training_size} emails",
            f"Spam emails: {self.training_spam}",
            f"Ham emails: {self.training_ham}",
            self.evaluation.summary(),
        ]
        return "\n".join(lines)


def run_pipeline(
    train_path: str | Path,
    test_path: str | Path,
    config: FilterConfig | None = None,
) -> PipelineReport:
    """Train on one corpus file and evaluate on another.

    Args:
        train_path: Training corpus (one record per line).
        test_path: Held-out test corpus in the same format.
        config: Shared configuration for both phases.

    Returns:
        PipelineReport with training counts and the evaluation result.

    Raises:
        FileNotFoundError: If either corpus is missing (checked before any
            record is read).
        MalformedRecordError: On a bad line, unless ``skip_malformed``.
        DegenerateTrainingDataError: If a class has no training records.
    """
    config = config or FilterConfig()
    train_path, test_path = Path(train_path), Path(test_path)
    for path in (train_path, test_path):
        if not path.is_file():
            raise FileNotFoundError(f"Corpus file not found: {path}")

    spam_filter = SpamFilter(config)

    train_stats = ParseStats()
    logger.info(f"Training on {train_path}.")
    model = spam_filter.train(read_records(train_path, config, train_stats))

    test_stats = ParseStats()
    logger.info(f"Evaluating on {test_path}.")
    evaluation = spam_filter.evaluate(read_records(test_path, config, test_stats))

    return PipelineReport(
        train_path=str(train_path),
        test_path=str(test_path),
        model=model,
        evaluation=evaluation,
        config=config,
        train_stats=train_stats,
        test_stats=test_stats,
    )
