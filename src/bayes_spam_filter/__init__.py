"""Bayesian Spam Filter -- Naive Bayes over word-frequency feature vectors."""

__version__ = "0.1.0"

from .accumulator import ClassAccumulator, add_vectors
from .classifier import ClassificationResult, SpamClassifier, SpamFilter
from .config import FilterConfig
from .evaluation import ConfusionMatrix, EvaluationResult, evaluate
from .exceptions import (
    DegenerateTrainingDataError,
    MalformedRecordError,
    SpamFilterError,
    VectorLengthError,
)
from .models import FeatureRecord, Label
from .parsers import ParseStats, RecordParser, iter_records, read_records
from .pipeline import PipelineReport, run_pipeline
from .probability import ProbabilityModel, derive_model

__all__ = [
    # Core
    "SpamFilter",
    "FilterConfig",
    "FeatureRecord",
    "Label",
    # Parsing
    "RecordParser",
    "ParseStats",
    "iter_records",
    "read_records",
    # Training
    "ClassAccumulator",
    "add_vectors",
    "ProbabilityModel",
    "derive_model",
    # Classification and evaluation
    "SpamClassifier",
    "ClassificationResult",
    "ConfusionMatrix",
    "EvaluationResult",
    "evaluate",
    # Pipeline
    "PipelineReport",
    "run_pipeline",
    # Errors
    "SpamFilterError",
    "MalformedRecordError",
    "VectorLengthError",
    "DegenerateTrainingDataError",
]
