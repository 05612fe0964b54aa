"""Filter configuration shared by the parser, the model and the classifier."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .models import Label

DEFAULT_WORD_SET_SIZE = 57
DEFAULT_OFFSET = 1.0 / 4000


@dataclass(frozen=True)
class FilterConfig:
    """Process-wide constants for one train/test run.

    A single instance must be used for both phases so that the word-set size
    and smoothing offset cannot drift between training and testing.

    Args:
        word_set_size: Number of word frequencies per record (``K``).
        offset: Smoothing offset added to every frequency (``epsilon``).
        delimiter: Field separator in corpus lines.
        tie_label: Prediction used when the log-likelihood ratio is exactly 0.
        skip_malformed: Skip unparseable lines with a warning instead of
            failing the whole batch.
    """

    word_set_size: int = DEFAULT_WORD_SET_SIZE
    offset: float = DEFAULT_OFFSET
    delimiter: str = ","
    tie_label: Label = Label.HAM
    skip_malformed: bool = False

    def __post_init__(self) -> None:
        if self.word_set_size < 1:
            raise ValueError("word_set_size must be at least 1.")
        if not math.isfinite(self.offset) or self.offset <= 0:
            raise ValueError("offset must be a positive finite number.")
        if not self.delimiter:
            raise ValueError("delimiter must not be empty.")
        if not isinstance(self.tie_label, Label):
            object.__setattr__(self, "tie_label", Label(self.tie_label))

    @property
    def fields_per_line(self) -> int:
        """Expected token count per corpus line (frequencies plus label)."""
        return self.word_set_size + 1

    def to_dict(self) -> dict:
        return {
            "word_set_size": self.word_set_size,
            "offset": self.offset,
            "delimiter": self.delimiter,
            "tie_label": self.tie_label.value,
            "skip_malformed": self.skip_malformed,
        }
