"""Corpus parsing: delimited text lines into feature records.

Each corpus line holds ``K`` word frequencies followed by a label code
(``0`` = spam, ``1`` = ham), e.g. ``0.0,0.64,...,1.2,0``. The parser adds the
configured smoothing offset to every frequency so that no word ever has a
zero count.

Malformed lines (wrong token count, non-numeric or negative frequency,
unknown label code) raise :class:`MalformedRecordError`. Callers reading a
whole corpus fail the batch on the first such line unless the configuration
asks to skip them, in which case they are logged and counted.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import FilterConfig
from .exceptions import MalformedRecordError
from .models import FeatureRecord, Label

logger = logging.getLogger(__name__)


@dataclass
class ParseStats:
    """Counters filled in while a corpus is consumed."""

    records: int = 0
    skipped: int = 0
    blank: int = 0

    def to_dict(self) -> dict:
        return {"records": self.records, "skipped": self.skipped, "blank": self.blank}


class RecordParser:
    """Parser for single corpus lines.

    Example::

        parser = RecordParser(FilterConfig(word_set_size=2, offset=0.01))
        record = parser.parse_line("1,0,0")
        record.features  # (1.01, 0.01)
        record.label     # Label.SPAM

    Args:
        config: Filter configuration providing ``K``, the offset and the
            delimiter.
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config or FilterConfig()

    def parse_line(self, line: str, line_number: Optional[int] = None) -> FeatureRecord:
        """Parse one line into a FeatureRecord.

        Args:
            line: Raw text line (a trailing newline is allowed).
            line_number: 1-based position in the source, used in error messages.

        Returns:
            FeatureRecord with offset-adjusted frequencies.

        Raises:
            MalformedRecordError: If the line does not hold exactly ``K + 1``
                valid tokens.
        """
        tokens = [t.strip() for t in line.strip().split(self.config.delimiter)]
        expected = self.config.fields_per_line
        if len(tokens) != expected:
            raise MalformedRecordError(
                f"expected {expected} fields, found {len(tokens)}", line_number
            )

        offset = self.config.offset
        features = tuple(
            self._parse_frequency(token, idx, line_number) + offset
            for idx, token in enumerate(tokens[:-1])
        )
        label = self._parse_label(tokens[-1], line_number)
        return FeatureRecord(features=features, label=label)

    @staticmethod
    def _parse_frequency(token: str, index: int, line_number: Optional[int]) -> float:
        try:
            value = float(token)
        except ValueError:
            raise MalformedRecordError(
                f"field {index + 1} is not a number: {token!r}", line_number
            ) from None
        if not math.isfinite(value) or value < 0:
            raise MalformedRecordError(
                f"field {index + 1} must be a non-negative finite number: {token!r}",
                line_number,
            )
        return value

    @staticmethod
    def _parse_label(token: str, line_number: Optional[int]) -> Label:
        try:
            return Label.from_code(int(token))
        except ValueError:
            raise MalformedRecordError(
                f"label must be 0 (spam) or 1 (ham), got {token!r}", line_number
            ) from None


def _decode_line(raw: bytes, line_number: int) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedRecordError(
            f"not valid UTF-8 text at byte {e.start}", line_number
        ) from None


def iter_records(
    lines: Iterable[str | bytes],
    config: FilterConfig | None = None,
    stats: ParseStats | None = None,
) -> Iterator[FeatureRecord]:
    """Parse records from any line source until it is exhausted.

    Byte lines are decoded as UTF-8; a line that fails to decode counts as
    malformed. Blank lines are skipped. Malformed lines either raise or, with
    ``config.skip_malformed``, are logged and counted in ``stats.skipped``.
    """
    parser = RecordParser(config)
    stats = stats if stats is not None else ParseStats()

    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            stats.blank += 1
            continue
        try:
            if isinstance(line, bytes):
                line = _decode_line(line, line_number)
            record = parser.parse_line(line, line_number)
        except MalformedRecordError as e:
            if not parser.config.skip_malformed:
                raise
            stats.skipped += 1
            logger.warning(f"Skipping {e}.")
            continue
        stats.records += 1
        yield record


def read_records(
    path: str | Path,
    config: FilterConfig | None = None,
    stats: ParseStats | None = None,
) -> Iterator[FeatureRecord]:
    """Lazily read feature records from a corpus file.

    The path is checked immediately; the file itself is opened on first
    iteration and closed once the iterator is exhausted or closed.

    Raises:
        FileNotFoundError: If the corpus file does not exist (raised at call
            time, before any record is read).
        MalformedRecordError: On the first bad line, unless skipping.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Corpus file not found: {path}")
    return _read_file(path, config, stats)


def _read_file(
    path: Path,
    config: FilterConfig | None,
    stats: ParseStats | None,
) -> Iterator[FeatureRecord]:
    logger.debug(f"Reading corpus {path}.")
    with open(path, "rb") as f:
        yield from iter_records(f, config, stats)
