"""
Data loading and validation module for labeled comment corpora.

The corpus is a comma-separated file with a header row and one
``<comment>,<label>`` pair per line. The label is whatever follows the
last comma, so comments may contain commas. Quoting is not honored.
"""

import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any

import numpy as np

from .scorer import SENTIMENT_LABELS

logger = logging.getLogger("comment_sentiment")


_LINE_BREAK = re.compile(r"\r?\n")


class DataValidationError(Exception):
    """Exception raised for data validation errors."""
    pass


class EmptyCorpusError(DataValidationError):
    """Raised when a corpus has no usable rows."""
    pass


def parse_corpus_line(line: str) -> tuple[str, str] | None:
    """
    Split one corpus line into comment and label.

    Args:
        line: Raw line without its line terminator

    Returns:
        Tuple of (comment, label) with the comment stripped and the label
        stripped and lowercased, or None if the line has no comma
    """
    idx = line.rfind(",")
    if idx == -1:
        return None

    comment = line[:idx].strip()
    label = line[idx + 1:].strip().lower()
    return comment, label


def read_corpus_lines(corpus_path: str | Path) -> list[str]:
    """
    Read corpus lines, dropping empty lines and the header row.

    Args:
        corpus_path: Path to the corpus file

    Returns:
        Data lines in file order

    Raises:
        DataValidationError: If the file does not exist or cannot be decoded
        EmptyCorpusError: If the file has no line beyond the header
    """
    corpus_path = Path(corpus_path)

    if not corpus_path.exists():
        raise DataValidationError(f"Corpus file does not exist: {corpus_path}")

    if not corpus_path.is_file():
        raise DataValidationError(f"Path is not a file: {corpus_path}")

    try:
        with open(corpus_path, "r", encoding="utf-8", newline="") as f:
            raw = f.read()
    except UnicodeDecodeError as e:
        raise DataValidationError(f"Corpus is not valid UTF-8: {corpus_path} ({e})") from e

    lines = [line for line in _LINE_BREAK.split(raw) if line]
    if len(lines) <= 1:
        raise EmptyCorpusError(f"No data found in CSV: {corpus_path}")

    return lines[1:]


def load_labeled_comments(corpus_path: str | Path) -> list[tuple[str, str]]:
    """
    Load (comment, label) pairs from a corpus file.

    Lines without a comma are skipped and only counted in the log.

    Args:
        corpus_path: Path to the corpus file

    Returns:
        List of (comment, label) tuples in file order

    Raises:
        DataValidationError: If the corpus cannot be read
        EmptyCorpusError: If the corpus has no data lines
    """
    lines = read_corpus_lines(corpus_path)
    logger.info(f"Loading {len(lines)} rows from {corpus_path}")

    rows = []
    skipped = 0
    for line in lines:
        parsed = parse_corpus_line(line)
        if parsed is None:
            skipped += 1
            continue
        rows.append(parsed)

    if skipped:
        logger.warning(f"Skipped {skipped} rows without a label separator")

    unknown = Counter(label for _, label in rows if label not in SENTIMENT_LABELS)
    if unknown:
        logger.warning(
            f"Found {sum(unknown.values())} rows with unknown labels: "
            + ", ".join(f"{label!r} x{count}" for label, count in unknown.most_common(5))
        )

    logger.info(f"Loaded {len(rows)} labeled comments")

    return rows


def get_data_statistics(rows: list[tuple[str, str]]) -> dict[str, Any]:
    """
    Compute statistics for a loaded corpus.

    Args:
        rows: List of (comment, label) tuples

    Returns:
        Dictionary with corpus statistics
    """
    if not rows:
        return {"error": "Empty dataset"}

    labels = Counter(label for _, label in rows)
    word_counts = np.array([len(comment.split()) for comment, _ in rows])
    char_counts = np.array([len(comment) for comment, _ in rows])

    return {
        "total_samples": len(rows),
        "label_counts": dict(labels.most_common()),
        "class_balance": {
            label: count / len(rows) for label, count in labels.items()
        },
        "word_count": {
            "mean": float(np.mean(word_counts)),
            "std": float(np.std(word_counts)),
            "min": int(np.min(word_counts)),
            "max": int(np.max(word_counts)),
            "median": float(np.median(word_counts)),
        },
        "char_count": {
            "mean": float(np.mean(char_counts)),
            "max": int(np.max(char_counts)),
        },
    }


def log_data_statistics(stats: dict[str, Any]) -> None:
    """
    Log corpus statistics in a readable layout.

    Args:
        stats: Statistics dictionary from get_data_statistics
    """
    if "error" in stats:
        logger.warning(f"No statistics: {stats['error']}")
        return

    logger.info(f"Total samples: {stats['total_samples']}")
    for label, count in stats["label_counts"].items():
        logger.info(f"  - {label}: {count} ({stats['class_balance'][label]:.1%})")

    wc = stats["word_count"]
    logger.info(
        f"Words per comment: mean {wc['mean']:.1f}, std {wc['std']:.1f}, "
        f"min {wc['min']}, max {wc['max']}, median {wc['median']:.1f}"
    )
