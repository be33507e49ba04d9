"""
Evaluation script for the comment sentiment scorer.

Scores every row of a labeled corpus and reports accuracy together with
a sample of mismatches.

Usage:
    python -m comment_sentiment.evaluate --data-path YoutubeCommentsDataSet.csv
    python -m comment_sentiment.evaluate --config configs/eval_config.yaml --verbose
"""

import argparse
import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterable

from sklearn.metrics import classification_report, confusion_matrix

from .data_loader import (
    DataValidationError,
    EmptyCorpusError,
    get_data_statistics,
    load_labeled_comments,
    log_data_statistics,
)
from .preprocessing import get_text_statistics
from .scorer import NEUTRAL, SENTIMENT_LABELS, SentimentResult, detect_sentiment
from .utils import load_config, save_config, setup_logging

logger = logging.getLogger("comment_sentiment")


MAX_MISMATCHES = 10
COMMENT_EXCERPT_LENGTH = 200


@dataclass(frozen=True)
class Mismatch:
    """A row whose prediction differs from its label."""

    index: int
    comment: str
    expected: str
    predicted: str
    confidence: float


@dataclass
class EvaluationReport:
    """Running totals of an evaluation pass."""

    total: int = 0
    correct: int = 0
    errors: int = 0
    mismatches: list[Mismatch] = field(default_factory=list)
    expected_labels: list[str] = field(default_factory=list)
    predicted_labels: list[str] = field(default_factory=list)

    @property
    def accuracy(self) -> float:
        """Accuracy as a percentage."""
        if self.total == 0:
            raise EmptyCorpusError("No data found in CSV")
        return self.correct / self.total * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "correct": self.correct,
            "errors": self.errors,
            "accuracy": round(self.accuracy, 2),
            "mismatches": [
                {
                    "index": m.index,
                    "comment": m.comment,
                    "label": m.expected,
                    "pred": m.predicted,
                    "confidence": m.confidence,
                }
                for m in self.mismatches
            ],
        }


def evaluate(
    rows: Iterable[tuple[str, str]],
    scorer: Callable[[str], SentimentResult | None] = detect_sentiment,
    max_mismatches: int = MAX_MISMATCHES,
    excerpt_length: int = COMMENT_EXCERPT_LENGTH,
) -> EvaluationReport:
    """
    Score every labeled comment and aggregate the outcome.

    A comment the scorer cannot decide on counts as a neutral guess with
    zero confidence. A row whose scoring raises is logged, counted in
    ``errors`` and left out of the totals.

    Args:
        rows: (comment, label) pairs in corpus order
        scorer: Scoring function, detect_sentiment by default
        max_mismatches: Number of mismatches to keep, in row order
        excerpt_length: Characters of each mismatched comment to keep

    Returns:
        Finalized EvaluationReport

    Raises:
        EmptyCorpusError: If no row could be scored
    """
    report = EvaluationReport()

    for index, (comment, label) in enumerate(rows):
        try:
            comment = comment.strip()
            label = label.strip().lower()
            detected = scorer(comment)
        except Exception as e:
            report.errors += 1
            logger.warning(f"Scoring failed for row {index}: {e}")
            continue

        predicted = detected.sentiment if detected is not None else NEUTRAL
        confidence = detected.confidence if detected is not None else 0.0

        report.total += 1
        report.expected_labels.append(label)
        report.predicted_labels.append(predicted)

        if predicted == label:
            report.correct += 1
        elif len(report.mismatches) < max_mismatches:
            report.mismatches.append(Mismatch(
                index=index,
                comment=comment[:excerpt_length],
                expected=label,
                predicted=predicted,
                confidence=confidence,
            ))

    if report.total == 0:
        raise EmptyCorpusError("No data found in CSV")

    if report.errors:
        logger.warning(f"{report.errors} rows failed to score and were excluded")

    return report


def format_report(report: EvaluationReport) -> str:
    """
    Render the summary line and the mismatch sample as text.

    Args:
        report: Finalized evaluation report

    Returns:
        Multi-line report text
    """
    lines = [
        f"Evaluated {report.total} rows. "
        f"Accuracy: {report.accuracy:.2f}% ({report.correct}/{report.total})"
    ]

    if report.mismatches:
        lines.append("")
        lines.append("Sample mismatches:")
        for i, m in enumerate(report.mismatches, start=1):
            lines.append("")
            lines.append(
                f"{i}) label={m.expected} pred={m.predicted} conf={m.confidence * 100:.1f}%"
            )
            lines.append(m.comment)

    return "\n".join(lines)


def compute_class_metrics(report: EvaluationReport) -> dict[str, Any]:
    """
    Compute per-class precision/recall/F1 and the confusion matrix.

    Args:
        report: Finalized evaluation report

    Returns:
        Dictionary with 'labels', 'confusion_matrix' (rows are expected
        labels in 'labels' order), 'classification_report' (dict) and
        'prediction_counts'. Labels outside SENTIMENT_LABELS follow the
        known ones in sorted order.
    """
    extra = set(report.expected_labels) - set(SENTIMENT_LABELS)
    labels = list(SENTIMENT_LABELS) + sorted(extra)
    matrix = confusion_matrix(
        report.expected_labels,
        report.predicted_labels,
        labels=labels,
    )
    per_class = classification_report(
        report.expected_labels,
        report.predicted_labels,
        labels=labels,
        output_dict=True,
        zero_division=0,
    )

    return {
        "labels": labels,
        "confusion_matrix": matrix.tolist(),
        "classification_report": per_class,
        "prediction_counts": dict(Counter(report.predicted_labels)),
    }


def print_class_metrics(metrics: dict[str, Any]) -> None:
    """Print confusion matrix and per-class scores."""
    print("\nConfusion Matrix (rows = label, columns = prediction):")
    header = " " * 10 + "".join(f"{label:>10}" for label in metrics["labels"])
    print(header)
    for label, row in zip(metrics["labels"], metrics["confusion_matrix"]):
        print(f"{label:>10}" + "".join(f"{count:>10}" for count in row))

    print("\nPer-class scores:")
    for label in metrics["labels"]:
        scores = metrics["classification_report"][label]
        print(
            f"  {label:>8}: precision {scores['precision']:.4f}, "
            f"recall {scores['recall']:.4f}, f1 {scores['f1-score']:.4f}"
        )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Evaluate comment sentiment scorer")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--data-path", type=str, default=None, help="Labeled corpus (overrides config)")
    parser.add_argument("--output", type=str, default=None, help="Optional metrics JSON file")
    parser.add_argument("--max-mismatches", type=int, default=None)
    parser.add_argument("--verbose", action="store_true", help="Show per-class metrics")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run an evaluation and print the report. Returns the exit status."""
    args = parse_args(argv)

    config: dict[str, Any] = load_config(args.config) if args.config else {}
    eval_config = config.get("evaluation", {})
    log_config = config.get("logging", {})

    setup_logging(
        log_level="DEBUG" if args.verbose else log_config.get("level", "INFO"),
        log_file=log_config.get("file"),
    )

    data_path = args.data_path or config.get("data", {}).get("corpus_path")
    if not data_path:
        logger.error("No corpus given: pass --data-path or set data.corpus_path in the config")
        return 2

    max_mismatches = args.max_mismatches
    if max_mismatches is None:
        max_mismatches = eval_config.get("max_mismatches", MAX_MISMATCHES)
    excerpt_length = eval_config.get("excerpt_length", COMMENT_EXCERPT_LENGTH)

    try:
        rows = load_labeled_comments(data_path)
        log_data_statistics(get_data_statistics(rows))
        text_stats = get_text_statistics([comment for comment, _ in rows])
        if "error" not in text_stats:
            logger.info(
                f"Tokens per comment: mean {text_stats['avg_token_count']:.1f}, "
                f"max {text_stats['max_token_count']}; "
                f"{text_stats['texts_with_emoji']} with emoji, "
                f"{text_stats['empty_texts']} without words or emoji"
            )
        report = evaluate(rows, max_mismatches=max_mismatches, excerpt_length=excerpt_length)
    except EmptyCorpusError as e:
        logger.error(str(e))
        return 1
    except DataValidationError as e:
        logger.error(f"Could not load corpus: {e}")
        return 1

    print(format_report(report))

    if not (args.verbose or args.output):
        return 0

    metrics = compute_class_metrics(report)
    if args.verbose:
        print_class_metrics(metrics)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump({**report.to_dict(), **metrics}, f, indent=2, ensure_ascii=False, default=float)
        logger.info(f"Metrics saved to {output_path}")

        run_config = {
            "data": {"corpus_path": str(data_path)},
            "evaluation": {"max_mismatches": max_mismatches, "excerpt_length": excerpt_length},
        }
        config_path = output_path.with_name(f"{output_path.stem}.config.yaml")
        save_config(run_config, str(config_path))
        logger.info(f"Run configuration saved to {config_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
