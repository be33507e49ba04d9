"""
Batch prediction script for comment sentiment.

Usage:
    python -m comment_sentiment.predict --input_path comments.csv --output_path preds.csv
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path

import pandas as pd
from tqdm import tqdm

from .inference import SentimentPredictor
from .utils import ensure_dir, setup_logging

logger = logging.getLogger("comment_sentiment")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Batch comment sentiment prediction")
    parser.add_argument("--input_path", type=str, required=True, help="Input CSV with a text column")
    parser.add_argument("--output_path", type=str, required=True, help="Output CSV path")
    parser.add_argument("--text_column", type=str, default="text", help="Text column name")
    parser.add_argument("--batch_size", type=int, default=256, help="Rows per progress step")
    return parser.parse_args(argv)


def predict_frame(
    df: pd.DataFrame,
    text_column: str,
    predictor: SentimentPredictor,
    batch_size: int = 256,
) -> pd.DataFrame:
    """
    Score one text column and append prediction columns.

    Missing or undetermined comments get prediction 'unknown' with zero
    confidence; rows that fail get 'error'.

    Args:
        df: Input frame
        text_column: Name of the column holding comments
        predictor: Predictor to score with
        batch_size: Rows handed to predict_batch at a time

    Returns:
        Copy of df with prediction, confidence and confidence_level columns
    """
    if text_column not in df.columns:
        raise ValueError(f"Column '{text_column}' not found; available: {list(df.columns)}")

    texts = ["" if pd.isna(text) else str(text) for text in df[text_column].tolist()]

    results = []
    for i in tqdm(range(0, len(texts), batch_size), desc="Predicting"):
        for pred in predictor.predict_batch(texts[i:i + batch_size]):
            if pred.error is not None:
                label = "error"
            elif pred.sentiment is None:
                label = "unknown"
            else:
                label = pred.sentiment
            results.append({
                "prediction": label,
                "confidence": pred.confidence,
                "confidence_level": pred.confidence_level,
            })

    return pd.concat([df.reset_index(drop=True), pd.DataFrame(results)], axis=1)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(log_level="INFO")

    logger.info(f"Loading data from {args.input_path}")
    df = pd.read_csv(args.input_path)

    logger.info(f"Predicting {len(df)} samples...")
    try:
        output_df = predict_frame(df, args.text_column, SentimentPredictor(), args.batch_size)
    except ValueError as e:
        logger.error(str(e))
        return 1

    ensure_dir(Path(args.output_path).parent)
    output_df.to_csv(args.output_path, index=False)

    counts = Counter(output_df["prediction"])
    logger.info(
        "Done! " + ", ".join(f"{label}: {count}" for label, count in sorted(counts.items()))
    )
    logger.info(f"Saved to {args.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
