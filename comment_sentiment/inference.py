"""
Inference module for comment sentiment.

Wraps the scorer for interactive and batch callers. Unlike the evaluator,
the predictor never turns an undetermined comment into a neutral verdict:
``sentiment`` stays None so the caller can ask for more context.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any

from .preprocessing import validate_text
from .scorer import detect_sentiment, get_confidence_level

logger = logging.getLogger("comment_sentiment")


UNDETERMINED_MESSAGE = (
    "Couldn't detect sentiment. Try a longer comment or add some context/emojis."
)


@dataclass
class PredictionResult:
    """Result of a sentiment prediction."""

    text: str
    sentiment: str | None
    confidence: float
    confidence_level: str
    inference_time_ms: float
    error: str | None = None

    @property
    def is_determined(self) -> bool:
        return self.sentiment is not None

    @property
    def message(self) -> str:
        """Text to show the user for this result."""
        if self.error is not None:
            return f"Could not analyze comment: {self.error}"
        if self.sentiment is None:
            return UNDETERMINED_MESSAGE
        return f"{self.sentiment.capitalize()} (confidence {self.confidence * 100:.1f}%)"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "text": self.text[:100] + "..." if len(self.text) > 100 else self.text,
            "sentiment": self.sentiment,
            "confidence": round(self.confidence, 4),
            "confidence_level": self.confidence_level,
            "inference_time_ms": round(self.inference_time_ms, 2),
            "error": self.error,
        }


class SentimentPredictor:
    """
    High-level predictor for comment sentiment.

    Validates input, times each call and reports undetermined comments
    explicitly.
    """

    def __init__(self, scorer=detect_sentiment):
        self.scorer = scorer

    def predict(self, text: str) -> PredictionResult:
        """
        Make prediction for a single comment.

        Args:
            text: Input comment

        Returns:
            PredictionResult; sentiment is None when the comment carries no
            usable signal

        Raises:
            ValueError: If input validation fails
        """
        is_valid, error = validate_text(text)
        if not is_valid:
            raise ValueError(error)

        start_time = time.perf_counter()
        detected = self.scorer(text)
        inference_time = (time.perf_counter() - start_time) * 1000

        if detected is None:
            return PredictionResult(
                text=text,
                sentiment=None,
                confidence=0.0,
                confidence_level="low",
                inference_time_ms=inference_time,
            )

        return PredictionResult(
            text=text,
            sentiment=detected.sentiment,
            confidence=detected.confidence,
            confidence_level=get_confidence_level(detected.confidence),
            inference_time_ms=inference_time,
        )

    def predict_batch(self, texts: list[Any]) -> list[PredictionResult]:
        """
        Make predictions for multiple comments.

        A row that fails validation or scoring gets a result with ``error``
        set; the remaining rows are still scored.

        Args:
            texts: List of input comments

        Returns:
            One PredictionResult per input, in input order
        """
        results = []
        failed = 0

        for i, text in enumerate(texts):
            try:
                results.append(self.predict(text))
            except Exception as e:
                failed += 1
                logger.warning(f"Prediction failed at index {i}: {e}")
                results.append(PredictionResult(
                    text=text if isinstance(text, str) else "",
                    sentiment=None,
                    confidence=0.0,
                    confidence_level="low",
                    inference_time_ms=0.0,
                    error=str(e),
                ))

        if failed:
            logger.warning(f"{failed} of {len(texts)} rows could not be scored")

        return results
