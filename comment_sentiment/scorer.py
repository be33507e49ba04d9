"""
Lexicon and emoji sentiment scorer.

Combines an emoji signal and a word signal (with negation and intensifier
handling) into a single label with a confidence score. The scorer is a
pure function: no configuration, no state kept between calls.
"""

import math
from dataclasses import dataclass
from typing import Any

from .lexicon import INTENSIFIERS, NEGATIONS, NEGATIVE_WORDS, POSITIVE_WORDS
from .preprocessing import EmojiCounts, count_emoji, tokenize


POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"
SENTIMENT_LABELS = (POSITIVE, NEUTRAL, NEGATIVE)

CONFIDENCE_THRESHOLDS = {"high": 0.8, "medium": 0.6, "low": 0.0}

# Calibration constants; changing any of them changes every reported score.
INTENSIFIER_FACTOR = 1.6
WORD_THRESHOLD = 0.5
WORD_CONFIDENCE_BASE = 0.6
WORD_CONFIDENCE_SPAN = 0.35
WORD_CONFIDENCE_CAP = 0.95
EMOJI_CONFIDENCE_BASE = 0.75
EMOJI_CONFIDENCE_BONUS_CAP = 0.2
EMOJI_WEIGHT = 0.75
WORD_WEIGHT = 0.25
COMBINED_CONFIDENCE_CAP = 0.98
AGREEMENT_BOOST = 0.03
AGREEMENT_CONFIDENCE_CAP = 0.99


@dataclass(frozen=True)
class SentimentResult:
    """Sentiment label and confidence for one comment."""

    sentiment: str
    confidence: float

    def to_dict(self) -> dict[str, Any]:
        return {"sentiment": self.sentiment, "confidence": self.confidence}


def get_confidence_level(confidence: float) -> str:
    """
    Get confidence level string from confidence score.

    Args:
        confidence: Confidence score (0-1)

    Returns:
        Confidence level: 'high', 'medium', or 'low'
    """
    if confidence >= CONFIDENCE_THRESHOLDS["high"]:
        return "high"
    elif confidence >= CONFIDENCE_THRESHOLDS["medium"]:
        return "medium"
    else:
        return "low"


def score_tokens(tokens: list[str]) -> float:
    """
    Sum word weights over a token sequence.

    Positive words weigh +1 and negative words -1. A preceding intensifier
    scales the weight by 1.6 and a preceding negation flips its sign; both
    checks run against the same preceding token.

    Args:
        tokens: Ordered tokens of one comment

    Returns:
        Signed word score
    """
    score = 0.0
    for i, token in enumerate(tokens):
        if token in POSITIVE_WORDS:
            weight = 1.0
        elif token in NEGATIVE_WORDS:
            weight = -1.0
        else:
            continue

        if i > 0:
            previous = tokens[i - 1]
            if previous in INTENSIFIERS:
                weight *= INTENSIFIER_FACTOR
            if previous in NEGATIONS:
                weight *= -1

        score += weight
    return score


def classify_word_score(score: float, token_count: int) -> SentimentResult:
    """
    Turn a word score into a label and confidence.

    Confidence grows with the score magnitude relative to the square root
    of the comment length, so one match in a long comment stays modest.

    Args:
        score: Signed word score from score_tokens
        token_count: Number of tokens in the comment

    Returns:
        SentimentResult from the word signal alone
    """
    if score > WORD_THRESHOLD:
        sentiment = POSITIVE
    elif score < -WORD_THRESHOLD:
        sentiment = NEGATIVE
    else:
        sentiment = NEUTRAL

    magnitude = abs(score)
    strength = min(1, magnitude / max(1, math.sqrt(token_count)))
    confidence = min(
        WORD_CONFIDENCE_CAP,
        WORD_CONFIDENCE_BASE + strength * WORD_CONFIDENCE_SPAN,
    )
    return SentimentResult(sentiment, confidence)


def emoji_majority(counts: EmojiCounts) -> str:
    """Return the class that strictly outnumbers both others, else neutral."""
    if counts.positive > counts.negative and counts.positive > counts.neutral:
        return POSITIVE
    if counts.negative > counts.positive and counts.negative > counts.neutral:
        return NEGATIVE
    return NEUTRAL


def combine_signals(counts: EmojiCounts, word_result: SentimentResult) -> SentimentResult:
    """
    Merge the emoji signal with the word signal.

    Emoji carry three quarters of the combined confidence. Agreement on a
    non-neutral label earns a small boost; otherwise emoji win whenever
    positive and negative emoji counts differ, and the word signal decides
    the rest.

    Args:
        counts: Emoji counts of the comment, with at least one emoji
        word_result: Result of the word signal

    Returns:
        Combined SentimentResult
    """
    emoji_sentiment = emoji_majority(counts)
    emoji_confidence = EMOJI_CONFIDENCE_BASE + min(EMOJI_CONFIDENCE_BONUS_CAP, counts.total / 10)
    combined = min(
        COMBINED_CONFIDENCE_CAP,
        emoji_confidence * EMOJI_WEIGHT + word_result.confidence * WORD_WEIGHT,
    )

    if word_result.sentiment != NEUTRAL and word_result.sentiment == emoji_sentiment:
        return SentimentResult(
            emoji_sentiment,
            min(AGREEMENT_CONFIDENCE_CAP, combined + AGREEMENT_BOOST),
        )

    if abs(counts.positive - counts.negative) >= 1:
        return SentimentResult(emoji_sentiment, combined)

    return word_result


def detect_sentiment(text: str) -> SentimentResult | None:
    """
    Detect the sentiment of a short comment.

    Args:
        text: Comment text, possibly with emoji

    Returns:
        SentimentResult, or None when the comment carries no usable signal
        (empty, whitespace only, or neither words nor classified emoji).
        None is not the same verdict as neutral.
    """
    if not isinstance(text, str) or not text.strip():
        return None

    counts = count_emoji(text)
    tokens = tokenize(text)
    word_result = classify_word_score(score_tokens(tokens), len(tokens))

    if counts.total > 0:
        return combine_signals(counts, word_result)

    if not tokens:
        return None
    return word_result
