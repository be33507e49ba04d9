"""
Text preprocessing module for comment sentiment scoring.

Handles normalization, tokenization, emoji counting and input validation.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

import numpy as np

from .lexicon import NEGATIVE_EMOJI, NEUTRAL_EMOJI, POSITIVE_EMOJI

logger = logging.getLogger("comment_sentiment")


MAX_TEXT_LENGTH = 50000

_NON_WORD_CHARS = re.compile(r"[^a-z0-9'\s]")


@dataclass(frozen=True)
class EmojiCounts:
    """Per-class emoji counts for one comment."""

    positive: int = 0
    negative: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.positive + self.negative + self.neutral


def normalize_text(text: str) -> str:
    """
    Lowercase text and blank out everything but ASCII letters, digits,
    apostrophes and whitespace.

    Args:
        text: Raw comment

    Returns:
        Normalized text of the same length as the lowercased input
    """
    if not isinstance(text, str):
        return ""

    return _NON_WORD_CHARS.sub(" ", text.lower())


def tokenize(text: str) -> list[str]:
    """
    Split a comment into lowercase word tokens.

    Token order is preserved; the scorer looks at the token immediately
    before each sentiment word.

    Args:
        text: Raw comment

    Returns:
        List of tokens, without empty strings
    """
    return normalize_text(text).split()


def count_emoji(text: str) -> EmojiCounts:
    """
    Count positive, negative and neutral emoji in a comment.

    Iterates by code point, so astral-plane emoji count once each.

    Args:
        text: Raw comment

    Returns:
        EmojiCounts for the comment
    """
    positive = negative = neutral = 0

    for ch in text:
        if ch in POSITIVE_EMOJI:
            positive += 1
        elif ch in NEGATIVE_EMOJI:
            negative += 1
        elif ch in NEUTRAL_EMOJI:
            neutral += 1

    return EmojiCounts(positive=positive, negative=negative, neutral=neutral)


def validate_text(text: Any) -> tuple[bool, str]:
    """
    Validate input text.

    Empty text is valid here: the scorer answers it with "no result".

    Args:
        text: Input to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if text is None:
        return False, "Text cannot be None"

    if not isinstance(text, str):
        return False, f"Text must be string, got {type(text).__name__}"

    if len(text) > MAX_TEXT_LENGTH:
        return False, f"Text exceeds maximum length of {MAX_TEXT_LENGTH} characters"

    return True, ""


def get_text_statistics(texts: list[str]) -> dict[str, Any]:
    """
    Compute token and emoji statistics for a collection of comments.

    Args:
        texts: List of comments

    Returns:
        Dictionary with text statistics
    """
    valid = [text for text in texts if isinstance(text, str)]

    if not valid:
        return {"error": "No valid texts found"}

    token_counts = np.array([len(tokenize(text)) for text in valid])
    emoji_counts = np.array([count_emoji(text).total for text in valid])

    return {
        "total_texts": len(texts),
        "valid_texts": len(valid),
        "avg_token_count": float(np.mean(token_counts)),
        "std_token_count": float(np.std(token_counts)),
        "min_token_count": int(np.min(token_counts)),
        "max_token_count": int(np.max(token_counts)),
        "median_token_count": float(np.median(token_counts)),
        "texts_with_emoji": int(np.sum(emoji_counts > 0)),
        "empty_texts": int(np.sum((token_counts == 0) & (emoji_counts == 0))),
    }
