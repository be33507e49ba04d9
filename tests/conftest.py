"""
Pytest configuration and fixtures for comment sentiment tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture
def sample_comments() -> list[str]:
    """Sample comments for testing."""
    return [
        "I love this video! 😍",
        "This is bad.",
        "It is a table.",
        "Not good at all 👎",
        "",
    ]


@pytest.fixture
def labeled_rows() -> list[tuple[str, str]]:
    """(comment, label) pairs matching the small corpus."""
    return [
        ("I love this!", "positive"),
        ("This is bad.", "negative"),
        ("It is a table.", "neutral"),
    ]


@pytest.fixture
def corpus_file(tmp_path) -> Path:
    """Small labeled corpus with a header row."""
    path = tmp_path / "comments.csv"
    path.write_text(
        "CommentText,Sentiment\n"
        "I love this!,positive\n"
        "This is bad.,negative\n"
        "It is a table.,neutral\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def header_only_file(tmp_path) -> Path:
    """Corpus with a header and no data rows."""
    path = tmp_path / "empty.csv"
    path.write_text("CommentText,Sentiment\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI entry points between tests."""
    yield
    logger = logging.getLogger("comment_sentiment")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
