"""
Comment Sentiment Package

A lexicon and emoji based sentiment scorer for short comments, with a
corpus evaluator.
"""
from .scorer import SentimentResult, detect_sentiment
from .evaluate import EvaluationReport, evaluate, format_report
from .inference import PredictionResult, SentimentPredictor

__all__ = [
    "SentimentResult",
    "detect_sentiment",
    "EvaluationReport",
    "evaluate",
    "format_report",
    "PredictionResult",
    "SentimentPredictor",
]
