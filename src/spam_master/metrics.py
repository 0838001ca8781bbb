"""Aggregate statistics for a test run.

Accuracy is the fraction of test documents whose predicted class matches
their actual class. Precision is the fraction of spam predictions that
were actually spam. Either value is NaN when its denominator is zero;
callers should check with ``math.isnan`` before formatting.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .engine import TestResult


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator > 0 else math.nan


def _rounded(value: float, places: int = 5) -> Optional[float]:
    return None if math.isnan(value) else round(value, places)


@dataclass
class EvaluationMetrics:
    """Counters collected while testing, and the statistics derived from them.

    Attributes:
        total: Number of test documents scored.
        correct: Documents whose predicted class matched the actual class.
        spam_predicted: Documents predicted spam, whatever their actual class.
        correct_spam: Spam documents predicted spam.
        unreadable: Documents that could not be read.
    """

    total: int = 0
    correct: int = 0
    spam_predicted: int = 0
    correct_spam: int = 0
    unreadable: int = 0

    @property
    def accuracy(self) -> float:
        """``correct / total``, or NaN for an empty run."""
        return _ratio(self.correct, self.total)

    @property
    def precision(self) -> float:
        """``correct_spam / spam_predicted``, or NaN if nothing was predicted spam."""
        return _ratio(self.correct_spam, self.spam_predicted)

    def to_dict(self) -> dict:
        return {
            "accuracy": _rounded(self.accuracy),
            "precision": _rounded(self.precision),
            "total": self.total,
            "correct": self.correct,
            "spam_predicted": self.spam_predicted,
            "correct_spam": self.correct_spam,
            "unreadable": self.unreadable,
        }

    def summary(self) -> str:
        """Human-readable summary of metrics."""
        lines = [
            f"Accuracy:  {_format_ratio(self.accuracy)}",
            f"Precision: {_format_ratio(self.precision)}",
            f"Documents: {self.total} ({self.correct} correct, "
            f"{self.spam_predicted} predicted spam)",
        ]
        if self.unreadable:
            lines.append(f"Unreadable: {self.unreadable}")
        return "\n".join(lines)


def _format_ratio(value: float) -> str:
    return "n/a" if math.isnan(value) else f"{value:.5f}"


def compute_metrics(results: Iterable["TestResult"]) -> EvaluationMetrics:
    """Tally evaluation counters from a sequence of test results.

    Args:
        results: Scored test documents.

    Returns:
        EvaluationMetrics for the whole run.
    """
    metrics = EvaluationMetrics()
    for result in results:
        metrics.total += 1
        if not result.ok:
            metrics.unreadable += 1
        if result.is_spam_prediction:
            metrics.spam_predicted += 1
        if result.is_correct:
            metrics.correct += 1
            if result.is_spam_prediction:
                metrics.correct_spam += 1
    return metrics
