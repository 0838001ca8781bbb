"""Tests for accuracy and precision."""

from __future__ import annotations

import math

from spam_master.engine import DocumentClass, DocumentStatus, TestResult
from spam_master.metrics import EvaluationMetrics, compute_metrics

HAM = DocumentClass.HAM
SPAM = DocumentClass.SPAM


def _result(probability: float, actual: DocumentClass, **kwargs) -> TestResult:
    return TestResult(filename="doc.txt", spam_probability=probability, actual_class=actual, **kwargs)


class TestComputeMetrics:
    """Tests for tallying counters from results."""

    def test_counters(self) -> None:
        results = [
            _result(0.1, HAM),   # correct ham
            _result(0.9, HAM),   # false positive
            _result(0.95, SPAM),  # correct spam
            _result(0.2, SPAM),  # missed spam
            _result(0.99, SPAM),  # correct spam
        ]
        metrics = compute_metrics(results)
        assert metrics.total == 5
        assert metrics.correct == 3
        assert metrics.spam_predicted == 3
        assert metrics.correct_spam == 2
        assert metrics.accuracy == 3 / 5
        assert metrics.precision == 2 / 3

    def test_accuracy_bounds(self) -> None:
        all_right = compute_metrics([_result(0.0, HAM), _result(1.0, SPAM)])
        all_wrong = compute_metrics([_result(1.0, HAM), _result(0.0, SPAM)])
        assert all_right.accuracy == 1.0
        assert all_wrong.accuracy == 0.0

    def test_precision_undefined_without_spam_predictions(self) -> None:
        metrics = compute_metrics([_result(0.1, HAM), _result(0.5, SPAM)])
        assert metrics.spam_predicted == 0
        assert math.isnan(metrics.precision)
        assert metrics.accuracy == 0.5

    def test_empty_run(self) -> None:
        metrics = compute_metrics([])
        assert metrics.total == 0
        assert math.isnan(metrics.accuracy)
        assert math.isnan(metrics.precision)

    def test_unreadable_counted(self) -> None:
        results = [
            _result(0.0, HAM, status=DocumentStatus.UNREADABLE, error="boom"),
            _result(0.0, SPAM, status=DocumentStatus.UNREADABLE, error="boom"),
        ]
        metrics = compute_metrics(results)
        assert metrics.unreadable == 2
        # Unreadable documents default to ham.
        assert metrics.correct == 1

    def test_unknown_class_is_never_correct(self) -> None:
        results = [
            TestResult(filename="a.txt", spam_probability=0.9),
            TestResult(filename="b.txt", spam_probability=0.1),
            _result(0.1, HAM),
        ]
        metrics = compute_metrics(results)
        assert metrics.total == 3
        assert metrics.correct == 1
        assert metrics.spam_predicted == 1
        assert metrics.correct_spam == 0
        assert metrics.precision == 0.0


class TestEvaluationMetrics:
    def test_to_dict_rounds_and_maps_nan_to_none(self) -> None:
        metrics = EvaluationMetrics(total=3, correct=2)
        data = metrics.to_dict()
        assert data["accuracy"] == 0.66667
        assert data["precision"] is None
        assert data["total"] == 3

    def test_summary(self) -> None:
        metrics = EvaluationMetrics(total=4, correct=3, spam_predicted=1, correct_spam=1)
        text = metrics.summary()
        assert "Accuracy:  0.75000" in text
        assert "Precision: 1.00000" in text
        assert "Unreadable" not in text

    def test_summary_undefined_precision(self) -> None:
        text = EvaluationMetrics(total=2, correct=2, unreadable=1).summary()
        assert "Precision: n/a" in text
        assert "Unreadable: 1" in text
