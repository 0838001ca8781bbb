"""Training and scoring engine for the spam filter.

The engine trains a ``WordFrequencyModel`` from the labeled training
collections of a corpus root and then scores the test collections.

Scoring combines per-token evidence in log-odds space. For each distinct
token of a document that was seen during training::

    p_ws = (spam_file_count + k) / spam_file_total
    p_wh = (ham_file_count + k) / ham_file_total
    p_sw = p_ws / (p_ws + p_wh)
    eta += ln(1 - p_sw) - ln(p_sw)

and the document's spam probability is ``1 / (1 + e**eta)``. ``k`` is the
smoothing constant (1 by default). Tokens never seen in training are
ignored, so a document with no known tokens scores exactly 0.5.

Example::

    engine = ClassificationEngine("corpus/")
    engine.train()
    run = engine.test()

    for result in run.results:
        print(result.filename, result.predicted_class.value)
    print(run.metrics.accuracy, run.metrics.precision)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from .config import DEFAULT_SPAM_THRESHOLD, ClassifierConfig
from .documents import CorpusLayout, list_documents, read_document
from .exceptions import UntrainedModelError
from .metrics import EvaluationMetrics, compute_metrics
from .model import FrequencyRecord, WordFrequencyModel
from .tokenizer import iter_tokens, unique_tokens

logger = logging.getLogger(__name__)


class DocumentClass(str, Enum):
    """The two document classes."""

    SPAM = "Spam"
    HAM = "Ham"


class DocumentStatus(str, Enum):
    """Whether a test document could be read."""

    OK = "ok"
    UNREADABLE = "unreadable"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TestResult:
    """Score for a single test document.

    Attributes:
        filename: Name of the document file.
        spam_probability: Computed probability that the document is spam.
        actual_class: Class given by the collection the document came from,
            or None when the document was scored without a known class.
        spam_threshold: Threshold the prediction is made against.
        status: ``UNREADABLE`` if the document could not be read, in which
            case ``spam_probability`` is 0.0.
        error: Read failure description for unreadable documents.
    """

    __test__ = False

    filename: str
    spam_probability: float
    actual_class: Optional[DocumentClass] = None
    spam_threshold: float = DEFAULT_SPAM_THRESHOLD
    status: DocumentStatus = DocumentStatus.OK
    error: Optional[str] = None

    @property
    def predicted_class(self) -> DocumentClass:
        if self.spam_probability > self.spam_threshold:
            return DocumentClass.SPAM
        return DocumentClass.HAM

    @property
    def is_spam_prediction(self) -> bool:
        return self.predicted_class is DocumentClass.SPAM

    @property
    def is_correct(self) -> bool:
        return self.actual_class is not None and self.predicted_class is self.actual_class

    @property
    def ok(self) -> bool:
        return self.status is DocumentStatus.OK

    @property
    def rounded_probability(self) -> str:
        """Spam probability to five decimal places."""
        return f"{self.spam_probability:.5f}"

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "spam_probability": round(self.spam_probability, 5),
            "actual_class": self.actual_class.value if self.actual_class else None,
            "predicted_class": self.predicted_class.value,
            "status": self.status.value,
            "error": self.error,
        }


@dataclass
class TestRun:
    """Ordered test results (ham collection first) and their metrics."""

    __test__ = False

    results: list[TestResult] = field(default_factory=list)
    metrics: EvaluationMetrics = field(default_factory=EvaluationMetrics)

    @property
    def accuracy(self) -> float:
        return self.metrics.accuracy

    @property
    def precision(self) -> float:
        return self.metrics.precision

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "metrics": self.metrics.to_dict(),
        }


@dataclass
class TrainingSummary:
    """Document counts from a training run."""

    ham_documents: int = 0
    spam_documents: int = 0
    vocabulary_size: int = 0
    unreadable: int = 0

    def to_dict(self) -> dict:
        return {
            "ham_documents": self.ham_documents,
            "spam_documents": self.spam_documents,
            "vocabulary_size": self.vocabulary_size,
            "unreadable": self.unreadable,
        }


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class ClassificationEngine:
    """Word-frequency Bayesian spam classifier bound to one corpus root.

    Each engine owns its model; re-training discards everything learned
    before. Scoring requires at least one ham and one spam training
    document and raises ``UntrainedModelError`` otherwise.

    Args:
        root: Corpus root directory. Defaults to the working directory.
        config: Classifier settings. Defaults to ``ClassifierConfig()``.
    """

    def __init__(
        self,
        root: str | Path | None = None,
        config: ClassifierConfig | None = None,
    ) -> None:
        self.layout = CorpusLayout.from_root(root)
        self.config = config or ClassifierConfig()
        self.model = WordFrequencyModel()
        self.ham_file_total = 0
        self.spam_file_total = 0
        self._is_trained = False

    @property
    def root(self) -> Path:
        return self.layout.root

    @property
    def is_trained(self) -> bool:
        """Whether ``train()`` has run, regardless of what it found."""
        return self._is_trained

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self) -> TrainingSummary:
        """Build the model from the training collections.

        Reads ``train/ham`` and ``train/ham2`` as ham and ``train/spam``
        as spam. Unreadable documents still count toward the class totals
        but contribute no tokens.

        Returns:
            TrainingSummary with the document counts and vocabulary size.
        """
        self.model.clear()
        self.ham_file_total = 0
        self.spam_file_total = 0
        unreadable = 0

        for directory in self.layout.train_ham_dirs:
            documents = list_documents(directory)
            self.ham_file_total += len(documents)
            unreadable += self._ingest(documents, is_spam=False)

        documents = list_documents(self.layout.train_spam)
        self.spam_file_total = len(documents)
        unreadable += self._ingest(documents, is_spam=True)

        self._is_trained = True
        summary = TrainingSummary(
            ham_documents=self.ham_file_total,
            spam_documents=self.spam_file_total,
            vocabulary_size=len(self.model),
            unreadable=unreadable,
        )
        logger.info(
            "Trained on %d ham and %d spam documents (%d tokens)",
            summary.ham_documents,
            summary.spam_documents,
            summary.vocabulary_size,
        )
        return summary

    def _ingest(self, documents: Iterable[Path], *, is_spam: bool) -> int:
        """Add documents to the model; return how many could not be read."""
        failures = 0
        for path in documents:
            doc = read_document(path, self.config.encoding)
            if not doc.ok:
                failures += 1
                continue

            counted: set[str] = set()
            for token in iter_tokens(doc.text):
                first = token not in counted
                if first:
                    counted.add(token)
                self.model.record_occurrence(token, is_spam=is_spam, first_in_document=first)
            logger.debug("Ingested %s (%d distinct tokens)", path, len(counted))
        return failures

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _require_trained(self) -> None:
        if not self._is_trained:
            raise UntrainedModelError("Engine not trained. Call train() first.")
        empty = []
        if self.spam_file_total == 0:
            empty.append(f"spam ({self.layout.train_spam})")
        if self.ham_file_total == 0:
            empty.append(f"ham ({self.layout.train_ham}, {self.layout.train_ham_2})")
        if empty:
            raise UntrainedModelError(
                "Cannot classify without training documents for: " + ", ".join(empty)
            )

    def spam_probability_of(self, token: str) -> Optional[float]:
        """Smoothed ``P(spam | token)``, or None for a token not seen in training.

        Raises:
            UntrainedModelError: If either class had no training documents.
        """
        self._require_trained()
        record = self.model.lookup(token)
        if record is None:
            return None
        return self._spam_given_word(record)

    def _spam_given_word(self, record: FrequencyRecord) -> float:
        k = self.config.smoothing_constant
        p_word_spam = (record.spam_file_count + k) / self.spam_file_total
        p_word_ham = (record.ham_file_count + k) / self.ham_file_total
        return p_word_spam / (p_word_spam + p_word_ham)

    def classify_tokens(self, tokens: Iterable[str]) -> float:
        """Spam probability of a token stream.

        Each distinct token counts once; unknown tokens are skipped.
        """
        self._require_trained()
        eta = 0.0
        for token in unique_tokens(tokens):
            record = self.model.lookup(token)
            if record is None:
                continue
            p_spam_word = self._spam_given_word(record)
            eta += math.log(1 - p_spam_word) - math.log(p_spam_word)

        try:
            return 1.0 / (1.0 + math.exp(eta))
        except OverflowError:
            return 0.0

    def classify_text(self, text: str) -> float:
        """Spam probability of a document's text.

        Raises:
            UntrainedModelError: If either class had no training documents.
        """
        return self.classify_tokens(iter_tokens(text))

    def classify_document(
        self,
        path: str | Path,
        actual_class: Optional[DocumentClass] = None,
    ) -> TestResult:
        """Read and score one document.

        A document that cannot be read is reported with probability 0.0
        and status ``UNREADABLE`` instead of raising.

        Args:
            path: Path to the document.
            actual_class: Known class of the document, if any.

        Returns:
            TestResult for the document.

        Raises:
            UntrainedModelError: If either class had no training documents.
        """
        self._require_trained()
        doc = read_document(Path(path), self.config.encoding)
        threshold = self.config.spam_threshold

        if not doc.ok:
            return TestResult(
                filename=doc.filename,
                spam_probability=0.0,
                actual_class=actual_class,
                spam_threshold=threshold,
                status=DocumentStatus.UNREADABLE,
                error=doc.error,
            )

        probability = self.classify_text(doc.text)
        logger.debug("Scored %s: %.5f", doc.path, probability)
        return TestResult(
            filename=doc.filename,
            spam_probability=probability,
            actual_class=actual_class,
            spam_threshold=threshold,
        )

    def is_spam(self, text: str) -> bool:
        """True if ``text`` scores strictly above the spam threshold."""
        return self.classify_text(text) > self.config.spam_threshold

    # ------------------------------------------------------------------
    # Testing
    # ------------------------------------------------------------------

    def test(self) -> TestRun:
        """Score every document in the test collections.

        Returns:
            TestRun with ``test/ham`` results first, then ``test/spam``,
            each in filename order, plus the evaluation metrics.

        Raises:
            UntrainedModelError: If either class had no training documents.
        """
        self._require_trained()
        results: list[TestResult] = []
        collections = (
            (self.layout.test_ham, DocumentClass.HAM),
            (self.layout.test_spam, DocumentClass.SPAM),
        )
        for directory, actual_class in collections:
            for path in list_documents(directory):
                results.append(self.classify_document(path, actual_class))

        run = TestRun(results=results, metrics=compute_metrics(results))
        logger.info(
            "Tested %d documents: accuracy=%s precision=%s",
            run.metrics.total,
            run.metrics.accuracy,
            run.metrics.precision,
        )
        return run

    def most_indicative(
        self,
        top_n: int = 20,
        *,
        spam: bool = True,
    ) -> list[tuple[str, float]]:
        """Tokens whose presence most strongly suggests one class.

        Args:
            top_n: Number of tokens to return.
            spam: Rank by spam probability (True) or ham probability.

        Returns:
            List of (token, P(spam | token)) tuples, strongest first.
        """
        self._require_trained()
        scored = [(token, self._spam_given_word(record)) for token, record in self.model.items()]
        if spam:
            scored.sort(key=lambda x: (-x[1], x[0]))
        else:
            scored.sort(key=lambda x: (x[1], x[0]))
        return scored[:top_n]
