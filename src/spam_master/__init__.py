"""Spam Master -- word-frequency Bayesian spam filter."""

__version__ = "1.0.0"

from .config import ClassifierConfig
from .documents import CorpusLayout, DocumentRead, list_documents, read_document
from .engine import (
    ClassificationEngine,
    DocumentClass,
    DocumentStatus,
    TestResult,
    TestRun,
    TrainingSummary,
)
from .exceptions import ConfigError, SpamMasterError, UntrainedModelError
from .metrics import EvaluationMetrics, compute_metrics
from .model import FrequencyRecord, WordFrequencyModel
from .tokenizer import is_token, tokenize

__all__ = [
    # Engine
    "ClassificationEngine",
    "DocumentClass",
    "DocumentStatus",
    "TestResult",
    "TestRun",
    "TrainingSummary",
    # Model
    "FrequencyRecord",
    "WordFrequencyModel",
    # Metrics
    "EvaluationMetrics",
    "compute_metrics",
    # Documents
    "CorpusLayout",
    "DocumentRead",
    "list_documents",
    "read_document",
    # Tokenization
    "is_token",
    "tokenize",
    # Configuration and errors
    "ClassifierConfig",
    "ConfigError",
    "SpamMasterError",
    "UntrainedModelError",
]
