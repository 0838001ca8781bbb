"""Document sources for training and testing.

A corpus root holds five document collections in a fixed layout::

    <root>/train/ham
    <root>/train/ham2
    <root>/train/spam
    <root>/test/ham
    <root>/test/spam

Collections are enumerated in lexicographic filename order so that test
results come back in a reproducible order. A missing collection is
treated as empty. Reading a document never raises for I/O or decoding
problems; the outcome is reported through ``DocumentRead`` instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

TRAIN_DIR = "train"
TEST_DIR = "test"
SPAM_DIR = "spam"
HAM_DIR = "ham"
HAM_DIR_2 = "ham2"


@dataclass(frozen=True)
class CorpusLayout:
    """Paths of the five document collections under a corpus root."""

    root: Path

    @classmethod
    def from_root(cls, root: str | Path | None = None) -> "CorpusLayout":
        """Build a layout, defaulting to the current working directory."""
        return cls(root=Path(root) if root is not None else Path("."))

    @property
    def train_ham(self) -> Path:
        return self.root / TRAIN_DIR / HAM_DIR

    @property
    def train_ham_2(self) -> Path:
        return self.root / TRAIN_DIR / HAM_DIR_2

    @property
    def train_spam(self) -> Path:
        return self.root / TRAIN_DIR / SPAM_DIR

    @property
    def test_ham(self) -> Path:
        return self.root / TEST_DIR / HAM_DIR

    @property
    def test_spam(self) -> Path:
        return self.root / TEST_DIR / SPAM_DIR

    @property
    def train_ham_dirs(self) -> tuple[Path, Path]:
        """Both ham training collections, merged during training."""
        return (self.train_ham, self.train_ham_2)

    def missing(self, include_test: bool = True) -> list[Path]:
        """Collections that do not exist as directories.

        Args:
            include_test: Also check the two test collections.
        """
        paths = [self.train_ham, self.train_ham_2, self.train_spam]
        if include_test:
            paths += [self.test_ham, self.test_spam]
        return [p for p in paths if not p.is_dir()]


@dataclass(frozen=True)
class DocumentRead:
    """Outcome of reading one document.

    Attributes:
        path: The document that was read.
        text: Decoded content (empty when the read failed).
        error: Failure description, or None on success.
    """

    path: Path
    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def filename(self) -> str:
        return self.path.name


def list_documents(directory: Path) -> list[Path]:
    """List the documents in a collection, sorted by filename.

    Sub-directories are skipped. A missing or unreadable directory yields
    an empty list.

    Args:
        directory: Collection directory.

    Returns:
        Document paths in lexicographic filename order.
    """
    if not directory.is_dir():
        logger.warning("Document collection %s not found, treating as empty", directory)
        return []

    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.warning("Cannot list %s (%s), treating as empty", directory, exc)
        return []

    return sorted((p for p in entries if not p.is_dir()), key=lambda p: p.name)


def read_document(path: Path, encoding: str = "utf-8") -> DocumentRead:
    """Read a document as text.

    The file handle is always released, including when decoding fails.

    Args:
        path: Path to the document.
        encoding: Text encoding used for strict decoding.

    Returns:
        DocumentRead carrying either the text or the error description.
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read document %s: %s", path, exc)
        return DocumentRead(path=path, error=f"{type(exc).__name__}: {exc}")

    return DocumentRead(path=path, text=text)
