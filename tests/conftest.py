"""Shared test fixtures for spam-master tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

import pytest

Documents = dict[str, Union[str, bytes]]

# Each class has distinctive vocabulary so the expected predictions can be
# worked out by hand.
TRAIN_HAM = {
    "h1.txt": "Meeting tomorrow about the project schedule",
    "h2.txt": "Please review the project report before the meeting",
}
TRAIN_HAM_2 = {
    "h3.txt": "Lunch with the team after the meeting",
}
TRAIN_SPAM = {
    "s1.txt": "Win free money now click here",
    "s2.txt": "Free prize claim your free money",
}
TEST_HAM = {
    "ham_b.txt": "Team lunch today",
    "ham_a.txt": "Project meeting moved to tomorrow",
}
TEST_SPAM = {
    "spam_a.txt": "Claim your free money prize now",
    "spam_b.txt": "hello",
}


def write_documents(directory: Path, documents: Documents) -> None:
    """Create ``directory`` and write each document into it."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in documents.items():
        path = directory / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_corpus(tmp_path: Path) -> Callable[..., Path]:
    """Factory building a corpus root; collections passed as None are not created."""

    def _make(
        train_ham: Optional[Documents] = None,
        train_ham2: Optional[Documents] = None,
        train_spam: Optional[Documents] = None,
        test_ham: Optional[Documents] = None,
        test_spam: Optional[Documents] = None,
    ) -> Path:
        root = tmp_path / "corpus"
        root.mkdir(exist_ok=True)
        collections = {
            ("train", "ham"): train_ham,
            ("train", "ham2"): train_ham2,
            ("train", "spam"): train_spam,
            ("test", "ham"): test_ham,
            ("test", "spam"): test_spam,
        }
        for (phase, label), documents in collections.items():
            if documents is not None:
                write_documents(root / phase / label, documents)
        return root

    return _make


@pytest.fixture
def corpus_root(make_corpus: Callable[..., Path]) -> Path:
    """A complete corpus with all five collections."""
    return make_corpus(
        train_ham=TRAIN_HAM,
        train_ham2=TRAIN_HAM_2,
        train_spam=TRAIN_SPAM,
        test_ham=TEST_HAM,
        test_spam=TEST_SPAM,
    )


@pytest.fixture
def free_corpus_root(make_corpus: Callable[..., Path]) -> Path:
    """Two ham documents with "free" once, one spam document with it three times."""
    return make_corpus(
        train_ham={"h1.txt": "free", "h2.txt": "free"},
        train_ham2={},
        train_spam={"s1.txt": "free free free"},
        test_ham={"t1.txt": "free"},
        test_spam={},
    )
