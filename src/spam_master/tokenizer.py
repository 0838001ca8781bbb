"""Tokenization for spam classification.

A token is a whitespace-delimited word that, once lower-cased, consists
only of the letters ``a`` to ``z``. Anything else (digits, punctuation,
accented letters, mixed content) is discarded outright rather than being
trimmed down to its alphabetic part, so ``"free!"`` carries no evidence.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator

_TOKEN_RE = re.compile(r"[a-z]+")


def is_token(text: str) -> bool:
    """Return True if ``text`` is a valid (already lower-cased) token."""
    return _TOKEN_RE.fullmatch(text) is not None


def iter_tokens(text: str) -> Iterator[str]:
    """Yield every token in ``text`` in document order, repeats included."""
    for word in text.split():
        word = word.lower()
        if is_token(word):
            yield word


def tokenize(text: str) -> list[str]:
    """Extract lowercase alphabetic tokens from text."""
    return list(iter_tokens(text))


def unique_tokens(tokens: Iterable[str]) -> list[str]:
    """Distinct tokens in first-seen order."""
    seen: set[str] = set()
    ordered: list[str] = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            ordered.append(token)
    return ordered
