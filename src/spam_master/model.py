"""Word-frequency model built during training.

Maps each token to four counters describing how it was distributed over
the ham and spam training documents. Classification only reads the
per-class *file* counts; the totals are kept for inspection.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Iterator, Optional


@dataclass
class FrequencyRecord:
    """Occurrence statistics for one token.

    Attributes:
        ham_file_count: Number of ham documents containing the token.
        ham_total: Occurrences of the token across all ham documents.
        spam_file_count: Number of spam documents containing the token.
        spam_total: Occurrences of the token across all spam documents.
    """

    ham_file_count: int = 0
    ham_total: int = 0
    spam_file_count: int = 0
    spam_total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


class WordFrequencyModel:
    """Mapping from token to ``FrequencyRecord``.

    Example::

        model = WordFrequencyModel()
        model.record_occurrence("free", is_spam=True, first_in_document=True)
        model.record_occurrence("free", is_spam=True, first_in_document=False)

        record = model.lookup("free")
        record.spam_file_count  # 1
        record.spam_total       # 2
    """

    def __init__(self) -> None:
        self._records: dict[str, FrequencyRecord] = {}

    def clear(self) -> None:
        """Discard all records."""
        self._records.clear()

    def record_occurrence(
        self,
        token: str,
        *,
        is_spam: bool,
        first_in_document: bool,
    ) -> None:
        """Count one occurrence of ``token`` in a training document.

        Args:
            token: The token that was seen.
            is_spam: Class of the document being scanned.
            first_in_document: True the first time the token is seen in
                the current document; only then is the file count bumped.
        """
        record = self._records.get(token)
        if record is None:
            record = self._records[token] = FrequencyRecord()

        if is_spam:
            record.spam_total += 1
            if first_in_document:
                record.spam_file_count += 1
        else:
            record.ham_total += 1
            if first_in_document:
                record.ham_file_count += 1

    def lookup(self, token: str) -> Optional[FrequencyRecord]:
        """Return the record for ``token``, or None if it was never seen."""
        return self._records.get(token)

    def items(self) -> list[tuple[str, FrequencyRecord]]:
        """(token, record) pairs sorted by token."""
        return sorted(self._records.items())

    def to_dict(self) -> dict[str, dict]:
        return {token: record.to_dict() for token, record in self.items()}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, token: object) -> bool:
        return token in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._records))
