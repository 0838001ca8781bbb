"""Tests for the word-frequency model."""

from __future__ import annotations

from spam_master.model import FrequencyRecord, WordFrequencyModel


class TestFrequencyRecord:
    def test_defaults_are_zero(self) -> None:
        record = FrequencyRecord()
        assert record.to_dict() == {
            "ham_file_count": 0,
            "ham_total": 0,
            "spam_file_count": 0,
            "spam_total": 0,
        }


class TestWordFrequencyModel:
    """Tests for recording and looking up token statistics."""

    def test_lookup_unknown_token(self) -> None:
        model = WordFrequencyModel()
        assert model.lookup("free") is None
        assert "free" not in model

    def test_first_occurrence_creates_record(self) -> None:
        model = WordFrequencyModel()
        model.record_occurrence("free", is_spam=True, first_in_document=True)
        assert model.lookup("free") == FrequencyRecord(spam_file_count=1, spam_total=1)

    def test_repeat_in_document_only_bumps_total(self) -> None:
        model = WordFrequencyModel()
        model.record_occurrence("free", is_spam=True, first_in_document=True)
        model.record_occurrence("free", is_spam=True, first_in_document=False)
        model.record_occurrence("free", is_spam=True, first_in_document=False)
        record = model.lookup("free")
        assert record.spam_file_count == 1
        assert record.spam_total == 3
        assert record.ham_file_count == 0
        assert record.ham_total == 0

    def test_classes_are_counted_separately(self) -> None:
        model = WordFrequencyModel()
        model.record_occurrence("meeting", is_spam=False, first_in_document=True)
        model.record_occurrence("meeting", is_spam=False, first_in_document=True)
        model.record_occurrence("meeting", is_spam=True, first_in_document=True)
        record = model.lookup("meeting")
        assert record.ham_file_count == 2
        assert record.ham_total == 2
        assert record.spam_file_count == 1
        assert record.spam_total == 1

    def test_file_count_never_exceeds_total(self) -> None:
        model = WordFrequencyModel()
        pattern = [True, False, False, True, False]
        for is_spam in (True, False):
            for first in pattern:
                model.record_occurrence("x", is_spam=is_spam, first_in_document=first)
        record = model.lookup("x")
        assert record.ham_file_count <= record.ham_total
        assert record.spam_file_count <= record.spam_total

    def test_clear(self) -> None:
        model = WordFrequencyModel()
        model.record_occurrence("free", is_spam=True, first_in_document=True)
        model.clear()
        assert len(model) == 0
        assert model.lookup("free") is None

    def test_iteration_is_sorted(self) -> None:
        model = WordFrequencyModel()
        for token in ("money", "free", "win"):
            model.record_occurrence(token, is_spam=True, first_in_document=True)
        assert list(model) == ["free", "money", "win"]
        assert [t for t, _ in model.items()] == ["free", "money", "win"]
        assert list(model.to_dict()) == ["free", "money", "win"]

    def test_order_independent(self) -> None:
        events = [
            ("free", True, True),
            ("free", True, False),
            ("meeting", False, True),
            ("free", False, True),
        ]
        forward = WordFrequencyModel()
        backward = WordFrequencyModel()
        for token, is_spam, first in events:
            forward.record_occurrence(token, is_spam=is_spam, first_in_document=first)
        for token, is_spam, first in reversed(events):
            backward.record_occurrence(token, is_spam=is_spam, first_in_document=first)
        assert forward.to_dict() == backward.to_dict()
