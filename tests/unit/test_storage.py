"""Tests for histocr.storage backends."""

import json

import pytest

from histocr.exceptions import StorageError
from histocr.models import (
    ComparisonResult,
    Discrepancies,
    TextSummary,
)
from histocr.storage import OCRDatabase, TrainingExampleStore
from histocr.trainer import classify_similarity


def make_comparison(
    document_type: str = "will",
    similarity: float = 0.5,
    missing: list[str] | None = None,
) -> ComparisonResult:
    """Helper to create comparison results."""
    quality, recommendation = classify_similarity(similarity)
    return ComparisonResult(
        document_type=document_type,
        system_ocr=TextSummary("the deed", 8, 2),
        ground_truth_ocr=TextSummary("the deed of sale", 16, 4),
        similarity=similarity,
        discrepancies=Discrepancies(missing_words=missing or []),
        recommendation=recommendation,
        quality=quality,
        metadata={"document_type": document_type},
    )


class TestLearnedCorrections:
    """Tests for grouped correction reads."""

    def test_min_frequency(self, database):
        database.record_correction("teh", "the")
        database.record_correction("teh", "the")
        database.record_correction("Hopweli", "Hopewell")

        learned = database.load_learned_corrections(min_frequency=2)

        assert [(c.original, c.corrected, c.frequency) for c in learned] == [("teh", "the", 2)]

    def test_most_frequent_first(self, database):
        for _ in range(2):
            database.record_correction("aud", "and")
        for _ in range(3):
            database.record_correction("thc", "the")

        learned = database.load_learned_corrections(min_frequency=1)

        assert [c.original for c in learned] == ["thc", "aud"]

    def test_limit(self, database):
        for original in ("a1", "b1", "c1"):
            database.record_correction(original, "x")

        assert len(database.load_learned_corrections(min_frequency=1, limit=2)) == 2

    def test_context_stored(self, database):
        database.record_correction("teh", "the", context="teh deed")
        assert database.get_stats()["total_corrections"] == 1

    def test_unreachable_database(self, tmp_path):
        with pytest.raises(StorageError):
            OCRDatabase(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'histocr.db'}")


class TestComparisonLog:
    """Tests for comparison logging and performance stats."""

    def test_log_and_read_back(self, database):
        database.log_comparison(make_comparison(missing=["sale", "of"]))

        [row] = database.recent_comparisons()
        assert row["document_type"] == "will"
        assert row["quality_assessment"] == "poor_needs_training"
        assert row["discrepancy_count"] == 2

    def test_recent_limit(self, database):
        for _ in range(3):
            database.log_comparison(make_comparison())
        assert len(database.recent_comparisons(limit=2)) == 2

    def test_performance_stats(self, database):
        database.log_comparison(make_comparison("will", 1.0))
        database.log_comparison(make_comparison("will", 0.85))
        database.log_comparison(make_comparison("will", 0.5, missing=["x", "y"]))
        database.log_comparison(make_comparison("deed", 0.9))

        stats = {s.document_type: s for s in database.performance_stats()}

        will = stats["will"]
        assert will.total_comparisons == 3
        assert will.avg_similarity == pytest.approx((1.0 + 0.85 + 0.5) / 3)
        assert will.min_similarity == pytest.approx(0.5)
        assert will.max_similarity == pytest.approx(1.0)
        assert (will.excellent_count, will.good_count, will.poor_count) == (1, 1, 1)
        assert will.avg_discrepancies == pytest.approx(2 / 3)
        assert stats["deed"].total_comparisons == 1

    def test_performance_stats_ordering(self, database):
        database.log_comparison(make_comparison("deed"))
        database.log_comparison(make_comparison("will"))
        database.log_comparison(make_comparison("will"))

        assert [s.document_type for s in database.performance_stats()] == ["will", "deed"]

    def test_empty_database(self, database):
        assert database.performance_stats() == []
        assert database.recent_comparisons() == []
        assert database.get_stats() == {"total_corrections": 0, "total_comparisons": 0}


class TestTrainingExampleStore:
    """Tests for the JSON training example directory."""

    def test_save_creates_directory(self, training_dir):
        store = TrainingExampleStore(training_dir)
        training_id = store.save(make_comparison())

        assert len(training_id) == 16
        [path] = list(training_dir.iterdir())
        example = json.loads(path.read_text(encoding="utf-8"))
        assert example["input"] == "the deed"
        assert example["ground_truth"] == "the deed of sale"
        assert example["similarity"] == 0.5

    def test_document_type_sanitized_in_filename(self, training_dir):
        store = TrainingExampleStore(training_dir)
        store.save(make_comparison(document_type="bill of/sale"))

        [path] = list(training_dir.iterdir())
        assert "_bill_of_sale_" in path.name
        assert json.loads(path.read_text(encoding="utf-8"))["document_type"] == "bill of/sale"

    def test_stats_missing_directory(self, training_dir):
        stats = TrainingExampleStore(training_dir).stats()
        assert stats.total_training_examples == 0
        assert stats.average_similarity == 0.0

    def test_malformed_examples_skipped(self, training_dir):
        store = TrainingExampleStore(training_dir)
        store.save(make_comparison(similarity=0.6))
        (training_dir / "training_list.json").write_text("[1, 2]", encoding="utf-8")
        (training_dir / "training_bad.json").write_text("{", encoding="utf-8")
        (training_dir / "notes.json").write_text("{}", encoding="utf-8")

        stats = store.stats()

        assert stats.total_training_examples == 1
        assert stats.average_similarity == pytest.approx(0.6)
