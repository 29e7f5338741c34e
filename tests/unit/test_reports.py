"""Tests for histocr.reports module."""

from histocr.models import (
    Correction,
    DocumentTypeStats,
    EnhancementResult,
    TrainingStats,
)
from histocr.reports import (
    format_comparison,
    format_enhancement,
    format_performance_stats,
    format_training_stats,
)


class TestFormatEnhancement:
    """Tests for format_enhancement."""

    def test_lists_corrections(self):
        result = EnhancementResult(
            text="John Hanry",
            original_text="Jno Hanry",
            corrections=[
                Correction("cursive_fix", "Jno", "John", 0.7, "Jno abbreviation"),
                Correction("name_suggestion", "Hanry", None, 0.8, "Possible: Harry", "Harry"),
            ],
            confidence=0.56,
        )

        report = format_enhancement(result)

        assert "John Hanry" in report
        assert "Corrections: 2" in report
        assert "Jno abbreviation" in report
        assert "(Harry?)" in report
        assert "0.70" in report
        assert "0.80" in report

    def test_no_corrections(self):
        report = format_enhancement(EnhancementResult("the deed", "the deed", [], 0.6))
        assert "Corrections: 0" in report
        assert "Reason" not in report


class TestFormatComparison:
    """Tests for format_comparison."""

    def test_report(self, trainer):
        result = trainer.compare_ocr(
            "the slave owncr sold", "the slave owner sold six negroes", {"document_type": "deed"}
        )

        report = format_comparison(result)

        assert "deed" in report
        assert "poor_needs_training" in report
        assert "Missing words: owner, six, negroes" in report
        assert "owncr" in report
        assert result.training_id in report


class TestFormatStats:
    """Tests for statistics tables."""

    def test_training_stats(self):
        report = format_training_stats(TrainingStats(3, 0.5, "training_data"))
        assert "Training examples" in report
        assert "50.0%" in report

    def test_performance_stats(self):
        stats = [DocumentTypeStats("will", 3, 0.78, 0.5, 1.0, 1, 1, 1, 0.67)]
        report = format_performance_stats(stats)
        assert "will" in report
        assert report.splitlines()[-1].split() == [
            "will", "3", "0.780", "0.500", "1.000", "1", "1", "1", "0.7"
        ]

    def test_empty_performance_stats(self):
        assert format_performance_stats([]) == "No comparisons logged."
