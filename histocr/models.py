"""
Data models for histocr.

These models represent the results of enhancement and comparison, and
the records exchanged with storage backends.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

CorrectionType = Literal[
    "learned", "cursive_fix", "name_correction", "name_suggestion", "abbreviation"
]
Quality = Literal["excellent", "good_with_improvements_needed", "poor_needs_training"]
Recommendation = Literal["use_system_ocr", "use_precompleted_ocr"]

# Learned-rule confidence grows with observations, capped below certainty
LEARNED_BASE_CONFIDENCE = 0.8
LEARNED_CONFIDENCE_PER_OBSERVATION = 0.02
LEARNED_MAX_CONFIDENCE = 0.99


# =============================================================================
# ENHANCEMENT
# =============================================================================


@dataclass
class LearnedCorrection:
    """A substring rewrite rule observed ``frequency`` times."""

    original: str
    corrected: str
    frequency: int = 1

    @property
    def confidence(self) -> float:
        """Confidence of applying this rule."""
        return min(
            LEARNED_BASE_CONFIDENCE + self.frequency * LEARNED_CONFIDENCE_PER_OBSERVATION,
            LEARNED_MAX_CONFIDENCE,
        )


@dataclass
class Correction:
    """A single change (or suggestion) made during enhancement."""

    type: CorrectionType
    original: str
    corrected: str | None  # None for suggestions that were not applied
    confidence: float
    reason: str
    suggested: str | None = None

    @property
    def applied(self) -> bool:
        """Whether this correction changed the text."""
        return self.corrected is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: dict[str, Any] = {
            "type": self.type,
            "original": self.original,
            "confidence": round(self.confidence, 4),
            "reason": self.reason,
        }
        if self.corrected is not None:
            data["corrected"] = self.corrected
        if self.suggested is not None:
            data["suggested"] = self.suggested
            data["auto_applied"] = False
        return data


@dataclass
class EnhancementResult:
    """Result of enhancing one OCR text."""

    text: str
    original_text: str
    corrections: list[Correction] = field(default_factory=list)
    confidence: float = 0.0

    @property
    def correction_count(self) -> int:
        """Number of corrections and suggestions recorded."""
        return len(self.corrections)

    @property
    def enhancement_applied(self) -> bool:
        """Whether any correction or suggestion was recorded."""
        return self.correction_count > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "text": self.text,
            "original_text": self.original_text,
            "corrections": [c.to_dict() for c in self.corrections],
            "confidence": round(self.confidence, 4),
            "correction_count": self.correction_count,
            "enhancement_applied": self.enhancement_applied,
        }


@dataclass
class OCRInput:
    """One item for batch enhancement."""

    text: str
    confidence: float = 0.5


# =============================================================================
# COMPARISON
# =============================================================================


@dataclass
class TextSummary:
    """One side of a comparison: the raw text and its size."""

    text: str
    length: int
    word_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "length": self.length, "word_count": self.word_count}


@dataclass
class WordDifference:
    """Aligned substitution: what the system read where ground truth differs."""

    system: str
    ground_truth: str

    def to_dict(self) -> dict[str, Any]:
        return {"system": self.system, "ground_truth": self.ground_truth}


@dataclass
class CommonError:
    """Count mismatch for one archaic misread pattern."""

    type: str
    system_count: int
    ground_truth_count: int

    @property
    def difference(self) -> int:
        return abs(self.system_count - self.ground_truth_count)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "system_count": self.system_count,
            "ground_truth_count": self.ground_truth_count,
            "difference": self.difference,
        }


@dataclass
class Discrepancies:
    """Word-level differences between a transcription and ground truth."""

    missing_words: list[str] = field(default_factory=list)
    extra_words: list[str] = field(default_factory=list)
    different_words: list[WordDifference] = field(default_factory=list)
    common_errors: list[CommonError] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Missing plus extra words."""
        return len(self.missing_words) + len(self.extra_words)

    def to_dict(self) -> dict[str, Any]:
        return {
            "missing_words": list(self.missing_words),
            "extra_words": list(self.extra_words),
            "different_words": [d.to_dict() for d in self.different_words],
            "common_errors": [e.to_dict() for e in self.common_errors],
        }


@dataclass
class ComparisonResult:
    """Result of comparing a system transcription against ground truth."""

    document_type: str
    system_ocr: TextSummary
    ground_truth_ocr: TextSummary
    similarity: float
    discrepancies: Discrepancies
    recommendation: Recommendation
    quality: Quality
    metadata: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    training_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp,
            "document_type": self.document_type,
            "metadata": self.metadata,
            "system_ocr": self.system_ocr.to_dict(),
            "ground_truth_ocr": self.ground_truth_ocr.to_dict(),
            "similarity": self.similarity,
            "discrepancies": self.discrepancies.to_dict(),
            "recommendation": self.recommendation,
            "quality": self.quality,
            "training_id": self.training_id,
        }


@dataclass
class MergedText:
    """OCR text merged with accompanying text from the source page."""

    primary_text: str
    additional_context: str = ""
    enhanced_words: list[str] = field(default_factory=list)
    source: str = "website"
    enhanced: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "primary_text": self.primary_text,
            "additional_context": self.additional_context,
            "enhanced_words": list(self.enhanced_words),
            "source": self.source,
            "enhanced": self.enhanced,
        }


@dataclass
class TrainingStats:
    """Summary of stored training examples."""

    total_training_examples: int
    average_similarity: float
    storage_location: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_training_examples": self.total_training_examples,
            "average_similarity": round(self.average_similarity, 4),
            "storage_location": self.storage_location,
        }


@dataclass
class DocumentTypeStats:
    """Logged comparison performance for one document type."""

    document_type: str
    total_comparisons: int
    avg_similarity: float
    min_similarity: float
    max_similarity: float
    excellent_count: int
    good_count: int
    poor_count: int
    avg_discrepancies: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "document_type": self.document_type,
            "total_comparisons": self.total_comparisons,
            "avg_similarity": round(self.avg_similarity, 4),
            "min_similarity": round(self.min_similarity, 4),
            "max_similarity": round(self.max_similarity, 4),
            "excellent_count": self.excellent_count,
            "good_count": self.good_count,
            "poor_count": self.poor_count,
            "avg_discrepancies": round(self.avg_discrepancies, 2),
        }
