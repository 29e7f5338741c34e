"""
OCR comparison against trusted transcriptions.

Compares system OCR output with a precompleted transcription (ground truth),
scores their similarity, classifies quality, and keeps low-scoring pairs as
training examples. Ground truth is always trusted: the recommendation only
says "use system OCR" when the system output already nearly matches it.

Example:
    >>> trainer = OCRComparisonTrainer()
    >>> result = trainer.compare_ocr(
    ...     "the slave owner sold",
    ...     "the slave owner sold six negroes",
    ...     {"document_type": "bill_of_sale"},
    ... )
    >>> result.discrepancies.missing_words
    ['six', 'negroes']
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from rapidfuzz.distance import Levenshtein

from histocr.config import TrainerConfig
from histocr.models import (
    CommonError,
    ComparisonResult,
    Discrepancies,
    MergedText,
    Quality,
    Recommendation,
    TextSummary,
    TrainingStats,
    WordDifference,
)
from histocr.storage.base import ComparisonLog
from histocr.storage.training import TrainingExampleStore
from histocr.text import count_words, extract_words, similarity

logger = logging.getLogger(__name__)

# Archaic misreads counted in both texts; only count mismatches are reported
COMMON_MISREADS = (
    (re.compile(r"rn"), "rn misread as m"),
    (re.compile(r"\bl\b"), "l misread as 1"),
    (re.compile(r"\bO\b"), "O misread as 0"),
    (re.compile(r"vv"), "vv misread as w"),
)


def classify_similarity(
    score: float,
    excellent_threshold: float = 0.95,
    good_threshold: float = 0.80,
) -> tuple[Quality, Recommendation]:
    """Map a similarity score to a quality label and recommendation.

    Thresholds are inclusive lower bounds.
    """
    if score >= excellent_threshold:
        return "excellent", "use_system_ocr"
    if score >= good_threshold:
        return "good_with_improvements_needed", "use_precompleted_ocr"
    return "poor_needs_training", "use_precompleted_ocr"


def detect_common_errors(system_text: str, ground_truth_text: str) -> list[CommonError]:
    """Report archaic misread patterns whose counts differ between the texts."""
    errors = []
    for pattern, description in COMMON_MISREADS:
        system_count = len(pattern.findall(system_text))
        ground_truth_count = len(pattern.findall(ground_truth_text))
        if system_count != ground_truth_count:
            errors.append(CommonError(description, system_count, ground_truth_count))
    return errors


def find_discrepancies(system_text: str, ground_truth_text: str) -> Discrepancies:
    """Find word-level differences between system OCR and ground truth.

    Missing and extra words use set membership, not counts: a ground-truth
    word that appears anywhere in the system output is not missing, even if
    it appears fewer times there.
    """
    system_words = extract_words(system_text)
    truth_words = extract_words(ground_truth_text)
    system_vocab = set(system_words)
    truth_vocab = set(truth_words)

    return Discrepancies(
        missing_words=[w for w in truth_words if w not in system_vocab],
        extra_words=[w for w in system_words if w not in truth_vocab],
        different_words=_aligned_substitutions(system_words, truth_words),
        common_errors=detect_common_errors(system_text, ground_truth_text),
    )


def _aligned_substitutions(system_words: list[str], truth_words: list[str]) -> list[WordDifference]:
    differences = []
    for op in Levenshtein.opcodes(system_words, truth_words):
        if op.tag != "replace":
            continue
        differences.append(
            WordDifference(
                system=" ".join(system_words[op.src_start : op.src_end]),
                ground_truth=" ".join(truth_words[op.dest_start : op.dest_end]),
            )
        )
    return differences


@dataclass
class OCRComparisonTrainer:
    """
    Compares system OCR with ground truth and collects training examples.

    Logging and training-example writes are best effort: a failing store
    is logged and the comparison is still returned.

    Attributes:
        comparison_log: Optional sink receiving every comparison.
        training_store: Where flagged comparisons are written. Defaults to a
            TrainingExampleStore at ``config.training_dir`` unless
            ``config.save_training_examples`` is False.
        config: Thresholds and storage location.
    """

    comparison_log: ComparisonLog | None = None
    training_store: TrainingExampleStore | None = None
    config: TrainerConfig = field(default_factory=TrainerConfig)

    def __post_init__(self) -> None:
        if self.training_store is None and self.config.save_training_examples:
            self.training_store = TrainingExampleStore(self.config.training_dir)

    def compare_ocr(
        self,
        system_text: str,
        ground_truth_text: str,
        metadata: dict[str, Any] | None = None,
    ) -> ComparisonResult:
        """
        Compare system OCR with a trusted transcription.

        Args:
            system_text: OCR text produced by the system
            ground_truth_text: Correct transcription
            metadata: Document metadata; ``document_type`` labels the result

        Returns:
            ComparisonResult with similarity, discrepancies and quality
        """
        metadata = dict(metadata or {})
        system_text = system_text or ""
        ground_truth_text = ground_truth_text or ""

        score = similarity(system_text, ground_truth_text)
        quality, recommendation = classify_similarity(
            score, self.config.excellent_threshold, self.config.good_threshold
        )

        result = ComparisonResult(
            document_type=str(metadata.get("document_type") or "unknown"),
            metadata=metadata,
            system_ocr=_summarize(system_text),
            ground_truth_ocr=_summarize(ground_truth_text),
            similarity=score,
            discrepancies=find_discrepancies(system_text, ground_truth_text),
            recommendation=recommendation,
            quality=quality,
        )

        if score < self.config.excellent_threshold:
            result.training_id = self._save_for_training(result)

        self._log_comparison(result)
        return result

    def merge_with_accompanying_text(
        self,
        ocr_text: str,
        accompanying_text: str,
        metadata: dict[str, Any] | None = None,
    ) -> MergedText:
        """
        Merge OCR text with text published alongside the scan.

        Args:
            ocr_text: OCR text of the document
            accompanying_text: Transcription or description from the source site
            metadata: ``text_source`` names where the accompanying text came from

        Returns:
            MergedText listing words found only in the accompanying text
        """
        if not accompanying_text or not accompanying_text.strip():
            return MergedText(primary_text=ocr_text, enhanced=False)

        metadata = metadata or {}
        ocr_vocab = set(extract_words(ocr_text))
        enhanced_words = [
            word for word in dict.fromkeys(extract_words(accompanying_text)) if word not in ocr_vocab
        ]

        logger.info(
            "Merged OCR with accompanying text: %d additional unique words", len(enhanced_words)
        )
        return MergedText(
            primary_text=ocr_text,
            additional_context=accompanying_text,
            enhanced_words=enhanced_words,
            source=metadata.get("text_source", "website"),
            enhanced=True,
        )

    def get_training_stats(self) -> TrainingStats:
        """Count stored training examples and their average similarity."""
        if self.training_store is None:
            return TrainingStats(0, 0.0, str(self.config.training_dir))

        try:
            return self.training_store.stats()
        except OSError as e:
            logger.warning("Error getting training stats: %s", e)
            return TrainingStats(0, 0.0, str(self.training_store.directory))

    def _save_for_training(self, result: ComparisonResult) -> str | None:
        if self.training_store is None:
            return None
        try:
            return self.training_store.save(result)
        except Exception as e:
            logger.warning("Error saving training data: %s", e)
            return None

    def _log_comparison(self, result: ComparisonResult) -> None:
        if self.comparison_log is None:
            return
        try:
            self.comparison_log.log_comparison(result)
        except Exception as e:
            logger.warning("Error logging OCR comparison: %s", e)


def _summarize(text: str) -> TextSummary:
    return TextSummary(text=text, length=len(text), word_count=count_words(text))
