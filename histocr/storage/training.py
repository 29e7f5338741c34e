"""
Training-example store for flagged OCR discrepancies.

One JSON document per comparison that fell below the "excellent"
threshold. Each document keeps both original (pre-normalization) texts so
examples can be re-scored when normalization rules change.
"""

from __future__ import annotations

import json
import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from histocr.models import ComparisonResult, TrainingStats

logger = logging.getLogger(__name__)

FILENAME_PREFIX = "training_"
_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w-]")


@dataclass
class TrainingExampleStore:
    """
    Directory of JSON training examples.

    The directory is created on first write. Statistics are computed by
    scanning every example, which is fine for hundreds of examples.

    Attributes:
        directory: Where examples are written.
    """

    directory: Path

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)

    def save(self, comparison: ComparisonResult) -> str:
        """
        Write one training example.

        Args:
            comparison: The flagged comparison

        Returns:
            The generated training id (16 hex characters).

        Raises:
            OSError: If the file cannot be written.
        """
        training_id = secrets.token_hex(8)
        document_type = _UNSAFE_FILENAME_CHARS.sub("_", comparison.document_type) or "unknown"
        filename = f"{FILENAME_PREFIX}{training_id}_{document_type}_{int(time.time() * 1000)}.json"

        example = {
            "id": training_id,
            "timestamp": comparison.timestamp,
            "document_type": comparison.document_type,
            "metadata": comparison.metadata,
            "input": comparison.system_ocr.text,
            "ground_truth": comparison.ground_truth_ocr.text,
            "similarity": comparison.similarity,
            "discrepancies": comparison.discrepancies.to_dict(),
            "quality": comparison.quality,
        }

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(example, f, indent=2, ensure_ascii=False, default=str)

        logger.info(
            "Training data saved: %s (similarity: %.1f%%)", filename, comparison.similarity * 100
        )
        return training_id

    def iter_examples(self):
        """Yield each parsed training example, skipping unreadable files."""
        if not self.directory.is_dir():
            return

        for path in sorted(self.directory.glob(f"{FILENAME_PREFIX}*.json")):
            try:
                with open(path, encoding="utf-8") as f:
                    example: dict[str, Any] = json.load(f)
            except (ValueError, OSError) as e:
                logger.warning("Skipping unreadable training example %s: %s", path.name, e)
                continue
            if not isinstance(example, dict):
                logger.warning("Skipping malformed training example %s", path.name)
                continue
            yield example

    def stats(self) -> TrainingStats:
        """Count stored examples and average their similarity."""
        count = 0
        total_similarity = 0.0
        for example in self.iter_examples():
            try:
                total_similarity += float(example.get("similarity", 0.0))
            except (TypeError, ValueError):
                logger.warning("Training example %s has no usable similarity", example.get("id"))
                continue
            count += 1

        return TrainingStats(
            total_training_examples=count,
            average_similarity=total_similarity / count if count else 0.0,
            storage_location=str(self.directory),
        )
