"""
Storage capabilities consumed by the enhancer and trainer.

Each capability is an abstract base class; a backend implements whichever
it supports. Column names and physical layout are backend choices.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from histocr.models import ComparisonResult, LearnedCorrection


class CorrectionStore(ABC):
    """Correction history: grouped reads and single-observation writes."""

    @abstractmethod
    def load_learned_corrections(
        self, min_frequency: int = 2, limit: int = 500
    ) -> list[LearnedCorrection]:
        """
        Return (original, corrected, frequency) groups.

        Only groups observed at least ``min_frequency`` times, most
        frequent first, at most ``limit`` of them.
        """

    @abstractmethod
    def record_correction(
        self, original: str, corrected: str, context: str | None = None
    ) -> None:
        """Record one observation of ``original`` being corrected to ``corrected``."""


class ComparisonLog(ABC):
    """Sink for comparison results."""

    @abstractmethod
    def log_comparison(self, result: ComparisonResult) -> None:
        """Persist one comparison result."""
