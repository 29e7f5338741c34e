"""
Pytest configuration and fixtures for histocr tests.
"""

from pathlib import Path

import pytest

from histocr.models import LearnedCorrection
from histocr.storage.base import ComparisonLog, CorrectionStore


class StaticCorrectionStore(CorrectionStore):
    """In-memory store returning a fixed set of learned corrections."""

    def __init__(self, learned: list[LearnedCorrection] | None = None):
        self.learned = list(learned or [])
        self.recorded: list[tuple[str, str, str | None]] = []
        self.load_calls = 0

    def load_learned_corrections(self, min_frequency=2, limit=500):
        self.load_calls += 1
        return [c for c in self.learned if c.frequency >= min_frequency][:limit]

    def record_correction(self, original, corrected, context=None):
        self.recorded.append((original, corrected, context))


class FailingStore(CorrectionStore, ComparisonLog):
    """Store whose every operation raises."""

    def load_learned_corrections(self, min_frequency=2, limit=500):
        raise RuntimeError("store unavailable")

    def record_correction(self, original, corrected, context=None):
        raise RuntimeError("store unavailable")

    def log_comparison(self, result):
        raise RuntimeError("store unavailable")


@pytest.fixture
def database(tmp_path: Path):
    """Return a file-backed SQLite OCRDatabase in a temporary directory."""
    from histocr.storage import OCRDatabase

    return OCRDatabase(f"sqlite:///{tmp_path / 'histocr.db'}")


@pytest.fixture
def training_dir(tmp_path: Path) -> Path:
    """Return a not-yet-created training example directory."""
    return tmp_path / "training"


@pytest.fixture
def trainer(training_dir: Path):
    """Return an OCRComparisonTrainer writing examples under tmp_path."""
    from histocr import OCRComparisonTrainer, TrainerConfig

    return OCRComparisonTrainer(config=TrainerConfig(training_dir=training_dir))


@pytest.fixture
def enhancer():
    """Return an enhancer without a correction store."""
    from histocr import CursiveOCREnhancer

    return CursiveOCREnhancer()


@pytest.fixture
def make_store():
    """Return a factory for in-memory correction stores."""
    return StaticCorrectionStore


@pytest.fixture
def failing_store():
    """Return a store that raises on every operation."""
    return FailingStore()
