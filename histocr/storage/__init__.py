"""Storage backends for correction history, comparison logs and training examples."""

from histocr.storage.base import ComparisonLog, CorrectionStore
from histocr.storage.sql import ComparisonRecord, CorrectionRecord, OCRDatabase
from histocr.storage.training import TrainingExampleStore

__all__ = [
    "CorrectionStore",
    "ComparisonLog",
    "OCRDatabase",
    "CorrectionRecord",
    "ComparisonRecord",
    "TrainingExampleStore",
]
