"""
histocr: OCR enhancement and ground-truth comparison for historical records.

Corrects OCR output from 18th-19th century handwritten documents (wills,
slave schedules, bills of sale) using cursive confusion rules, period name
lists, abbreviation tables and corrections learned from reviewers; scores
OCR output against trusted transcriptions and keeps poor matches as
training examples.

Example:
    >>> import histocr
    >>> enhancer = histocr.CursiveOCREnhancer()
    >>> enhancer.enhance("Jno Smith was a Majr in the Genl's army").text
    "John Smith was a Major in the General's army"

    >>> trainer = histocr.OCRComparisonTrainer(config=histocr.TrainerConfig(
    ...     save_training_examples=False))
    >>> trainer.compare_ocr("Negroes sold", "Negroes sold").quality
    'excellent'
"""

from histocr.config import EnhancerConfig, HistOCRConfig, TrainerConfig
from histocr.enhancer import CursiveOCREnhancer, NameMatch
from histocr.exceptions import ConfigurationError, HistOCRError, StorageError
from histocr.lexicon import CONFUSION_MATRIX, LEXICON, get_alternatives
from histocr.models import (
    CommonError,
    ComparisonResult,
    Correction,
    Discrepancies,
    DocumentTypeStats,
    EnhancementResult,
    LearnedCorrection,
    MergedText,
    OCRInput,
    TextSummary,
    TrainingStats,
    WordDifference,
)
from histocr.storage import (
    ComparisonLog,
    CorrectionStore,
    OCRDatabase,
    TrainingExampleStore,
)
from histocr.text import edit_distance, normalize_text, similarity
from histocr.trainer import OCRComparisonTrainer, classify_similarity, find_discrepancies

__version__ = "0.1.0"
__all__ = [
    # Components
    "CursiveOCREnhancer",
    "OCRComparisonTrainer",
    # Configuration
    "HistOCRConfig",
    "EnhancerConfig",
    "TrainerConfig",
    # Results
    "Correction",
    "EnhancementResult",
    "LearnedCorrection",
    "NameMatch",
    "OCRInput",
    "ComparisonResult",
    "Discrepancies",
    "CommonError",
    "WordDifference",
    "TextSummary",
    "MergedText",
    "TrainingStats",
    "DocumentTypeStats",
    # Storage
    "CorrectionStore",
    "ComparisonLog",
    "OCRDatabase",
    "TrainingExampleStore",
    # Tables and primitives
    "CONFUSION_MATRIX",
    "LEXICON",
    "get_alternatives",
    "normalize_text",
    "edit_distance",
    "similarity",
    "classify_similarity",
    "find_discrepancies",
    # Exceptions
    "HistOCRError",
    "ConfigurationError",
    "StorageError",
]
