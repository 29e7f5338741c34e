"""SQL database for correction history and comparison logs.

This module defines the database schema and implements both storage
capabilities on top of SQLAlchemy, so the same database can back the
enhancer's learned corrections and the trainer's comparison log.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Column, Float, Integer, String, Text, case, create_engine, desc, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from histocr.exceptions import StorageError
from histocr.models import ComparisonResult, DocumentTypeStats, LearnedCorrection
from histocr.storage.base import ComparisonLog, CorrectionStore

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_DATABASE_URL = "sqlite:///histocr.db"


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


class CorrectionRecord(Base):
    """One observed correction of extracted text."""

    __tablename__ = "extraction_corrections"

    id = Column(Integer, primary_key=True)
    original_value = Column(Text, nullable=False, index=True)
    corrected_value = Column(Text)
    context_text = Column(Text)
    corrected_by = Column(String(100), default="ocr_enhancer")
    created_at = Column(String, default=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<CorrectionRecord(id={self.id}, "
            f"original='{self.original_value}', corrected='{self.corrected_value}')>"
        )


class ComparisonRecord(Base):
    """One comparison of system OCR against ground truth."""

    __tablename__ = "ocr_comparisons"

    id = Column(Integer, primary_key=True)
    document_type = Column(String(50), index=True)
    similarity_score = Column(Float, index=True)
    quality_assessment = Column(String(50), index=True)
    recommendation = Column(String(50))
    system_word_count = Column(Integer)
    ground_truth_word_count = Column(Integer)
    discrepancy_count = Column(Integer)
    comparison_data = Column(Text)  # Full comparison as JSON
    created_at = Column(String, default=_utcnow, index=True)

    def __repr__(self) -> str:
        return (
            f"<ComparisonRecord(id={self.id}, type='{self.document_type}', "
            f"similarity={self.similarity_score})>"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "document_type": self.document_type,
            "similarity_score": self.similarity_score,
            "quality_assessment": self.quality_assessment,
            "recommendation": self.recommendation,
            "discrepancy_count": self.discrepancy_count,
            "created_at": self.created_at,
        }


class OCRDatabase(CorrectionStore, ComparisonLog):
    """Database manager for correction history and comparison logs."""

    def __init__(self, url: str | None = None, echo: bool = False):
        """Initialize the database.

        Args:
            url: SQLAlchemy database URL (default: sqlite:///histocr.db)
            echo: Log emitted SQL

        Raises:
            StorageError: If the schema cannot be created
        """
        self.url = url or DEFAULT_DATABASE_URL
        try:
            self.engine = create_engine(self.url, echo=echo)
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Cannot initialize database {self.url}: {e}") from e
        self.Session = sessionmaker(bind=self.engine)

    def get_session(self):
        """Get a new database session."""
        return self.Session()

    def load_learned_corrections(
        self, min_frequency: int = 2, limit: int = 500
    ) -> list[LearnedCorrection]:
        """Load grouped corrections, most frequent first.

        Args:
            min_frequency: Minimum observations per (original, corrected) pair
            limit: Maximum number of pairs

        Returns:
            List of LearnedCorrection

        Raises:
            StorageError: If the query fails
        """
        frequency = func.count(CorrectionRecord.id).label("frequency")
        session = self.get_session()
        try:
            rows = (
                session.query(
                    CorrectionRecord.original_value,
                    CorrectionRecord.corrected_value,
                    frequency,
                )
                .filter(CorrectionRecord.corrected_value.isnot(None))
                .group_by(CorrectionRecord.original_value, CorrectionRecord.corrected_value)
                .having(func.count(CorrectionRecord.id) >= min_frequency)
                .order_by(desc(frequency), CorrectionRecord.original_value)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load learned corrections: {e}") from e
        finally:
            session.close()

        return [
            LearnedCorrection(original=original, corrected=corrected, frequency=int(count))
            for original, corrected, count in rows
        ]

    def record_correction(
        self,
        original: str,
        corrected: str,
        context: str | None = None,
        corrected_by: str = "ocr_enhancer",
    ) -> None:
        """Add one correction observation.

        Raises:
            StorageError: If the insert fails
        """
        session = self.get_session()
        try:
            session.add(
                CorrectionRecord(
                    original_value=original,
                    corrected_value=corrected,
                    context_text=context,
                    corrected_by=corrected_by,
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to record correction: {e}") from e
        finally:
            session.close()

    def log_comparison(self, result: ComparisonResult) -> None:
        """Add a comparison log row.

        Raises:
            StorageError: If the insert fails
        """
        session = self.get_session()
        try:
            session.add(
                ComparisonRecord(
                    document_type=result.document_type,
                    similarity_score=result.similarity,
                    quality_assessment=result.quality,
                    recommendation=result.recommendation,
                    system_word_count=result.system_ocr.word_count,
                    ground_truth_word_count=result.ground_truth_ocr.word_count,
                    discrepancy_count=result.discrepancies.count,
                    comparison_data=json.dumps(result.to_dict(), default=str),
                )
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StorageError(f"Failed to log comparison: {e}") from e
        finally:
            session.close()

        logger.info(
            "OCR comparison logged (similarity: %.1f%%)",
            result.similarity * 100,
        )

    def performance_stats(self) -> list[DocumentTypeStats]:
        """Get logged comparison performance per document type.

        Returns:
            One DocumentTypeStats per document type, most compared first
        """

        def quality_count(label: str):
            return func.sum(case((ComparisonRecord.quality_assessment == label, 1), else_=0))

        total = func.count(ComparisonRecord.id).label("total")
        session = self.get_session()
        try:
            rows = (
                session.query(
                    ComparisonRecord.document_type,
                    total,
                    func.avg(ComparisonRecord.similarity_score),
                    func.min(ComparisonRecord.similarity_score),
                    func.max(ComparisonRecord.similarity_score),
                    quality_count("excellent"),
                    quality_count("good_with_improvements_needed"),
                    quality_count("poor_needs_training"),
                    func.avg(ComparisonRecord.discrepancy_count),
                )
                .group_by(ComparisonRecord.document_type)
                .order_by(desc(total), ComparisonRecord.document_type)
                .all()
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read performance stats: {e}") from e
        finally:
            session.close()

        return [
            DocumentTypeStats(
                document_type=row[0],
                total_comparisons=int(row[1]),
                avg_similarity=float(row[2] or 0.0),
                min_similarity=float(row[3] or 0.0),
                max_similarity=float(row[4] or 0.0),
                excellent_count=int(row[5] or 0),
                good_count=int(row[6] or 0),
                poor_count=int(row[7] or 0),
                avg_discrepancies=float(row[8] or 0.0),
            )
            for row in rows
        ]

    def recent_comparisons(self, limit: int = 100) -> list[dict[str, Any]]:
        """Get the most recent comparison log rows.

        Args:
            limit: Maximum number of rows

        Returns:
            Row summaries, newest first
        """
        session = self.get_session()
        try:
            records = (
                session.query(ComparisonRecord)
                .order_by(desc(ComparisonRecord.created_at), desc(ComparisonRecord.id))
                .limit(limit)
                .all()
            )
            return [record.to_dict() for record in records]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read recent comparisons: {e}") from e
        finally:
            session.close()

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics."""
        session = self.get_session()
        try:
            return {
                "total_corrections": session.query(CorrectionRecord).count(),
                "total_comparisons": session.query(ComparisonRecord).count(),
            }
        finally:
            session.close()
