"""Render enhancement and comparison results for the terminal.

This module provides:
1. format_enhancement() - Corrected text plus a table of corrections
2. format_comparison() - Similarity, quality and word discrepancies
3. format_training_stats() - Stored training-example summary
4. format_performance_stats() - Logged comparisons per document type
"""

from __future__ import annotations

from tabulate import tabulate

from histocr.models import ComparisonResult, DocumentTypeStats, EnhancementResult, TrainingStats

RULE = "=" * 60


def format_enhancement(result: EnhancementResult) -> str:
    """Generate a CLI report for one enhancement."""
    lines = [RULE, "OCR Enhancement", RULE, "", result.text, ""]
    lines.append(f"Confidence: {result.confidence:.2f}")
    lines.append(f"Corrections: {result.correction_count}")

    if result.corrections:
        rows = [
            [
                c.type,
                c.original,
                c.corrected if c.applied else f"({c.suggested}?)",
                c.confidence,
                c.reason,
            ]
            for c in result.corrections
        ]
        lines.append("")
        lines.append(
            tabulate(
                rows,
                headers=["Type", "Original", "Corrected", "Confidence", "Reason"],
                tablefmt="simple",
                floatfmt=".2f",
                disable_numparse=[1, 2],
            )
        )

    return "\n".join(lines)


def format_comparison(result: ComparisonResult) -> str:
    """Generate a CLI report for one comparison."""
    lines = [RULE, "OCR Comparison", RULE, ""]
    summary = [
        ["Document type", result.document_type],
        ["Similarity", f"{result.similarity:.1%}"],
        ["Quality", result.quality],
        ["Recommendation", result.recommendation],
        ["System words", result.system_ocr.word_count],
        ["Ground truth words", result.ground_truth_ocr.word_count],
    ]
    if result.training_id:
        summary.append(["Training example", result.training_id])
    lines.append(tabulate(summary, tablefmt="plain", disable_numparse=True))

    discrepancies = result.discrepancies
    if discrepancies.missing_words:
        lines.append("")
        lines.append(f"Missing words: {', '.join(discrepancies.missing_words)}")
    if discrepancies.extra_words:
        lines.append(f"Extra words: {', '.join(discrepancies.extra_words)}")

    if discrepancies.different_words:
        lines.append("")
        lines.append(
            tabulate(
                [[d.system, d.ground_truth] for d in discrepancies.different_words],
                headers=["System", "Ground truth"],
                tablefmt="simple",
            )
        )

    if discrepancies.common_errors:
        lines.append("")
        lines.append(
            tabulate(
                [
                    [e.type, e.system_count, e.ground_truth_count, e.difference]
                    for e in discrepancies.common_errors
                ],
                headers=["Pattern", "System", "Ground truth", "Difference"],
                tablefmt="simple",
            )
        )

    return "\n".join(lines)


def format_training_stats(stats: TrainingStats) -> str:
    """Generate a CLI report for stored training examples."""
    return tabulate(
        [
            ["Training examples", stats.total_training_examples],
            ["Average similarity", f"{stats.average_similarity:.1%}"],
            ["Storage location", stats.storage_location],
        ],
        tablefmt="plain",
        disable_numparse=True,
    )


def format_performance_stats(stats: list[DocumentTypeStats]) -> str:
    """Generate a per-document-type performance table."""
    if not stats:
        return "No comparisons logged."

    rows = [
        [
            s.document_type,
            s.total_comparisons,
            s.avg_similarity,
            s.min_similarity,
            s.max_similarity,
            s.excellent_count,
            s.good_count,
            s.poor_count,
            s.avg_discrepancies,
        ]
        for s in stats
    ]
    return tabulate(
        rows,
        headers=[
            "Document Type",
            "Total",
            "Avg Sim",
            "Min",
            "Max",
            "Excellent",
            "Good",
            "Poor",
            "Avg Disc",
        ],
        tablefmt="simple",
        floatfmt=("", "", ".3f", ".3f", ".3f", "", "", "", ".1f"),
    )
