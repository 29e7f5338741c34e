#!/usr/bin/env python3
"""
histocr command-line interface.

Usage:
    # Enhance raw OCR text (use "-" to read stdin)
    histocr enhance page_12.txt --confidence 0.6

    # Compare system OCR with a trusted transcription, logging to a database
    histocr --db sqlite:///histocr.db compare system.txt transcription.txt \\
        --document-type will

    # Teach the enhancer a correction
    histocr --db sqlite:///histocr.db learn Hopweli Hopewell

    # Training-example and logged-comparison statistics
    histocr --db sqlite:///histocr.db stats

    # Glyphs commonly misread as a character
    histocr alternatives m
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from histocr.config import HistOCRConfig
from histocr.enhancer import CursiveOCREnhancer
from histocr.exceptions import HistOCRError
from histocr.reports import (
    format_comparison,
    format_enhancement,
    format_performance_stats,
    format_training_stats,
)
from histocr.storage import OCRDatabase, TrainingExampleStore
from histocr.trainer import OCRComparisonTrainer


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _load_config(args: argparse.Namespace) -> HistOCRConfig:
    config = HistOCRConfig.from_yaml(args.config) if args.config else HistOCRConfig()
    if args.db:
        config.database_url = args.db
    return config


def _open_database(config: HistOCRConfig) -> OCRDatabase | None:
    return OCRDatabase(config.database_url) if config.database_url else None


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def cmd_enhance(args: argparse.Namespace, config: HistOCRConfig) -> int:
    enhancer = CursiveOCREnhancer(store=_open_database(config), config=config.enhancer)
    result = enhancer.enhance(
        _read_text(args.file), args.confidence, skip_learned=args.skip_learned
    )
    if args.json:
        _print_json(result.to_dict())
    else:
        print(format_enhancement(result))
    return 0


def cmd_compare(args: argparse.Namespace, config: HistOCRConfig) -> int:
    if args.training_dir:
        config.trainer.training_dir = args.training_dir
    trainer = OCRComparisonTrainer(comparison_log=_open_database(config), config=config.trainer)
    result = trainer.compare_ocr(
        _read_text(args.system_file),
        _read_text(args.ground_truth_file),
        {"document_type": args.document_type},
    )
    if args.json:
        _print_json(result.to_dict())
    else:
        print(format_comparison(result))
    return 0


def cmd_learn(args: argparse.Namespace, config: HistOCRConfig) -> int:
    database = _open_database(config)
    if database is None:
        print("Error: learn requires a database (--db or database_url in --config)", file=sys.stderr)
        return 1

    enhancer = CursiveOCREnhancer(store=database, config=config.enhancer)
    if not enhancer.save_correction(args.original, args.corrected, args.context):
        print("Error: correction was not saved", file=sys.stderr)
        return 1
    print(f"Saved correction: {args.original} -> {args.corrected}")
    return 0


def cmd_stats(args: argparse.Namespace, config: HistOCRConfig) -> int:
    training_dir = args.training_dir or config.trainer.training_dir
    stats = TrainingExampleStore(training_dir).stats()
    database = _open_database(config)
    performance = database.performance_stats() if database is not None else []

    if args.json:
        _print_json(
            {
                "training": stats.to_dict(),
                "performance": [p.to_dict() for p in performance],
            }
        )
        return 0

    print(format_training_stats(stats))
    if database is not None:
        print()
        print(format_performance_stats(performance))
    return 0


def cmd_alternatives(args: argparse.Namespace, config: HistOCRConfig) -> int:
    alternatives = CursiveOCREnhancer(config=config.enhancer).get_alternatives(args.char)
    if not alternatives:
        print(f"No known confusions for {args.char!r}")
    else:
        print(" ".join(alternatives))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="histocr",
        description="Cursive OCR enhancement and ground-truth comparison",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--db", help="SQLAlchemy database URL (overrides config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    enhance = subparsers.add_parser("enhance", help="Enhance raw OCR text")
    enhance.add_argument("file", help="Text file with raw OCR output ('-' for stdin)")
    enhance.add_argument(
        "--confidence", type=float, default=0.5, help="OCR engine confidence (default: 0.5)"
    )
    enhance.add_argument(
        "--skip-learned", action="store_true", help="Do not apply learned corrections"
    )
    enhance.add_argument("--json", action="store_true", help="Print JSON")
    enhance.set_defaults(func=cmd_enhance)

    compare = subparsers.add_parser("compare", help="Compare system OCR with ground truth")
    compare.add_argument("system_file", help="System OCR text file")
    compare.add_argument("ground_truth_file", help="Trusted transcription text file")
    compare.add_argument("--document-type", default="unknown", help="Document type label")
    compare.add_argument("--training-dir", type=Path, help="Training example directory")
    compare.add_argument("--json", action="store_true", help="Print JSON")
    compare.set_defaults(func=cmd_compare)

    learn = subparsers.add_parser("learn", help="Record a correction for learning")
    learn.add_argument("original", help="Text as OCR produced it")
    learn.add_argument("corrected", help="Text as it should read")
    learn.add_argument("--context", help="Surrounding text")
    learn.set_defaults(func=cmd_learn)

    stats = subparsers.add_parser("stats", help="Training and comparison statistics")
    stats.add_argument("--training-dir", type=Path, help="Training example directory")
    stats.add_argument("--json", action="store_true", help="Print JSON")
    stats.set_defaults(func=cmd_stats)

    alternatives = subparsers.add_parser(
        "alternatives", help="Glyphs commonly misread as a character"
    )
    alternatives.add_argument("char", help="Character to look up")
    alternatives.set_defaults(func=cmd_alternatives)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
        return args.func(args, config)
    except (HistOCRError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
