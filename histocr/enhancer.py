"""
Cursive OCR enhancement for historical handwritten records.

Raw OCR text from 18th-19th century documents (wills, slave schedules,
bills of sale, correspondence) passes through four ordered stages:

1. Learned corrections - substring rules observed repeatedly by reviewers
2. Cursive confusions - structural fixes for cursive misreads (rn/m, long s,
   doubled letters, abbreviated given names, digits inside numbers)
3. Name validation - fuzzy matching of capitalized tokens against period
   given names; close matches are replaced, plausible ones only suggested
4. Abbreviation expansion - period legal-document abbreviations

Each stage feeds the next and appends to one corrections list. Nothing in
``enhance()`` writes to storage; ``save_correction()`` is the only write path
into the learned corrections.

Example:
    >>> enhancer = CursiveOCREnhancer()
    >>> result = enhancer.enhance("Jno Smith was a Majr in the Genl's army", 0.5)
    >>> result.text
    "John Smith was a Major in the General's army"
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Any

from histocr.config import EnhancerConfig
from histocr.lexicon import (
    ABBREVIATION_PATTERNS,
    CURSIVE_FIXES,
    KNOWN_NAMES,
    get_alternatives,
    is_known_word,
)
from histocr.models import Correction, EnhancementResult, LearnedCorrection, OCRInput
from histocr.storage.base import CorrectionStore
from histocr.text import edit_distance

logger = logging.getLogger(__name__)

# Confidence bookkeeping
CONFIDENCE_BOOST = 0.1
PENALTY_PER_CORRECTION = 0.02
MAX_CORRECTION_PENALTY = 0.2
MIN_CONFIDENCE = 0.1

CURSIVE_FIX_CONFIDENCE = 0.7
ABBREVIATION_CONFIDENCE = 0.95

NAME_TOKEN = re.compile(r"\b[A-Z][a-z]+\b")
WORD_TOKEN = re.compile(r"\b[A-Za-z]+\b")


# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass
class NameMatch:
    """Closest known name for a capitalized token."""

    name: str
    distance: int
    confidence: float


# =============================================================================
# ENHANCER
# =============================================================================


@dataclass
class CursiveOCREnhancer:
    """
    Improves OCR output for historical handwritten documents.

    The enhancer works with or without a correction store. Without one,
    the learned-correction stage never runs and ``save_correction`` is a
    no-op; every other stage behaves identically.

    Attributes:
        store: Optional correction history backing the learned stage.
        config: Thresholds and limits.
        learned_corrections: Snapshot of learned rules keyed by original text.
            Replaced wholesale on reload, never mutated in place.

    Example:
        >>> from histocr.storage import OCRDatabase
        >>> enhancer = CursiveOCREnhancer(store=OCRDatabase("sqlite:///histocr.db"))
        >>> enhancer.save_correction("Hopweli", "Hopewell")
        True
    """

    store: CorrectionStore | None = None
    config: EnhancerConfig = field(default_factory=EnhancerConfig)
    learned_corrections: dict[str, LearnedCorrection] = field(default_factory=dict)

    def enhance(
        self,
        raw_text: str,
        confidence: float | None = 0.5,
        *,
        skip_learned: bool = False,
        word_frequency: Mapping[str, int] | None = None,
    ) -> EnhancementResult:
        """
        Enhance OCR text.

        Args:
            raw_text: Raw OCR output
            confidence: OCR engine confidence in [0, 1]; None means 0.5
            skip_learned: Skip reloading and applying learned corrections
            word_frequency: Cross-document word counts from ``batch_enhance``.
                Accepted as context; no stage uses it yet.

        Returns:
            EnhancementResult. Empty or whitespace-only input yields an
            empty result with confidence 0.
        """
        if not raw_text or not raw_text.strip():
            return EnhancementResult(text="", original_text=raw_text or "", confidence=0.0)

        if confidence is None:
            confidence = 0.5
        confidence = max(0.0, min(1.0, confidence))
        corrections: list[Correction] = []
        text = raw_text

        if word_frequency:
            logger.debug("Enhancing with %d cross-document word counts", len(word_frequency))

        if self.store is not None and not skip_learned:
            self.reload_learned_corrections()
            text = self._apply_learned_corrections(text, corrections)

        text = self._fix_cursive_confusions(text, confidence, corrections)
        text = self._validate_names(text, corrections)
        text = self._expand_abbreviations(text, corrections)

        penalty = min(len(corrections) * PENALTY_PER_CORRECTION, MAX_CORRECTION_PENALTY)
        enhanced_confidence = min(confidence + CONFIDENCE_BOOST, 1.0) - penalty

        return EnhancementResult(
            text=text,
            original_text=raw_text,
            corrections=corrections,
            confidence=max(enhanced_confidence, MIN_CONFIDENCE),
        )

    def batch_enhance(
        self,
        ocr_results: Iterable[OCRInput | Mapping[str, Any]],
        parallel: bool = False,
    ) -> list[EnhancementResult]:
        """
        Enhance several OCR texts.

        A word-frequency table over all items is built first and passed to
        each ``enhance`` call. Items are independent of each other.

        Args:
            ocr_results: OCRInput objects or mappings with ``text`` and
                optional ``confidence``
            parallel: Process items on a thread pool

        Returns:
            One EnhancementResult per item, in input order
        """
        items = [_coerce_input(item) for item in ocr_results]

        word_frequency = Counter(
            word.lower() for item in items for word in WORD_TOKEN.findall(item.text)
        )

        def run(item: OCRInput) -> EnhancementResult:
            return self.enhance(item.text, item.confidence, word_frequency=word_frequency)

        if parallel and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                return list(executor.map(run, items))
        return [run(item) for item in items]

    def reload_learned_corrections(self) -> int:
        """
        Reload learned corrections from the store.

        On failure the previous snapshot is kept and a warning logged.

        Returns:
            Number of learned corrections now cached.
        """
        if self.store is None:
            return len(self.learned_corrections)

        try:
            rows = self.store.load_learned_corrections(
                min_frequency=self.config.learned_min_frequency,
                limit=self.config.learned_limit,
            )
        except Exception as e:
            logger.warning("Failed to load learned corrections: %s", e)
            return len(self.learned_corrections)

        learned: dict[str, LearnedCorrection] = {}
        for row in rows:
            # Rows arrive most frequent first; keep the first mapping per original
            if row.original and row.original not in learned:
                learned[row.original] = row

        self.learned_corrections = learned
        logger.debug("Loaded %d learned corrections", len(learned))
        return len(learned)

    def save_correction(self, original: str, corrected: str, context: str | None = None) -> bool:
        """
        Record a correction for future learning.

        Persists one observation to the store and updates the cached
        frequency (or caches the rule at frequency 1). A different corrected
        value for an already cached original is persisted but leaves the
        cached rule alone until the next reload.

        Args:
            original: Text as OCR produced it
            corrected: Text as it should read
            context: Optional surrounding text

        Returns:
            True if the correction was persisted.
        """
        if self.store is None:
            logger.debug("No correction store configured; not saving %r -> %r", original, corrected)
            return False
        if not original or not corrected:
            logger.warning("Ignoring empty correction %r -> %r", original, corrected)
            return False

        try:
            self.store.record_correction(original, corrected, context)
        except Exception as e:
            logger.warning("Failed to save correction: %s", e)
            return False

        learned = dict(self.learned_corrections)
        existing = learned.get(original)
        if existing is None:
            learned[original] = LearnedCorrection(original, corrected, 1)
        elif existing.corrected == corrected:
            learned[original] = replace(existing, frequency=existing.frequency + 1)
        self.learned_corrections = learned
        return True

    def get_alternatives(self, char: str) -> list[str]:
        """Return glyphs commonly misread as ``char``."""
        return get_alternatives(char)

    def find_closest_name(self, token: str) -> NameMatch | None:
        """
        Find the closest known given name.

        Allowed distance scales with token length: 1 for up to 4 characters,
        2 for up to 6, else 3. Among equally close names the alphabetically
        first wins.
        """
        token_lower = token.lower()
        if len(token) <= 4:
            max_distance = 1
        elif len(token) <= 6:
            max_distance = 2
        else:
            max_distance = 3

        best: tuple[int, str, str] | None = None
        for name in KNOWN_NAMES:
            distance = edit_distance(token_lower, name.lower())
            if distance > max_distance:
                continue
            key = (distance, name.lower(), name)
            if best is None or key < best:
                best = key

        if best is None:
            return None

        distance, _, name = best
        return NameMatch(
            name=name,
            distance=distance,
            confidence=1 - distance / max(len(token), len(name)),
        )

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _apply_learned_corrections(self, text: str, corrections: list[Correction]) -> str:
        for rule in list(self.learned_corrections.values()):
            if rule.original not in text:
                continue
            text = text.replace(rule.original, rule.corrected)
            corrections.append(
                Correction(
                    type="learned",
                    original=rule.original,
                    corrected=rule.corrected,
                    confidence=rule.confidence,
                    reason=f"Learned from {rule.frequency} previous corrections",
                )
            )
        return text

    def _fix_cursive_confusions(
        self, text: str, ocr_confidence: float, corrections: list[Correction]
    ) -> str:
        if ocr_confidence > self.config.high_confidence_threshold:
            return text

        for fix in CURSIVE_FIXES:

            def substitute(match: re.Match, fix=fix) -> str:
                matched = match.group(0)
                replacement = fix.replace(matched)
                if replacement != matched:
                    corrections.append(
                        Correction(
                            type="cursive_fix",
                            original=matched,
                            corrected=replacement,
                            confidence=CURSIVE_FIX_CONFIDENCE,
                            reason=fix.reason,
                        )
                    )
                return replacement

            text = fix.pattern.sub(substitute, text)

        return text

    def _validate_names(self, text: str, corrections: list[Correction]) -> str:
        for token in dict.fromkeys(NAME_TOKEN.findall(text)):
            if is_known_word(token):
                continue

            match = self.find_closest_name(token)
            if match is None or match.confidence <= self.config.name_suggestion_threshold:
                continue

            if match.confidence > self.config.name_autocorrect_threshold:
                text = re.sub(rf"\b{re.escape(token)}\b", match.name, text)
                corrections.append(
                    Correction(
                        type="name_correction",
                        original=token,
                        corrected=match.name,
                        confidence=match.confidence,
                        reason=f"Similar to known name ({match.distance} edits)",
                    )
                )
            else:
                corrections.append(
                    Correction(
                        type="name_suggestion",
                        original=token,
                        corrected=None,
                        confidence=match.confidence,
                        reason=f"Possible: {match.name}",
                        suggested=match.name,
                    )
                )

        return text

    def _expand_abbreviations(self, text: str, corrections: list[Correction]) -> str:
        for abbreviation, expansion, pattern in ABBREVIATION_PATTERNS:
            text, count = pattern.subn(expansion, text)
            corrections.extend(
                Correction(
                    type="abbreviation",
                    original=abbreviation,
                    corrected=expansion,
                    confidence=ABBREVIATION_CONFIDENCE,
                    reason="Historical abbreviation",
                )
                for _ in range(count)
            )
        return text


def _coerce_input(item: OCRInput | Mapping[str, Any]) -> OCRInput:
    if isinstance(item, OCRInput):
        return item
    confidence = item.get("confidence")
    return OCRInput(
        text=item.get("text") or "",
        confidence=0.5 if confidence is None else confidence,
    )
