"""Text normalization and string distance primitives.

This module provides:
1. normalize_text() - Case-fold, collapse whitespace, strip punctuation
2. extract_words() / count_words() - Whitespace tokens of normalized text
3. edit_distance() - Levenshtein distance (unit insert/delete/substitute cost)
4. similarity() - 1 - distance / max length over normalized text

Both the enhancer (fuzzy name matching) and the trainer (transcription
scoring) use the same distance function.
"""

from __future__ import annotations

import re

from rapidfuzz.distance import Levenshtein

_WHITESPACE = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[^\w\s]")


def normalize_text(text: str) -> str:
    """Normalize text for comparison.

    Steps, in order: lowercase, collapse whitespace runs to one space,
    remove every character that is neither a word character nor
    whitespace, trim.

    Args:
        text: Raw text

    Returns:
        Normalized text
    """
    text = (text or "").lower()
    text = _WHITESPACE.sub(" ", text)
    text = _PUNCTUATION.sub("", text)
    return text.strip()


def extract_words(text: str) -> list[str]:
    """Split normalized text into words (duplicates retained)."""
    return [word for word in normalize_text(text).split() if word]


def count_words(text: str) -> int:
    """Count words in normalized text."""
    return len(extract_words(text))


def edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    return Levenshtein.distance(s1, s2)


def similarity(text1: str, text2: str) -> float:
    """Compute normalized similarity between two texts.

    Both texts are normalized first, so the score is not the edit
    distance between the raw inputs. Two texts that are both empty
    after normalization are a perfect match (1.0).

    Returns:
        Similarity in [0, 1]
    """
    norm1 = normalize_text(text1)
    norm2 = normalize_text(text2)

    max_len = max(len(norm1), len(norm2))
    if max_len == 0:
        return 1.0

    score = 1 - edit_distance(norm1, norm2) / max_len
    return max(0.0, min(1.0, score))
