"""Tests for histocr.lexicon tables."""

import pytest

from histocr.lexicon import (
    ABBREVIATION_PATTERNS,
    CONFUSION_MATRIX,
    CURSIVE_FIXES,
    KNOWN_NAMES,
    LEXICON,
    abbreviation_pattern,
    get_alternatives,
    is_known_word,
)


class TestConfusionMatrix:
    """Tests for the cursive confusion lookup."""

    def test_known_character(self):
        assert get_alternatives("m") == ["n", "in", "w", "rn", "nn"]

    def test_unknown_character(self):
        assert get_alternatives("?") == []
        assert get_alternatives("") == []

    def test_returned_list_is_a_copy(self):
        alternatives = get_alternatives("m")
        alternatives.append("zz")
        assert "zz" not in get_alternatives("m")

    def test_read_only(self):
        with pytest.raises(TypeError):
            CONFUSION_MATRIX["m"] = ("x",)


class TestLexicon:
    """Tests for word lists and membership."""

    def test_known_names_deduplicated(self):
        assert len(KNOWN_NAMES) == len(set(KNOWN_NAMES))
        assert "George" in KNOWN_NAMES
        assert "Harry" in KNOWN_NAMES

    def test_lexicon_holds_both_forms(self):
        assert "John" in LEXICON
        assert "john" in LEXICON

    def test_is_known_word_case_insensitive(self):
        assert is_known_word("COUNTY")
        assert is_known_word("Negro")
        assert not is_known_word("Smith")


class TestCursiveFixes:
    """Tests for the ordered cursive fix rules."""

    def _apply_all(self, text):
        for fix in CURSIVE_FIXES:
            text = fix.pattern.sub(lambda m, fix=fix: fix.replace(m.group(0)), text)
        return text

    def test_rn_before_vowel(self):
        assert self._apply_all("rnade") == "made"

    def test_negro_variants(self):
        assert self._apply_all("negros") == "Negroes"
        assert self._apply_all("negroe") == "Negro"

    def test_digits(self):
        assert self._apply_all("17O5 and l8l2") == "1705 and l812"

    def test_before_is_untouched(self):
        assert self._apply_all("before") == "before"


class TestAbbreviationPatterns:
    """Tests for abbreviation pattern compilation."""

    def test_word_abbreviation_anchored(self):
        pattern = abbreviation_pattern("sd")
        assert pattern.search("the sd land")
        assert not pattern.search("sdx")

    def test_symbol_matches_without_boundary(self):
        pattern = abbreviation_pattern("£")
        assert pattern.search("paid £5")

    def test_order_preserved(self):
        abbreviations = [abbr for abbr, _, _ in ABBREVIATION_PATTERNS]
        assert abbreviations.index("Esqr") < abbreviations.index("Esq")
