"""
Static correction tables for 18th-19th century handwritten records.

Everything in this module is process-wide, read-only data:

- CONFUSION_MATRIX: glyph -> glyphs commonly misread as it in cursive
- Word lists (titles, period given names, places, document terms) and the
  flattened LEXICON used to decide whether a capitalized token is known
- CURSIVE_FIXES: ordered structural fixes applied by the enhancer
- ABBREVIATIONS: ordered period-legal-document abbreviation expansions

Order matters for CURSIVE_FIXES and ABBREVIATIONS: later rules see the
output of earlier ones.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from types import MappingProxyType

# ============================================================================
# Cursive confusion matrix
# ============================================================================

# Lookup only ("what could this glyph have been"); never applied automatically
CONFUSION_MATRIX = MappingProxyType(
    {
        # Uppercase
        "A": ("H", "M", "N"),
        "B": ("R", "D", "P"),
        "C": ("G", "O", "E"),
        "D": ("O", "B", "P"),
        "E": ("C", "L", "F"),
        "F": ("T", "J", "S"),
        "G": ("Y", "S", "C"),
        "H": ("K", "N", "M"),
        "I": ("J", "T", "L"),
        "J": ("I", "T", "G", "Y"),
        "K": ("H", "R", "N"),
        "L": ("S", "E", "T", "I"),
        "M": ("W", "N", "H"),
        "N": ("M", "H", "W"),
        "O": ("Q", "D", "C"),
        "P": ("R", "B", "D"),
        "Q": ("O", "D", "2"),
        "R": ("P", "B", "K"),
        "S": ("L", "F", "G"),
        "T": ("F", "I", "J"),
        "U": ("V", "W", "N"),
        "V": ("U", "W", "N"),
        "W": ("M", "N", "U"),
        "X": ("K", "H"),
        "Y": ("J", "G", "T"),
        "Z": ("3", "2"),
        # Lowercase (far more common in cursive)
        "a": ("o", "u", "e", "d"),
        "b": ("l", "h", "k", "f"),
        "c": ("e", "i", "o", "r"),
        "d": ("a", "o", "cl", "dl"),
        "e": ("c", "i", "l", "a"),
        "f": ("l", "t", "s", "b"),  # long s (ſ) reads as f
        "g": ("y", "q", "z", "j"),
        "h": ("b", "l", "k", "n"),
        "i": ("e", "l", "j", "t"),
        "j": ("i", "y", "g"),
        "k": ("h", "l", "b"),
        "l": ("i", "e", "b", "h", "t"),
        "m": ("n", "in", "w", "rn", "nn"),
        "n": ("u", "m", "r", "h", "ri"),
        "o": ("a", "e", "c", "u"),
        "p": ("n", "h", "r"),
        "q": ("g", "y", "9"),
        "r": ("n", "v", "i", "s"),
        "s": ("r", "e", "a", "f"),
        "t": ("l", "i", "f", "e"),
        "u": ("n", "a", "v", "ii", "w"),
        "v": ("u", "r", "n"),
        "w": ("m", "vv", "uu"),
        "x": ("n", "v"),
        "y": ("j", "g", "v"),
        "z": ("s", "3", "2"),
        # Digits
        "0": ("O", "o", "D", "Q"),
        "1": ("l", "I", "i", "7"),
        "2": ("Z", "3", "7"),
        "3": ("8", "B", "E"),
        "4": ("9", "A"),
        "5": ("S", "s"),
        "6": ("b", "G"),
        "7": ("1", "T", "t"),
        "8": ("3", "B", "&"),
        "9": ("4", "g", "q"),
        # Symbols
        "&": ("8", "B", "Et"),
        "-": ("~", "_"),
        ".": (",", "'"),
        ",": (".", "'"),
        "'": (",", ".", "`"),
    }
)


def get_alternatives(char: str) -> list[str]:
    """Return glyphs commonly misread as ``char`` (empty list if unknown)."""
    return list(CONFUSION_MATRIX.get(char, ()))


# ============================================================================
# Lexicon
# ============================================================================

TITLES = ("Mr", "Mrs", "Miss", "Master", "Col", "Gen", "Rev", "Dr", "Hon", "Esq")

MALE_NAMES = (
    "John", "William", "James", "Thomas", "George", "Robert", "Joseph", "Charles",
    "Henry", "Samuel", "Benjamin", "Isaac", "Abraham", "Peter", "Richard", "Daniel",
    "David", "Jacob", "Stephen", "Andrew", "Nathaniel", "Christopher", "Solomon",
)  # fmt: skip

FEMALE_NAMES = (
    "Mary", "Sarah", "Elizabeth", "Martha", "Jane", "Nancy", "Hannah", "Ann",
    "Margaret", "Grace", "Ruth", "Rebecca", "Rachel", "Eliza", "Catherine", "Susan",
    "Lucy", "Betsy", "Dolly", "Harriet", "Celia", "Phillis",
)  # fmt: skip

# Single names were typical in records of enslaved people
ENSLAVED_NAMES = (
    "Sam", "Jack", "Tom", "Harry", "Joe", "Ben", "Will", "Jim", "Bob", "Peter",
    "Frank", "George", "Bill", "Dick", "Daniel", "Moses", "Adam", "Isaac", "Jacob",
    "Jerry", "Solomon", "Cato", "Caesar", "Pompey", "Cuffy", "Quash", "Scipio",
    "July", "Monday", "Friday",
    "Mary", "Sally", "Hannah", "Betty", "Lucy", "Dinah", "Nancy", "Jane", "Chloe",
    "Venus", "Violet", "Rose", "Jenny", "Molly", "Phoebe", "Sukey", "Patsy", "Nelly",
    "Priscilla", "Charlotte",
)  # fmt: skip

LOCATIONS = ("County", "Parish", "District", "Plantation", "Estate", "Farm", "Town", "City", "State")

STATES = (
    "Virginia", "Maryland", "Carolina", "Georgia", "Louisiana", "Mississippi",
    "Alabama", "Tennessee", "Kentucky", "Missouri", "Florida", "Texas", "Jamaica",
    "Barbados", "Trinidad", "Antigua", "Grenada", "Dominica", "Guiana",
)  # fmt: skip

DOCUMENT_TERMS = (
    "deed", "bill", "sale", "purchase", "slave", "negro", "mulatto", "bound",
    "servant", "property", "estate", "inventory", "appraisal", "will", "testament",
    "deceased", "heirs", "administrator", "executor", "witness", "signed", "sworn",
    "court", "petition", "compensation", "claim",
)  # fmt: skip

NUMBER_WORDS = (
    "one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten",
    "eleven", "twelve", "twenty", "thirty", "forty", "fifty", "hundred", "thousand",
    "dollars", "pounds", "shillings", "pence",
)  # fmt: skip

WORD_LISTS = {
    "titles": TITLES,
    "male_names": MALE_NAMES,
    "female_names": FEMALE_NAMES,
    "enslaved_names": ENSLAVED_NAMES,
    "locations": LOCATIONS,
    "states": STATES,
    "document_terms": DOCUMENT_TERMS,
    "number_words": NUMBER_WORDS,
}

# Every listed word, as written and lowercased
LEXICON = frozenset(
    form for words in WORD_LISTS.values() for word in words for form in (word, word.lower())
)

# Candidates for fuzzy name matching, de-duplicated
KNOWN_NAMES = tuple(dict.fromkeys(MALE_NAMES + FEMALE_NAMES + ENSLAVED_NAMES))


def is_known_word(word: str) -> bool:
    """Check if word is in the lexicon (exact or lowercased)."""
    return word in LEXICON or word.lower() in LEXICON


# ============================================================================
# Cursive structural fixes
# ============================================================================


@dataclass(frozen=True)
class CursiveFix:
    """One ordered substitution rule.

    ``replacement`` is either a literal string or a callable taking the
    matched text and returning its replacement.
    """

    pattern: re.Pattern
    replacement: str | Callable[[str], str]
    reason: str

    def replace(self, matched: str) -> str:
        """Return the replacement for one matched string."""
        if callable(self.replacement):
            return self.replacement(matched)
        return self.replacement


def _negro_variant(matched: str) -> str:
    return "Negroes" if matched.lower().endswith("s") else "Negro"


def _fix(pattern: str, replacement: str | Callable[[str], str], reason: str, flags: int = 0):
    return CursiveFix(re.compile(pattern, flags), replacement, reason)


CURSIVE_FIXES = (
    # Archaic digraphs
    _fix(r"\brn(?=[aeiou])", "m", "rn->m (cursive confusion)", re.IGNORECASE),
    _fix(r"\biu(?=\w)", "in", "iu->in (cursive confusion)", re.IGNORECASE),
    # Long s
    _fix(r"ſ", "s", "Long s (ſ) to modern s"),
    # Doubled-letter archaisms
    _fix(r"uu", "w", "uu->w (archaic)"),
    _fix(r"vv", "w", "vv->w (archaic)"),
    _fix(r"ii(?!\w)", "u", "ii->u (cursive n/u)"),
    # Short-word typos
    _fix(r"\bthc\b", "the", "thc->the", re.IGNORECASE),
    _fix(r"\baud\b", "and", "aud->and", re.IGNORECASE),
    # Given-name abbreviations
    _fix(r"\bJno\b", "John", "Jno abbreviation", re.IGNORECASE),
    _fix(r"\bWm\b", "William", "Wm abbreviation", re.IGNORECASE),
    _fix(r"\bThos\b", "Thomas", "Thos abbreviation", re.IGNORECASE),
    _fix(r"\bRobt\b", "Robert", "Robt abbreviation", re.IGNORECASE),
    _fix(r"\bJas\b", "James", "Jas abbreviation", re.IGNORECASE),
    _fix(r"\bSaml\b", "Samuel", "Saml abbreviation", re.IGNORECASE),
    _fix(r"\bBenjn\b", "Benjamin", "Benjn abbreviation", re.IGNORECASE),
    _fix(r"\bEliz\b", "Elizabeth", "Eliz abbreviation", re.IGNORECASE),
    # Quantity and document terms
    _fix(r"\bdoll?ars?\b", "dollars", "normalize dollars", re.IGNORECASE),
    _fix(r"\bnegroe?s?\b", _negro_variant, "normalize Negro/Negroes", re.IGNORECASE),
    # Digit/letter confusion inside numbers
    _fix(r"(?<=\d)O(?=\d)", "0", "O->0 in number"),
    _fix(r"(?<=\d)l(?=\d)", "1", "l->1 in number"),
    _fix(r"(?<=\d)S(?=\d)", "5", "S->5 in number"),
)


# ============================================================================
# Period abbreviations
# ============================================================================

ABBREVIATIONS = (
    # Titles
    ("Esqr", "Esquire"),
    ("Esq", "Esquire"),
    ("Honble", "Honorable"),
    ("Revd", "Reverend"),
    ("Majr", "Major"),
    ("Capt", "Captain"),
    ("Lieut", "Lieutenant"),
    ("Genl", "General"),
    # Terms
    ("Do", "Ditto"),
    ("do", "ditto"),
    ("viz", "namely"),
    ("Viz", "Namely"),
    ("Inst", "Instant"),
    ("inst", "instant"),
    ("Ult", "Ultimo"),
    ("ult", "ultimo"),
    ("Prox", "Proximo"),
    # Legal/document
    ("afsd", "aforesaid"),
    ("aforesd", "aforesaid"),
    ("sd", "said"),
    ("abovemtd", "abovementioned"),
    ("yr", "year"),
    ("yrs", "years"),
    ("mo", "month"),
    ("mos", "months"),
    # Money
    ("£", "pounds"),
    ("₤", "pounds"),
)


def abbreviation_pattern(abbreviation: str) -> re.Pattern:
    """Compile a literal pattern, word-anchored on its word-character ends."""
    prefix = r"\b" if re.match(r"\w", abbreviation[0]) else ""
    suffix = r"\b" if re.match(r"\w", abbreviation[-1]) else ""
    return re.compile(prefix + re.escape(abbreviation) + suffix)


ABBREVIATION_PATTERNS = tuple(
    (abbreviation, expansion, abbreviation_pattern(abbreviation))
    for abbreviation, expansion in ABBREVIATIONS
)
