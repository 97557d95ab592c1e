"""
Street-address pattern cascade (English + Spanish).

Patterns, highest confidence first:
    1. numeric        "123 Main Street"
    2. spoken         "eleven twenty two Main Street"
    3. prefix         "my address is ...", "vivo en ..."
    4. any-street     "... Main Street" (no house number)
    5. calle          "Calle Morelos 45", "Avenida Juárez número 120"
    6. bare-number    "450 Elm" (digits + capitalized words, no suffix)

Every candidate has any leading spoken house number decoded to digits
before validation, so "eleven twenty two Main Street" becomes
"1122 Main Street".
"""

from __future__ import annotations

import re
from typing import Optional

from src.intake.cascade import CascadeMatch, CascadePattern, first_accepted
from src.intake.lexicon import (
    ARTICLES_AND_PREPOSITIONS,
    DEFAULT_ADDRESS,
    NUMBER_WORD_ALT,
    SPANISH_STREET_PREFIX_ALT,
    SPOKEN_NUMBER_RUN,
    STOP_WORDS,
    STREET_SUFFIX_ALT,
    STREET_SUFFIX_SET,
)
from src.intake.spoken_numbers import (
    decode_number_words,
    normalize_leading_number,
    split_number_words,
)
from src.intake.validation import validate_address

MAX_STREET_WORDS = 4

_WORD = r"[^\W_][\w'’-]*"
_ALPHA_WORD = r"[^\W\d_][\w'’-]*"
_STREET_NAME = rf"(?P<street>{_WORD}(?:\s+{_WORD}){{0,{MAX_STREET_WORDS - 1}}})"
_SUFFIX = rf"(?P<suffix>{STREET_SUFFIX_ALT})\b"

_NUMERIC_PATTERN: re.Pattern[str] = re.compile(
    rf"\b(?P<num>\d{{1,6}})\s+{_STREET_NAME}\s+{_SUFFIX}",
    re.IGNORECASE,
)

_SPOKEN_PATTERN: re.Pattern[str] = re.compile(
    rf"\b(?P<num>{SPOKEN_NUMBER_RUN})[\s,]+{_STREET_NAME}\s+{_SUFFIX}",
    re.IGNORECASE,
)

_PREFIX_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:my address is|the address is|address is|i live at|i live on|"
    r"i['’]m at|i am at|located at|it['’]s at|"
    r"mi direcci[oó]n es|la direcci[oó]n es|direcci[oó]n es|vivo en|"
    r"estoy en|queda en)\s+(?P<span>[^.,;!?\n]{3,80})",
    re.IGNORECASE,
)

# "y" joins Spanish number words ("treinta y cinco"), so only cut on it
# when no number follows.
_SPAN_CUT_PATTERN: re.Pattern[str] = re.compile(
    r"\s+(?:and|but|because|so|my name|pero|porque|mi nombre|me llamo|"
    rf"y(?!\s+(?:{NUMBER_WORD_ALT})\b))\b.*$",
    re.IGNORECASE | re.DOTALL,
)

_LEADING_ARTICLE_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:the|la|el)\s+", re.IGNORECASE
)

_SHAPE_DIGIT_START: re.Pattern[str] = re.compile(r"^\d")
_SHAPE_SPOKEN_START: re.Pattern[str] = re.compile(
    rf"^{SPOKEN_NUMBER_RUN}", re.IGNORECASE
)
_SHAPE_STREET_WORD: re.Pattern[str] = re.compile(
    rf"\b(?:{STREET_SUFFIX_ALT}|{SPANISH_STREET_PREFIX_ALT})\b", re.IGNORECASE
)

_SUFFIX_OCCURRENCE: re.Pattern[str] = re.compile(
    rf"\b(?P<suffix>{STREET_SUFFIX_ALT})\b", re.IGNORECASE
)

_CALLE_PATTERN: re.Pattern[str] = re.compile(
    rf"\b(?P<prefix>{SPANISH_STREET_PREFIX_ALT})\.?\s+"
    rf"(?P<street>(?:de\s+(?:la\s+|los\s+|las\s+)?)?{_ALPHA_WORD}"
    rf"(?:\s+{_ALPHA_WORD}){{0,{MAX_STREET_WORDS - 1}}}?)"
    r"\s*,?\s*(?:(?:n[uú]mero|num\.?|no\.?|#)\s*)?"
    rf"(?P<num>\d{{1,6}}|{SPOKEN_NUMBER_RUN})\b",
    re.IGNORECASE,
)

_BARE_NUMBER_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?P<num>\d{1,6})\s+"
    r"(?P<words>[A-ZÁÉÍÓÚÑ][\w'’-]*(?:[ \t]+[A-ZÁÉÍÓÚÑ][\w'’-]*){0,2})\b"
)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _starts_with_article(words: str) -> bool:
    first = words.split()[0].lower() if words.split() else ""
    return first in ARTICLES_AND_PREPOSITIONS


def _numbered_street(pattern: re.Pattern[str]):
    def match(text: str) -> Optional[str]:
        for found in pattern.finditer(text):
            if _starts_with_article(found.group("street")):
                continue
            return _collapse(found.group(0))
        return None

    return match


def _is_address_shaped(span: str) -> bool:
    return bool(
        _SHAPE_DIGIT_START.match(span)
        or _SHAPE_SPOKEN_START.match(span)
        or _SHAPE_STREET_WORD.search(span)
    )


def _prefix_phrase(text: str) -> Optional[str]:
    for found in _PREFIX_PATTERN.finditer(text):
        span = _SPAN_CUT_PATTERN.sub("", found.group("span")).strip()
        span = _LEADING_ARTICLE_PATTERN.sub("", span)
        if span and _is_address_shaped(span):
            return _calle(span) or _collapse(span)
    return None


def _street_span_before(text: str, end: int) -> list[str]:
    """Walk back from a suffix, collecting capitalized or numeric street words."""
    words: list[str] = []
    for raw in reversed(text[:end].split()):
        if raw[-1] in ",.;:!?" or len(words) == MAX_STREET_WORDS:
            break
        word = raw.strip("\"'“”")
        if not word or not (word[0].isupper() or word[0].isdigit()):
            break
        if word.lower() in STOP_WORDS or word.lower() in STREET_SUFFIX_SET:
            break
        words.append(word)
    words.reverse()
    return words


def _any_street(text: str) -> Optional[str]:
    for found in _SUFFIX_OCCURRENCE.finditer(text):
        words = _street_span_before(text, found.start())
        if words:
            return " ".join(words + [found.group("suffix")])
    return None


def _calle(text: str) -> Optional[str]:
    found = _CALLE_PATTERN.search(text)
    if not found:
        return None

    number = found.group("num")
    if not number.isdigit():
        decoded = decode_number_words(split_number_words(number))
        if decoded is None:
            return None
        number = str(decoded)

    return _collapse(f"{found.group('prefix')} {found.group('street')} {number}")


def _bare_number(text: str) -> Optional[str]:
    for found in _BARE_NUMBER_PATTERN.finditer(text):
        if _starts_with_article(found.group("words")):
            continue
        return _collapse(found.group(0))
    return None


ADDRESS_PATTERNS: tuple[CascadePattern, ...] = (
    CascadePattern("numeric", _numbered_street(_NUMERIC_PATTERN)),
    CascadePattern("spoken", _numbered_street(_SPOKEN_PATTERN)),
    CascadePattern("prefix", _prefix_phrase),
    CascadePattern("any-street", _any_street),
    CascadePattern("calle", _calle),
    CascadePattern("bare-number", _bare_number),
)


def accept_address(candidate: str) -> Optional[str]:
    """Decode a leading spoken house number, then validate."""
    return validate_address(normalize_leading_number(candidate))


def extract_address_candidate(text: str) -> Optional[CascadeMatch]:
    """Run the address cascade over already-normalized text."""
    return first_accepted(ADDRESS_PATTERNS, text, accept_address, kind="address")


def is_address_complete(address: str) -> bool:
    """True iff the address begins with a digit run (a house number)."""
    value = (address or "").strip()
    return value != DEFAULT_ADDRESS and bool(re.match(r"\d+", value))
