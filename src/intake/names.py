"""
Caller-name pattern cascade (English + Spanish).

Patterns, highest confidence first:
    - explicit self-introductions ("my name is", "me llamo", "soy", ...)
    - a bare capitalized name at a line/sentence start or after a speaker
      label ("Customer: Johnny Snow.")

Each pattern captures up to three words; only the leading run of
name-shaped words is kept, so "John and I live..." yields "John".
"""

from __future__ import annotations

import re
from typing import Optional

from src.intake.cascade import CascadeMatch, CascadePattern, first_accepted
from src.intake.lexicon import SPANISH_GIVEN_NAMES, STOP_WORDS
from src.intake.validation import validate_name

MAX_NAME_WORDS = 3

_NAME_SHAPE: re.Pattern[str] = re.compile(r"^[^\W\d_](?:[^\W\d_]|['’-])+$")

_WORD = r"[^\W\d_][\w'’-]*"
_CAPTURE = rf"(?P<name>{_WORD}(?:\s+{_WORD}){{0,{MAX_NAME_WORDS - 1}}})"

_CAP_WORD = r"[A-ZÁÉÍÓÚÑÜ][a-záéíóúñü'’-]+"
_SPEAKER_LABELS = r"(?:Customer|Caller|User|Cliente|Usuario)"

_BARE_NAME_PATTERN: re.Pattern[str] = re.compile(
    rf"(?:^|[.!?]\s+|\b{_SPEAKER_LABELS}\s*:\s*)"
    rf"(?P<name>{_CAP_WORD}(?:[ \t]+{_CAP_WORD}){{0,{MAX_NAME_WORDS - 1}}})"
    r"(?=\s*[.,!?;]|\s*$)",
    re.MULTILINE,
)


def is_name_shaped(word: str) -> bool:
    """Letters (accents allowed), apostrophes or hyphens, 2+ chars, not a stop word."""
    if not word or not _NAME_SHAPE.match(word):
        return False
    lowered = word.lower()
    return lowered in SPANISH_GIVEN_NAMES or lowered not in STOP_WORDS


def leading_name_words(phrase: str) -> list[str]:
    """Keep the consecutive name-shaped words at the start of ``phrase``."""
    words: list[str] = []
    for raw in phrase.split():
        word = raw.strip(".,!?;:")
        if not is_name_shaped(word):
            break
        words.append(word)
        if len(words) == MAX_NAME_WORDS:
            break
    return words


def _trigger(phrase_regex: str, *, weak: bool = False):
    """
    Matcher for "<trigger phrase> <name>".

    Weak triggers ("it's", "i'm", "this is") are also followed by predicates
    ("it's broken"), so in mixed-case text their capture must be capitalized.
    All-lowercase text (SMS, some transcripts) carries no case signal.
    """
    pattern = re.compile(rf"\b(?:{phrase_regex})\s+{_CAPTURE}", re.IGNORECASE)

    def match(text: str) -> Optional[str]:
        needs_capital = weak and text != text.lower()
        for found in pattern.finditer(text):
            captured = found.group("name")
            if needs_capital and not captured[0].isupper():
                continue
            words = leading_name_words(captured)
            return " ".join(words) if words else None
        return None

    return match


def _bare_name(text: str) -> Optional[str]:
    for found in _BARE_NAME_PATTERN.finditer(text):
        words = leading_name_words(found.group("name"))
        if words:
            return " ".join(words)
    return None


NAME_PATTERNS: tuple[CascadePattern, ...] = (
    CascadePattern("my name is", _trigger(r"my name is|my name'?s|name is")),
    CascadePattern("mi nombre es", _trigger(r"mi nombre es")),
    CascadePattern("me llamo", _trigger(r"me llamo")),
    CascadePattern("i'm", _trigger(r"i['’]m|i am", weak=True)),
    CascadePattern("soy", _trigger(r"soy")),
    CascadePattern("this is", _trigger(r"this is", weak=True)),
    CascadePattern("habla", _trigger(r"(?:le\s+)?habla")),
    CascadePattern("it's", _trigger(r"it['’]?s|it is", weak=True)),
    CascadePattern("bare name", _bare_name),
)


def extract_name_candidate(text: str) -> Optional[CascadeMatch]:
    """Run the name cascade over already-normalized text."""
    return first_accepted(NAME_PATTERNS, text, validate_name, kind="name")
