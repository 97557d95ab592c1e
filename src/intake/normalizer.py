"""
Text normalization for noisy caller transcripts and SMS bodies.

Strips bilingual hesitation markers, ellipses, stutters ("I-I") and immediate
word repeats ("I I live") so the pattern cascades see clean text. The output
is only used as cascade input: language detection and downstream
classification keep the raw text, since filler removal is lossy.
"""

from __future__ import annotations

import re

from src.intake.lexicon import FILLER_WORDS, NUMBER_WORDS


def _filler_regex(word: str) -> str:
    # Multi-word fillers ("o sea", "a ver") tolerate any run of whitespace.
    return r"\s+".join(re.escape(part) for part in word.split())


_FILLER_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:"
    + "|".join(_filler_regex(w) for w in sorted(FILLER_WORDS, key=len, reverse=True))
    + r")\b,?",
    re.IGNORECASE,
)

_ELLIPSIS_PATTERN: re.Pattern[str] = re.compile(r"(?:\.{2,}|…+)")

_STUTTER_PATTERN: re.Pattern[str] = re.compile(r"\b(\w+)(?:-\1)+\b", re.IGNORECASE)

_REPEAT_PATTERN: re.Pattern[str] = re.compile(r"\b(\w+)(?:\s+\1\b)+", re.IGNORECASE)

_WHITESPACE_PATTERN: re.Pattern[str] = re.compile(r"\s+")


def _is_number_token(word: str) -> bool:
    return word.isdigit() or word.lower() in NUMBER_WORDS


def _collapse_stutter(match: re.Match[str]) -> str:
    # "twenty-twenty" is a house number, not a stutter.
    if _is_number_token(match.group(1)):
        return match.group(0)
    return match.group(1)


def _collapse_repeat(match: re.Match[str]) -> str:
    word = match.group(1)
    # Spoken digits legitimately repeat ("one one two two Main Street").
    if _is_number_token(word):
        return match.group(0)
    return word


def _normalize_once(text: str) -> str:
    result = _FILLER_PATTERN.sub(" ", text)
    result = _ELLIPSIS_PATTERN.sub(" ", result)
    result = _STUTTER_PATTERN.sub(_collapse_stutter, result)
    result = _REPEAT_PATTERN.sub(_collapse_repeat, result)
    result = _WHITESPACE_PATTERN.sub(" ", result)
    return result.strip()


def normalize_text(text: str) -> str:
    """
    Normalize a single utterance or transcript for pattern matching.

    Steps (in order):
        1. Remove filler/hesitation words (whole words only)
        2. Replace ellipses with a space
        3. Collapse stutters ("the-the" -> "the"), keeping number words
        4. Collapse immediate repeats ("I I" -> "I")
        5. Collapse whitespace and strip

    The steps are re-applied until the text stops changing, so removing a
    filler that sat between two copies of a word also collapses the repeat.
    That makes the function idempotent.
    """
    if not text or not text.strip():
        return ""

    previous = None
    result = text
    while result != previous:
        previous = result
        result = _normalize_once(result)
    return result
