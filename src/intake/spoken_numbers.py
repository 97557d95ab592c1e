"""
Spoken-number decoding for house numbers.

House numbers are read aloud as digits ("five four eight four") or as
digit groups ("eleven twenty two", "fifty four eighty four"), not as
cardinal magnitudes. Summing "eleven twenty two" gives 33; the caller meant
1122. The decoder therefore has two modes:

- digit-by-digit: every word is a single digit, concatenate positionally.
- compound-group: build groups left to right ("twenty two" -> 22, "one
  hundred twenty two" -> 122) and concatenate the groups' decimal forms.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

import structlog

from src.intake.lexicon import (
    HUNDREDS,
    MULTIPLIERS,
    NUMBER_CONJUNCTIONS,
    ONES,
    SPOKEN_NUMBER_RUN,
    TENS,
    TEENS,
)

logger = structlog.get_logger(__name__)

_LEADING_RUN_PATTERN: re.Pattern[str] = re.compile(
    rf"^\s*(?P<run>{SPOKEN_NUMBER_RUN})(?P<rest>.*)$",
    re.IGNORECASE | re.DOTALL,
)

_TOKEN_SPLIT_PATTERN: re.Pattern[str] = re.compile(r"[\s,-]+")


def _value_of(word: str) -> Optional[int]:
    for table in (ONES, TEENS, TENS, HUNDREDS):
        if word in table:
            return table[word]
    return None


def _open_slot(value: int) -> int:
    """Largest value (exclusive) that may still be added onto ``value``."""
    if value >= 100 and value % 100 == 0:
        return 100
    if 20 <= value < 100 and value % 10 == 0:
        return 10
    return 0


def _decode_digits(words: Sequence[str]) -> Optional[int]:
    if not words or any(w not in ONES for w in words):
        return None
    return int("".join(str(ONES[w]) for w in words))


def _decode_groups(words: Sequence[str]) -> Optional[int]:
    groups: list[str] = []
    current: Optional[int] = None
    tail = 0  # last piece added to ``current``; multipliers scale it
    slot = 0

    for word in words:
        if word in NUMBER_CONJUNCTIONS:
            continue

        if word in MULTIPLIERS:
            multiplier = MULTIPLIERS[word]
            if current is None:
                current, tail = multiplier, multiplier
            elif tail < multiplier:
                current = current - tail + tail * multiplier
                tail = tail * multiplier
            else:
                groups.append(str(current))
                current, tail = multiplier, multiplier
            slot = multiplier
            continue

        value = _value_of(word)
        if value is None:
            return None

        if current is not None and 0 < value < slot:
            current += value
            tail = value
        else:
            if current is not None:
                groups.append(str(current))
            current, tail = value, value
        slot = _open_slot(value)

    if current is not None:
        groups.append(str(current))
    if not groups:
        return None
    return int("".join(groups))


def decode_number_words(words: Sequence[str]) -> Optional[int]:
    """
    Decode a sequence of English/Spanish number words into an integer.

    Examples:
        ["five", "four", "eight", "four"] -> 5484
        ["eleven", "twenty", "two"]       -> 1122
        ["treinta", "y", "cinco"]         -> 35
        ["one", "hundred", "twenty", "two"] -> 122

    Returns None for an empty sequence or any unrecognized word.
    """
    tokens = [w.strip().lower() for w in words if w and w.strip()]
    if not tokens:
        return None

    digits = _decode_digits(tokens)
    if digits is not None:
        return digits

    return _decode_groups(tokens)


def split_number_words(run: str) -> list[str]:
    """Split a spoken run ("twenty-two, y cinco") into tokens."""
    return [t for t in _TOKEN_SPLIT_PATTERN.split(run.strip()) if t]


def normalize_leading_number(text: str) -> str:
    """
    Replace a leading run of number words with its digits.

    "eleven twenty two Main Street" -> "1122 Main Street". Text without a
    leading spoken run (or whose run fails to decode) is returned unchanged.
    """
    if not text:
        return text

    match = _LEADING_RUN_PATTERN.match(text)
    if not match:
        return text.strip()

    run = match.group("run")
    number = decode_number_words(split_number_words(run))
    if number is None:
        return text.strip()

    rest = match.group("rest").lstrip(" ,")
    normalized = f"{number} {rest}".strip()
    logger.debug("Spoken house number decoded", spoken=run, number=number)
    return normalized
