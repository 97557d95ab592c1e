"""
Language utilities for intake extraction.

Provides a small, deterministic lexical check that labels a caller's speech
as English or Spanish. It runs on the raw caller text: fillers such as
"este" or "pues" are themselves Spanish signal, so the normalizer is not
applied first.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable

from src.intake.lexicon import SPANISH_INDICATOR_ALT
from src.intake.models import Language, Utterance


def _normalize_for_matching(text: str) -> str:
    text = (text or "").strip().lower()
    text = text.replace("’", "'")
    text = unicodedata.normalize("NFKD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = re.sub(r"\s+", " ", text)
    return text


_SPANISH_PATTERN: re.Pattern[str] = re.compile(rf"\b(?:{SPANISH_INDICATOR_ALT})\b")


def detect_text_language(text: str) -> Language:
    """
    Label free text as "Spanish" if any Spanish indicator word appears,
    otherwise "English".
    """
    normalized = _normalize_for_matching(text)
    if normalized and _SPANISH_PATTERN.search(normalized):
        return "Spanish"
    return "English"


def caller_text(utterances: Iterable[Utterance]) -> str:
    """Raw caller utterances joined with spaces."""
    return " ".join(u.text for u in utterances if u.is_caller and u.text).strip()


def detect_language(utterances: Iterable[Utterance]) -> Language:
    """
    Detect the caller's language from their utterances.

    Binary decision with no confidence score; defaults to English.
    """
    return detect_text_language(caller_text(utterances))
