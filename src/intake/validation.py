"""
Post-match validation of name and address candidates.

A pattern hit is not yet a field value: "I'm calling because..." produces a
verb phrase, "near the park" produces a vague location. These rules veto
such candidates so the cascade keeps searching. Validators never raise;
they return the cleaned value, or None to reject.
"""

from __future__ import annotations

import re
from typing import Literal, Optional

from src.intake.lexicon import (
    COMMON_WORDS,
    GERUND_SHAPED_NAMES,
    SPANISH_GIVEN_NAMES,
    STOP_WORDS,
)

FieldKind = Literal["name", "address"]

NAME_MIN_CHARS = 2
NAME_MAX_CHARS = 50
ADDRESS_MIN_CHARS = 5

_EDGE_PUNCTUATION = " \t\n.,;:!?\"'“”()"

_VERB_PHRASE_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:calling|call|reporting|report|looking|trying|having|going|getting|"
    r"wondering|writing|texting|reaching|contacting|following|living|located|"
    r"need|needing|want|wanting|wanted|live|lives|just|about|because|"
    r"concerned|worried|here|from|with|not|"
    r"llamando|llamo|reportando|reporto|hablando|escribiendo|buscando|"
    r"tratando|viviendo|teniendo|necesito|quiero|queria|quería|vivo|tengo|"
    r"estoy|hay|porque)\b",
    re.IGNORECASE,
)

_NON_NAME_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:not sure|no one|nobody|anonymous|anon|unknown|none|no name|"
    r"n/a|prefer not|rather not|no thanks|not provided|unknown caller|"
    r"the city|a resident|a neighbor|your neighbor|"
    r"an[oó]nimo|an[oó]nima|desconocido|nadie|no s[eé]|sin nombre|"
    r"prefiero no|un vecino|una vecina)\b",
    re.IGNORECASE,
)

_VAGUE_ADDRESS_PATTERN: re.Pattern[str] = re.compile(
    r"\b(?:not sure|unsure|don'?t know|do not know|no idea|somewhere|"
    r"near the|near my|next to|across from|close to|around the|by the|"
    r"behind the|in front of|down the street|"
    r"no s[eé]|ni idea|cerca de|al lado de|enfrente de|frente a|"
    r"por ah[ií]|en alg[uú]n lugar|atr[aá]s de)\b",
    re.IGNORECASE,
)

# "-ing" needs three letters before it so "King", "Ming" and "Ewing" pass;
# Spanish endings need two ("leyendo").
_GERUND_PATTERN: re.Pattern[str] = re.compile(
    r"^(?:[^\W\d_]{3,}ing|[^\W\d_]{2,}(?:ando|iendo|yendo))$", re.IGNORECASE
)


def _clean(candidate: str) -> str:
    return re.sub(r"\s+", " ", (candidate or "")).strip(_EDGE_PUNCTUATION)


def _is_common(word: str) -> bool:
    lowered = word.lower()
    return lowered in STOP_WORDS or lowered in COMMON_WORDS


def _is_gerund(word: str) -> bool:
    return bool(_GERUND_PATTERN.match(word)) and word.lower() not in GERUND_SHAPED_NAMES


def validate_name(candidate: str) -> Optional[str]:
    """
    Return the cleaned name, or None if the candidate is not a plausible name.

    Rejection rules, in order:
        - shorter than 2 or longer than 50 characters
        - all digits
        - starts like a verb phrase ("calling about", "llamando por") or
          with a gerund ("walking", "caminando"), unless the word is a
          known gerund-shaped name ("Irving", "Fernando")
        - a known non-name phrase ("not sure", "anónimo")
        - a single stop/common word, unless it is an allow-listed given name
          that doubles as a noun ("Luz", "Rosa", "Cruz")
        - every word is a stop/common word
    """
    value = _clean(candidate)

    if len(value) < NAME_MIN_CHARS or len(value) > NAME_MAX_CHARS:
        return None
    if value.replace(" ", "").isdigit():
        return None
    if _VERB_PHRASE_PATTERN.match(value):
        return None
    if _is_gerund(value.split()[0]):
        return None
    if _NON_NAME_PATTERN.match(value):
        return None

    words = value.split()
    if len(words) == 1:
        if words[0].lower() in SPANISH_GIVEN_NAMES:
            return value
        if _is_common(words[0]):
            return None
        return value

    if all(_is_common(w) and w.lower() not in SPANISH_GIVEN_NAMES for w in words):
        return None

    return value


def validate_address(candidate: str) -> Optional[str]:
    """Return the cleaned address, or None if it is too short or vague."""
    value = _clean(candidate)

    if len(value) < ADDRESS_MIN_CHARS:
        return None
    if _VAGUE_ADDRESS_PATTERN.search(value):
        return None

    return value


def validate_field(kind: FieldKind, candidate: str) -> Optional[str]:
    """Dispatch to the validator for ``kind``."""
    if kind == "name":
        return validate_name(candidate)
    return validate_address(candidate)
