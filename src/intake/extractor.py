"""
Two-pass field extraction for voice calls.

Each field is searched as a small state machine:

    Searching(messages) -> Searching(transcript) -> Resolved(value | default)

Pass A runs the field's cascade over each caller utterance in order; the
per-speaker text gives patterns clean context. Pass B, only when Pass A
found nothing, runs it over the flattened transcript with the assistant's
lines removed. If neither pass yields a validated value the fixed default
is returned.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Sequence

import structlog

from src.intake.addresses import extract_address_candidate
from src.intake.cascade import CascadeMatch
from src.intake.language import detect_language
from src.intake.models import (
    ExtractionResult,
    SearchPass,
    Utterance,
    ValidatedField,
)
from src.intake.names import extract_name_candidate
from src.intake.normalizer import normalize_text
from src.intake.validation import FieldKind

logger = structlog.get_logger(__name__)

NO_DESCRIPTION = "No issue description provided"

# Lines spoken by the assistant in a flattened "Speaker: text" transcript.
_AGENT_LINE_PATTERN: re.Pattern[str] = re.compile(
    r"^\s*(?:AI|Assistant|Agent|Bot)\s*:.*$\n?",
    re.IGNORECASE | re.MULTILINE,
)

_CASCADES: dict[str, Callable[[str], Optional[CascadeMatch]]] = {
    "name": extract_name_candidate,
    "address": extract_address_candidate,
}


def _default_for(kind: FieldKind) -> ValidatedField:
    if kind == "name":
        return ValidatedField.default_name()
    return ValidatedField.default_address()


def caller_transcript(transcript: Optional[str]) -> str:
    """Drop assistant lines so its own introduction is not taken as the caller's."""
    return _AGENT_LINE_PATTERN.sub("", transcript or "").strip()


def _search(
    kind: FieldKind,
    search_pass: SearchPass,
    texts: Iterable[str],
) -> Optional[ValidatedField]:
    cascade = _CASCADES[kind]
    for text in texts:
        match = cascade(normalize_text(text))
        if match:
            return ValidatedField(
                value=match.value,
                source=f"{search_pass.value}/{match.label}",
            )
    return None


def extract_field(
    kind: FieldKind,
    utterances: Sequence[Utterance],
    transcript: Optional[str] = None,
) -> ValidatedField:
    """
    Extract one field (name or address) from a call.

    Never raises: any unexpected error is logged and the default is returned.
    """
    passes = (
        (SearchPass.MESSAGES, [u.text for u in utterances if u.is_caller]),
        (SearchPass.TRANSCRIPT, [caller_transcript(transcript)]),
    )

    try:
        for search_pass, texts in passes:
            found = _search(kind, search_pass, texts)
            if found:
                logger.info(
                    "Field extracted",
                    kind=kind,
                    value=found.value,
                    source=found.source,
                )
                return found
    except Exception:
        logger.exception("Field extraction failed", kind=kind)

    logger.info("Field not found, using default", kind=kind)
    return _default_for(kind)


def extract_call_fields(
    utterances: Sequence[Utterance],
    transcript: Optional[str] = None,
) -> ExtractionResult:
    """
    Extract caller name, street address and spoken language from a call.

    Args:
        utterances: Ordered speaker turns; only caller turns are searched.
        transcript: The flattened transcript, searched when the turns yield
            nothing.

    Returns:
        A complete ExtractionResult; fields fall back to their defaults.
    """
    utterances = list(utterances or [])
    logger.info(
        "Extraction started",
        utterances=len(utterances),
        transcript_chars=len(transcript or ""),
    )

    name = extract_field("name", utterances, transcript)
    address = extract_field("address", utterances, transcript)

    try:
        language = detect_language(utterances)
    except Exception:
        logger.exception("Language detection failed")
        language = "English"

    return ExtractionResult(name=name, address=address, language=language)


def build_raw_issue_text(utterances: Iterable[Utterance]) -> str:
    """
    Raw (unnormalized) caller text for downstream classification.

    Classification tolerates noise better than extraction, so fillers and
    stutters are kept.
    """
    text = " ".join(u.text for u in utterances if u.is_caller).strip()
    return text or NO_DESCRIPTION
