"""
Address quality and manual-review flags for intake records.
"""

from __future__ import annotations

import re
from typing import Any, Literal, Mapping, Optional

from src.intake.lexicon import DEFAULT_ADDRESS, DEFAULT_NAME

AddressQuality = Literal["missing", "intersection", "approximate", "complete", "partial"]
Channel = Literal["Voice", "SMS"]

_HOUSE_NUMBER: re.Pattern[str] = re.compile(r"^\d+$")

NORMAL_ENDINGS = frozenset({
    "customer-ended-call",
    "assistant-ended-call",
    "silence-timed-out",
    "customer-did-not-give-microphone-permission",
    "assistant-said-end-call-phrase",
})

_DEFAULT_NAMES = frozenset({DEFAULT_NAME, DEFAULT_ADDRESS})


def derive_address_quality(address: Optional[str]) -> AddressQuality:
    """
    Grade an address string.

    missing: empty or the default literal.
    intersection: a cross-street ("Main St & 5th Ave").
    approximate: marked "(Approximate)".
    complete: a house number followed by at least one more word.
    partial: anything else, e.g. a street with no number.
    """
    if not address or not address.strip() or address.strip() == DEFAULT_ADDRESS:
        return "missing"

    trimmed = address.strip()
    if " & " in trimmed:
        return "intersection"
    if "(Approximate)" in trimmed:
        return "approximate"

    words = trimmed.split()
    if len(words) >= 2 and _HOUSE_NUMBER.match(words[0]):
        return "complete"
    return "partial"


def derive_needs_review(
    name: Optional[str],
    address_quality: AddressQuality,
    channel: Channel,
    call_metadata: Optional[Mapping[str, Any]] = None,
) -> bool:
    """Whether a record should be flagged for manual review."""
    if address_quality in ("missing", "approximate"):
        return True

    if not name or not name.strip() or name.strip() in _DEFAULT_NAMES:
        return True

    # SMS is never flagged on call metadata
    if channel == "Voice" and call_metadata:
        ended_reason = call_metadata.get("endedReason")
        if ended_reason and ended_reason not in NORMAL_ENDINGS:
            return True
        if call_metadata.get("analysisSuccess") is False:
            return True

    return False
