"""
Ordered pattern cascades.

A cascade is an ordered tuple of ``CascadePattern`` entries, highest
confidence first. ``first_accepted`` runs each matcher in turn and hands the
raw candidate to an acceptor (the field validator); the first candidate the
acceptor keeps wins. Rejections are logged and the search moves on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

import structlog

logger = structlog.get_logger(__name__)

Matcher = Callable[[str], Optional[str]]
Acceptor = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class CascadePattern:
    """One step of a cascade: a label for provenance and a matcher."""

    label: str
    matcher: Matcher


@dataclass(frozen=True)
class CascadeMatch:
    """A candidate that survived validation."""

    value: str
    label: str


def first_accepted(
    patterns: Sequence[CascadePattern],
    text: str,
    accept: Acceptor,
    *,
    kind: str = "field",
) -> Optional[CascadeMatch]:
    """
    Return the first match, in pattern order, that ``accept`` keeps.

    ``accept`` returns the (possibly cleaned) value to keep, or None to
    reject the candidate.
    """
    if not text:
        return None

    for pattern in patterns:
        candidate = pattern.matcher(text)
        if not candidate:
            continue

        value = accept(candidate)
        if value:
            return CascadeMatch(value=value, label=pattern.label)

        logger.debug(
            "Candidate rejected",
            kind=kind,
            pattern=pattern.label,
            candidate=candidate,
        )

    return None
