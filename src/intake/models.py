"""
Data types shared across the extraction engine.

All result types are frozen: nothing produced by one extraction call is
mutated or reused by another.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Literal, Optional

from src.intake.lexicon import DEFAULT_ADDRESS, DEFAULT_NAME

Role = Literal["caller", "agent", "system"]
Language = Literal["English", "Spanish"]
FieldOrigin = Literal["llm", "regex", "default"]
Completeness = Literal["complete", "partial", "minimal"]

DEFAULT_SOURCE = "default"


def normalize_role(role: Optional[str]) -> Role:
    """Map webhook role names onto caller/agent/system."""
    r = (role or "").strip().lower()
    if r in ("user", "caller", "customer", "human"):
        return "caller"
    if r in ("assistant", "agent", "bot", "ai"):
        return "agent"
    return "system"


class SearchPass(str, Enum):
    """Which text a cascade ran over."""
    MESSAGES = "messages"
    TRANSCRIPT = "transcript"
    SMS = "sms"


@dataclass(frozen=True)
class Utterance:
    """One speaker turn from a call transcript."""
    role: Role
    text: str
    time: Optional[float] = None

    @property
    def is_caller(self) -> bool:
        return self.role == "caller"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Utterance":
        """Build from a webhook message (``role``/``message`` or ``role``/``text``)."""
        text = data.get("text")
        if text is None:
            text = data.get("message", "")
        time = data.get("time")
        return cls(
            role=normalize_role(data.get("role")),
            text=str(text or ""),
            time=float(time) if isinstance(time, (int, float)) else None,
        )


@dataclass(frozen=True)
class ValidatedField:
    """An extracted value with its provenance, or the fixed default."""
    value: str
    source: str

    @property
    def is_default(self) -> bool:
        return self.source == DEFAULT_SOURCE

    @classmethod
    def default_name(cls) -> "ValidatedField":
        return cls(value=DEFAULT_NAME, source=DEFAULT_SOURCE)

    @classmethod
    def default_address(cls) -> "ValidatedField":
        return cls(value=DEFAULT_ADDRESS, source=DEFAULT_SOURCE)


@dataclass(frozen=True)
class ExtractionResult:
    """Name, address and language extracted from one call."""
    name: ValidatedField
    address: ValidatedField
    language: Language

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SmsExtractionResult(ExtractionResult):
    """SMS extraction, with the tier each field came from and a completeness grade."""
    name_source: FieldOrigin = "default"
    address_source: FieldOrigin = "default"
    completeness: Completeness = "minimal"
    address_is_complete: bool = False
