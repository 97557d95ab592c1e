"""
Intake extraction package.

Keep imports lightweight so modules like `src.intake.normalizer` can be used
without pulling in the LLM client stack at import time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from src.intake.config import Config

__all__ = [
    "Config",
    "get_config",
    "extract_call_fields",
    "extract_sms_fields",
    "extract_from_call_report",
    "configure_logging",
]

_LOCATIONS = {
    "Config": "src.intake.config",
    "get_config": "src.intake.config",
    "extract_call_fields": "src.intake.extractor",
    "extract_sms_fields": "src.intake.sms",
    "extract_from_call_report": "src.intake.payload",
    "configure_logging": "src.intake.logging_config",
}


def __getattr__(name: str) -> Any:
    if name in _LOCATIONS:
        import importlib

        return getattr(importlib.import_module(_LOCATIONS[name]), name)
    raise AttributeError(name)
