"""
Hybrid SMS field extraction.

Tier 1 asks the LLM for name and address, raced against a deadline. Tier 2
runs the regex cascades directly over the normalized message body for any
field the LLM left empty, got rejected, failed on or did not return in time.

A timed-out LLM call is abandoned, not cancelled: it keeps running in the
background and its eventual outcome is retrieved and dropped.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Protocol

import structlog

from src.intake.addresses import (
    accept_address,
    extract_address_candidate,
    is_address_complete,
)
from src.intake.config import Config, get_config
from src.intake.language import detect_text_language
from src.intake.llm import FieldExtractionLLM, SmsFieldExtraction
from src.intake.models import (
    Completeness,
    FieldOrigin,
    SearchPass,
    SmsExtractionResult,
    ValidatedField,
)
from src.intake.names import extract_name_candidate
from src.intake.normalizer import normalize_text
from src.intake.validation import validate_name

logger = structlog.get_logger(__name__)

LLM_SOURCE = "llm"

# Strong references to abandoned LLM calls until they settle.
_abandoned: set[asyncio.Future] = set()


class FieldExtractor(Protocol):
    async def extract_fields(self, body: str) -> SmsFieldExtraction: ...


def grade_completeness(
    name_is_default: bool,
    address_is_default: bool,
    address_complete: bool,
) -> Completeness:
    """
    Advisory grade of how much was recovered.

    complete: both fields found and the address has a house number.
    minimal: neither field found.
    partial: anything in between.
    """
    if name_is_default and address_is_default:
        return "minimal"
    if not name_is_default and not address_is_default and address_complete:
        return "complete"
    return "partial"


def _discard_abandoned(task: asyncio.Future) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug("Abandoned LLM call failed", error=str(error))
    else:
        logger.debug("Abandoned LLM call finished late")


async def _race_llm(
    llm: FieldExtractor,
    body: str,
    timeout: float,
) -> Optional[SmsFieldExtraction]:
    """Run one LLM call against a deadline. None on timeout or failure."""
    task = asyncio.ensure_future(llm.extract_fields(body))
    done, _ = await asyncio.wait({task}, timeout=timeout)

    if task not in done:
        _abandoned.add(task)
        task.add_done_callback(_discard_abandoned)
        logger.warning("LLM extraction timed out", timeout_seconds=timeout)
        return None

    try:
        return task.result()
    except Exception as e:
        logger.warning("LLM extraction failed", error=str(e), error_type=type(e).__name__)
        return None


def _from_llm(extraction: Optional[SmsFieldExtraction]) -> tuple[Optional[str], Optional[str]]:
    """Validated (name, address) from an LLM reply; rejected values become None."""
    if extraction is None:
        return None, None

    name = None
    if extraction.name and extraction.name.strip():
        name = validate_name(extraction.name)
        if name is None:
            logger.debug("LLM value rejected", kind="name", candidate=extraction.name)

    address = None
    if extraction.address and extraction.address.strip():
        address = accept_address(extraction.address)
        if address is None:
            logger.debug("LLM value rejected", kind="address", candidate=extraction.address)

    return name, address


def _resolve(
    llm_value: Optional[str],
    regex_match,
    default: ValidatedField,
) -> tuple[ValidatedField, FieldOrigin]:
    if llm_value:
        return ValidatedField(value=llm_value, source=LLM_SOURCE), "llm"
    if regex_match:
        source = f"{SearchPass.SMS.value}/{regex_match.label}"
        return ValidatedField(value=regex_match.value, source=source), "regex"
    return default, "default"


def _minimal_result() -> SmsExtractionResult:
    return SmsExtractionResult(
        name=ValidatedField.default_name(),
        address=ValidatedField.default_address(),
        language="English",
    )


async def extract_sms_fields(
    body: str,
    *,
    llm: Optional[FieldExtractor] = None,
    timeout: Optional[float] = None,
    config: Optional[Config] = None,
) -> SmsExtractionResult:
    """
    Extract name, address and language from one SMS body.

    Args:
        body: Raw message text.
        llm: LLM extractor; built from config when omitted. When the LLM
            tier is disabled or has no API key, only regex runs.
        timeout: Seconds to wait for the LLM (defaults to config).
        config: Configuration (defaults to get_config()).

    Returns:
        A complete SmsExtractionResult. Never raises.
    """
    body = body or ""

    try:
        config = config or get_config()
        if llm is None and config.llm_available:
            llm = FieldExtractionLLM(config)
        if timeout is None:
            timeout = config.sms_llm_timeout_seconds

        extraction = None
        if llm is not None and body.strip():
            extraction = await _race_llm(llm, body, timeout)
        llm_name, llm_address = _from_llm(extraction)

        normalized = normalize_text(body)
        name_match = None if llm_name else extract_name_candidate(normalized)
        address_match = None if llm_address else extract_address_candidate(normalized)

        name, name_source = _resolve(llm_name, name_match, ValidatedField.default_name())
        address, address_source = _resolve(
            llm_address, address_match, ValidatedField.default_address()
        )

        address_complete = is_address_complete(address.value)
        completeness = grade_completeness(
            name.is_default, address.is_default, address_complete
        )

        result = SmsExtractionResult(
            name=name,
            address=address,
            language=detect_text_language(body),
            name_source=name_source,
            address_source=address_source,
            completeness=completeness,
            address_is_complete=address_complete,
        )
    except Exception:
        logger.exception("SMS extraction failed", body_chars=len(body))
        return _minimal_result()

    logger.info(
        "SMS extraction completed",
        body_chars=len(body),
        name_source=name_source,
        address_source=address_source,
        completeness=completeness,
        language=result.language,
    )
    return result
