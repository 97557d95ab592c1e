"""
End-of-call-report webhook payloads.

Parses the voice platform's end-of-call report and runs field extraction
over it. Only the fields extraction needs are modelled; everything else in
the payload is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field

from src.intake.extractor import build_raw_issue_text, extract_call_fields, NO_DESCRIPTION
from src.intake.models import ExtractionResult, Utterance

logger = structlog.get_logger(__name__)

END_OF_CALL_REPORT = "end-of-call-report"
NO_RAW_TEXT = "No description provided"


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ReportMessage(_Lenient):
    """One speaker turn in the call artifact."""
    role: str = "user"
    message: str = ""
    time: Optional[float] = None


class CallArtifact(_Lenient):
    messages: list[ReportMessage] = Field(default_factory=list)


class CallAnalysis(_Lenient):
    summary: Optional[str] = None
    success_evaluation: Optional[str] = Field(default=None, alias="successEvaluation")


class CallInfo(_Lenient):
    id: Optional[str] = None
    type: Optional[str] = None


class EndOfCallReport(_Lenient):
    type: str
    transcript: str = ""
    ended_reason: Optional[str] = Field(default=None, alias="endedReason")
    summary: Optional[str] = None
    call: Optional[CallInfo] = None
    artifact: Optional[CallArtifact] = None
    analysis: Optional[CallAnalysis] = None


class Transport(_Lenient):
    call_sid: Optional[str] = Field(default=None, alias="callSid")


class CallReportPayload(_Lenient):
    """Top-level webhook body carrying an end-of-call report."""
    message: EndOfCallReport
    transport: Optional[Transport] = None


@dataclass(frozen=True)
class CallReportExtraction:
    """Extraction result plus the raw caller text for classification."""
    result: ExtractionResult
    raw_text: str


def is_end_of_call_report(payload: Any) -> bool:
    """Check whether a decoded JSON body is an end-of-call report. Never raises."""
    if not isinstance(payload, dict):
        return False
    message = payload.get("message")
    if not isinstance(message, dict):
        return False
    return message.get("type") == END_OF_CALL_REPORT


def parse_call_report(payload: dict[str, Any]) -> CallReportPayload:
    """Validate a webhook body. Raises pydantic.ValidationError."""
    return CallReportPayload.model_validate(payload)


def get_call_id(payload: CallReportPayload) -> Optional[str]:
    """Call identifier: transport.callSid first, then message.call.id."""
    if payload.transport and payload.transport.call_sid:
        return payload.transport.call_sid
    if payload.message.call and payload.message.call.id:
        return payload.message.call.id
    return None


def utterances_from_report(report: EndOfCallReport) -> list[Utterance]:
    if not report.artifact:
        return []
    return [
        Utterance.from_dict(m.model_dump())
        for m in report.artifact.messages
    ]


def _raw_text(utterances: list[Utterance], report: EndOfCallReport) -> str:
    text = build_raw_issue_text(utterances)
    if text == NO_DESCRIPTION:
        text = report.transcript.strip()
    if not text and report.analysis and report.analysis.summary:
        text = report.analysis.summary.strip()
    return text or NO_RAW_TEXT


def extract_from_call_report(payload: CallReportPayload | dict[str, Any]) -> CallReportExtraction:
    """
    Extract name, address, language and raw issue text from an end-of-call report.

    Accepts a parsed payload or the decoded JSON body; a raw body that fails
    validation raises pydantic.ValidationError.
    """
    if not isinstance(payload, CallReportPayload):
        payload = parse_call_report(payload)

    report = payload.message
    utterances = utterances_from_report(report)

    logger.info(
        "Call report received",
        call_id=get_call_id(payload),
        messages=len(utterances),
        transcript_chars=len(report.transcript),
        ended_reason=report.ended_reason,
    )

    result = extract_call_fields(utterances, report.transcript)
    return CallReportExtraction(result=result, raw_text=_raw_text(utterances, report))
