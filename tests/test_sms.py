"""
Tests for hybrid (LLM + regex) SMS extraction.
"""

import asyncio
import os
from unittest.mock import patch

import pytest

from src.intake import sms
from src.intake.config import get_config
from src.intake.llm import SmsFieldExtraction
from src.intake.sms import extract_sms_fields, grade_completeness

MESSAGE = "123 Oak Ave, my name is Maria Lopez"


class FakeLLM:
    """Returns a fixed extraction."""

    def __init__(self, name=None, address=None):
        self.reply = SmsFieldExtraction(name=name, address=address)
        self.calls = []

    async def extract_fields(self, body):
        self.calls.append(body)
        return self.reply


class SlowLLM:
    """Never answers until released."""

    def __init__(self):
        self.release = asyncio.Event()

    async def extract_fields(self, body):
        await self.release.wait()
        return SmsFieldExtraction(name="Too Late", address="999 Late Street")


class FailingLLM:
    async def extract_fields(self, body):
        raise RuntimeError("upstream 500")


class TestGradeCompleteness:
    def test_complete(self):
        assert grade_completeness(False, False, True) == "complete"

    def test_minimal(self):
        assert grade_completeness(True, True, False) == "minimal"

    @pytest.mark.parametrize(
        "name_default, address_default, address_complete",
        [
            (False, True, False),
            (True, False, True),
            (True, False, False),
            (False, False, False),
        ],
    )
    def test_partial(self, name_default, address_default, address_complete):
        assert grade_completeness(name_default, address_default, address_complete) == "partial"


class TestLLMTier:
    @pytest.mark.asyncio
    async def test_llm_values_used(self):
        llm = FakeLLM(name="Maria Lopez", address="123 Oak Ave")
        result = await extract_sms_fields(MESSAGE, llm=llm, timeout=1.0)

        assert llm.calls == [MESSAGE]
        assert result.name.value == "Maria Lopez"
        assert result.name.source == "llm"
        assert result.name_source == "llm"
        assert result.address_source == "llm"
        assert result.completeness == "complete"
        assert result.address_is_complete is True

    @pytest.mark.asyncio
    async def test_llm_spoken_address_is_decoded(self):
        llm = FakeLLM(name="Maria Lopez", address="eleven twenty two Main Street")
        result = await extract_sms_fields("some text", llm=llm, timeout=1.0)

        assert result.address.value == "1122 Main Street"
        assert result.address_is_complete is True

    @pytest.mark.asyncio
    async def test_llm_null_field_falls_back_to_regex(self):
        llm = FakeLLM(name="Maria Lopez", address=None)
        result = await extract_sms_fields(MESSAGE, llm=llm, timeout=1.0)

        assert result.name_source == "llm"
        assert result.address_source == "regex"
        assert result.address.value == "123 Oak Ave"
        assert result.address.source == "sms/numeric"

    @pytest.mark.asyncio
    async def test_rejected_llm_value_falls_back_to_regex(self):
        llm = FakeLLM(name="calling about", address="somewhere near the park")
        result = await extract_sms_fields(MESSAGE, llm=llm, timeout=1.0)

        assert result.name.value == "Maria Lopez"
        assert result.name_source == "regex"
        assert result.address_source == "regex"

    @pytest.mark.asyncio
    async def test_blank_llm_strings_are_null(self):
        llm = FakeLLM(name="   ", address="")
        result = await extract_sms_fields(MESSAGE, llm=llm, timeout=1.0)

        assert result.name_source == "regex"
        assert result.address_source == "regex"


class TestFallback:
    @pytest.mark.asyncio
    async def test_timeout_falls_back_to_regex(self):
        llm = SlowLLM()
        result = await extract_sms_fields(MESSAGE, llm=llm, timeout=0.05)

        assert result.name.value == "Maria Lopez"
        assert result.address.value == "123 Oak Ave"
        assert result.name_source == "regex"
        assert result.address_source == "regex"
        assert result.completeness == "complete"
        assert len(sms._abandoned) == 1

        # The abandoned call settles later and is discarded
        llm.release.set()
        await asyncio.sleep(0.05)
        assert len(sms._abandoned) == 0

    @pytest.mark.asyncio
    async def test_llm_error_falls_back_to_regex(self):
        result = await extract_sms_fields(MESSAGE, llm=FailingLLM(), timeout=1.0)

        assert result.name.value == "Maria Lopez"
        assert result.name_source == "regex"
        assert result.completeness == "complete"

    @pytest.mark.asyncio
    async def test_no_api_key_uses_regex_only(self):
        with patch.object(sms, "FieldExtractionLLM") as llm_cls:
            result = await extract_sms_fields(MESSAGE)

        llm_cls.assert_not_called()
        assert result.name.source == "sms/my name is"
        assert result.address.source == "sms/numeric"

    @pytest.mark.asyncio
    async def test_disabled_llm_is_not_built(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test", "SMS_LLM_ENABLED": "false"}):
            get_config.cache_clear()
            with patch.object(sms, "FieldExtractionLLM") as llm_cls:
                result = await extract_sms_fields(MESSAGE)

        llm_cls.assert_not_called()
        assert result.name_source == "regex"

    @pytest.mark.asyncio
    async def test_configured_llm_is_built(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}):
            get_config.cache_clear()
            with patch.object(sms, "FieldExtractionLLM", return_value=FakeLLM(name="Maria Lopez")) as llm_cls:
                result = await extract_sms_fields(MESSAGE)

        llm_cls.assert_called_once()
        assert result.name_source == "llm"


class TestSmsResults:
    @pytest.mark.asyncio
    async def test_partial_name_only(self):
        result = await extract_sms_fields("My name is Ana")

        assert result.name.value == "Ana"
        assert result.address.value == "Not provided"
        assert result.address_source == "default"
        assert result.completeness == "partial"

    @pytest.mark.asyncio
    async def test_partial_street_without_number(self):
        result = await extract_sms_fields("Pothole on Main Street")

        assert result.name.value == "Unknown Caller"
        assert result.address.value == "Main Street"
        assert result.address_is_complete is False
        assert result.completeness == "partial"

    @pytest.mark.asyncio
    async def test_spanish_message(self):
        result = await extract_sms_fields("Hola, me llamo Ana Torres y vivo en Calle Morelos 45")

        assert result.language == "Spanish"
        assert result.name.value == "Ana Torres"
        assert result.address.value == "Calle Morelos 45"
        assert result.address.source == "sms/prefix"
        assert result.completeness == "partial"

    @pytest.mark.asyncio
    async def test_minimal(self):
        result = await extract_sms_fields("hi")

        assert result.name.value == "Unknown Caller"
        assert result.address.value == "Not provided"
        assert result.completeness == "minimal"
        assert result.language == "English"

    @pytest.mark.asyncio
    async def test_empty_body_skips_llm(self):
        llm = FakeLLM(name="Maria Lopez")
        result = await extract_sms_fields("", llm=llm, timeout=1.0)

        assert llm.calls == []
        assert result.completeness == "minimal"

    @pytest.mark.asyncio
    async def test_internal_error_returns_minimal(self):
        with patch.object(sms, "normalize_text", side_effect=RuntimeError("boom")):
            result = await extract_sms_fields(MESSAGE)

        assert result.name.value == "Unknown Caller"
        assert result.address.value == "Not provided"
        assert result.completeness == "minimal"
