"""
Structured field extraction using Instructor.

Asks an OpenAI-compatible chat model (OpenAI, or Groq through its
OpenAI-compatible endpoint) for the sender's name and street address in an
SMS body, parsed into a pydantic model. There is no retry: the SMS extractor
races a single attempt against a deadline and falls back to regex patterns.
"""

from __future__ import annotations

from typing import Optional

import instructor
import structlog
from openai import AsyncOpenAI
from pydantic import BaseModel, Field, field_validator

from src.intake.config import Config, get_config

logger = structlog.get_logger(__name__)


SYSTEM_PROMPT = """You are a municipal service intake assistant. Extract the sender's name and street address from a text message.

Rules:
- Extract a value only if it is explicitly stated in the message.
- Never guess, infer, or complete a partial value.
- Never derive a name or address from a phone number.
- If a value is not present, return null for it.

Respond with JSON: {"name": string or null, "address": string or null}"""


class SmsFieldExtraction(BaseModel):
    """Structured extraction from one SMS body."""

    name: Optional[str] = Field(
        default=None,
        description="The sender's name, only if explicitly stated"
    )

    address: Optional[str] = Field(
        default=None,
        description="The street address of the issue or sender, only if explicitly stated"
    )

    @field_validator("name", "address", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class FieldExtractionLLM:
    """
    Async LLM client for SMS field extraction.

    The instructor client is created lazily on first use, so constructing
    this object never touches the network.
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self._client = None

    @property
    def is_available(self) -> bool:
        return self.config.llm_available

    def _get_client(self):
        if self._client is None:
            openai_client = AsyncOpenAI(
                api_key=self.config.llm_api_key,
                base_url=self.config.llm_base_url,
            )
            self._client = instructor.from_openai(openai_client, mode=instructor.Mode.JSON)
            logger.info(
                "Instructor client initialized",
                provider=self.config.llm_provider,
                model=self.config.llm_model,
            )
        return self._client

    async def extract_fields(self, body: str) -> SmsFieldExtraction:
        """
        Extract name and address from an SMS body.

        Raises whatever the transport or instructor raises; the caller
        decides how to degrade.
        """
        client = self._get_client()
        extraction = await client.chat.completions.create(
            model=self.config.llm_model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": body},
            ],
            response_model=SmsFieldExtraction,
            temperature=0,
            max_tokens=self.config.llm_max_tokens,
            max_retries=0,
        )

        logger.debug(
            "LLM extraction completed",
            has_name=extraction.name is not None,
            has_address=extraction.address is not None,
        )
        return extraction
