"""
Configuration management for the intake extraction engine.

Loads environment variables and provides a strongly-typed configuration object.
A missing LLM key is not an error: it only disables the LLM extraction tier.
"""

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
import structlog

load_dotenv()

logger = structlog.get_logger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass(frozen=True)
class Config:
    """Strongly-typed configuration object."""

    log_level: str = "INFO"

    # LLM Provider (OpenAI/Groq)
    # - Groq is reached through its OpenAI-compatible endpoint.
    llm_provider: str = "openai"  # "openai" | "groq"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    llm_max_tokens: int = 150

    # SMS hybrid extraction
    sms_llm_enabled: bool = True
    sms_llm_timeout_seconds: float = 3.0

    @property
    def llm_api_key(self) -> str:
        """API key for the configured provider."""
        if self.llm_provider == "groq":
            return self.groq_api_key
        return self.openai_api_key

    @property
    def llm_model(self) -> str:
        """Model name for the configured provider."""
        if self.llm_provider == "groq":
            return self.groq_model
        return self.openai_model

    @property
    def llm_base_url(self) -> str | None:
        """Base URL override; None means the OpenAI default."""
        if self.llm_provider == "groq":
            return GROQ_BASE_URL
        return None

    @property
    def llm_available(self) -> bool:
        """Whether the SMS extractor should try the LLM tier at all."""
        return self.sms_llm_enabled and bool(self.llm_api_key) and bool(self.llm_model)

    def validate(self) -> None:
        """Validate the configuration."""
        provider = (self.llm_provider or "openai").strip().lower()
        if provider not in ("openai", "groq"):
            raise ConfigError(
                f"Invalid LLM_PROVIDER '{self.llm_provider}'. Expected 'openai' or 'groq'."
            )
        if self.sms_llm_timeout_seconds <= 0:
            raise ConfigError(
                f"SMS_LLM_TIMEOUT_SECONDS must be positive, got {self.sms_llm_timeout_seconds}."
            )

    def log_config(self) -> None:
        """Log configuration (without secrets)."""
        logger.info(
            "Configuration loaded",
            log_level=self.log_level,
            llm_provider=self.llm_provider,
            llm_model=self.llm_model,
            llm_max_tokens=self.llm_max_tokens,
            sms_llm_enabled=self.sms_llm_enabled,
            sms_llm_timeout_seconds=self.sms_llm_timeout_seconds,
            openai_key_set=bool(self.openai_api_key),
            groq_key_set=bool(self.groq_api_key),
        )


def _get_bool(key: str, default: bool = False) -> bool:
    """Get a boolean from environment variable."""
    value = os.getenv(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


def _get_int(key: str, default: int) -> int:
    """Get an integer from environment variable."""
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


def _get_float(key: str, default: float) -> float:
    """Get a float from environment variable."""
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


@lru_cache(maxsize=1)
def get_config() -> Config:
    """
    Get the application configuration.

    Uses lru_cache to ensure we only load config once.
    """
    return Config(
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),

        # LLM Provider
        llm_provider=os.getenv("LLM_PROVIDER", "openai").strip().lower(),
        openai_api_key=os.getenv("OPENAI_API_KEY", ""),
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        groq_api_key=os.getenv("GROQ_API_KEY", ""),
        groq_model=os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile"),
        llm_max_tokens=_get_int("LLM_MAX_TOKENS", 150),

        # SMS
        sms_llm_enabled=_get_bool("SMS_LLM_ENABLED", True),
        sms_llm_timeout_seconds=_get_float("SMS_LLM_TIMEOUT_SECONDS", 3.0),
    )


def init_config() -> Config:
    """
    Initialize and validate configuration.

    Call this at application startup to fail fast if config is invalid.
    """
    config = get_config()
    config.validate()
    config.log_config()
    return config
