"""
Tests for configuration loading and logging setup.
"""

import logging
import os
from unittest.mock import patch

import pytest

from src.intake.config import GROQ_BASE_URL, Config, ConfigError, get_config, init_config
from src.intake.logging_config import PACKAGE_LOGGER, _add_component, configure_logging


class TestGetConfig:
    def test_defaults(self):
        config = get_config()
        assert config.llm_provider == "openai"
        assert config.llm_model == "gpt-4o-mini"
        assert config.llm_base_url is None
        assert config.sms_llm_enabled is True
        assert config.sms_llm_timeout_seconds == 3.0
        assert config.llm_max_tokens == 150
        assert config.log_level == "DEBUG"

    def test_missing_key_disables_llm(self):
        assert get_config().llm_available is False

    def test_cached(self):
        assert get_config() is get_config()

    def test_groq_provider(self):
        with patch.dict(os.environ, {"LLM_PROVIDER": "Groq", "GROQ_API_KEY": "gsk-test"}):
            get_config.cache_clear()
            config = get_config()

        assert config.llm_provider == "groq"
        assert config.llm_api_key == "gsk-test"
        assert config.llm_model == "llama-3.3-70b-versatile"
        assert config.llm_base_url == GROQ_BASE_URL
        assert config.llm_available is True

    def test_malformed_values_fall_back(self):
        with patch.dict(os.environ, {"SMS_LLM_TIMEOUT_SECONDS": "soon", "LLM_MAX_TOKENS": "lots"}):
            get_config.cache_clear()
            config = get_config()

        assert config.sms_llm_timeout_seconds == 3.0
        assert config.llm_max_tokens == 150

    @pytest.mark.parametrize("value, expected", [("false", False), ("0", False), ("yes", True), ("ON", True)])
    def test_bool_parsing(self, value, expected):
        with patch.dict(os.environ, {"SMS_LLM_ENABLED": value}):
            get_config.cache_clear()
            assert get_config().sms_llm_enabled is expected


class TestValidate:
    def test_valid(self):
        Config().validate()
        Config(llm_provider="groq").validate()

    def test_unknown_provider(self):
        with pytest.raises(ConfigError):
            Config(llm_provider="anthropic").validate()

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigError):
            Config(sms_llm_timeout_seconds=0).validate()

    def test_init_config_validates_and_logs(self):
        with patch.object(Config, "log_config") as log_config:
            config = init_config()
        assert config is get_config()
        log_config.assert_called_once()

    def test_init_config_fails_fast(self):
        with patch.dict(os.environ, {"LLM_PROVIDER": "bogus"}):
            get_config.cache_clear()
            with pytest.raises(ConfigError):
                init_config()


class TestConfigureLogging:
    @pytest.mark.parametrize("level, renderer", [("DEBUG", "ConsoleRenderer"), ("INFO", "JSONRenderer")])
    def test_renderer_by_level(self, level, renderer):
        with patch("src.intake.logging_config.structlog.configure") as configure, \
                patch("src.intake.logging_config.logging.basicConfig") as basic_config:
            configure_logging(level)

        processors = configure.call_args.kwargs["processors"]
        assert type(processors[-1]).__name__ == renderer
        basic_config.assert_called_once()

    def test_level_defaults_to_config_and_applies_to_package(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        previous = package_logger.level
        try:
            with patch("src.intake.logging_config.structlog.configure") as configure, \
                    patch("src.intake.logging_config.logging.basicConfig"):
                configure_logging()

            processors = configure.call_args.kwargs["processors"]
            assert type(processors[-1]).__name__ == "ConsoleRenderer"
            assert package_logger.level == logging.DEBUG
        finally:
            package_logger.setLevel(previous)

    def test_json_override(self):
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        previous = package_logger.level
        try:
            with patch("src.intake.logging_config.structlog.configure") as configure, \
                    patch("src.intake.logging_config.logging.basicConfig"):
                configure_logging("DEBUG", json_logs=True)

            processors = configure.call_args.kwargs["processors"]
            assert type(processors[-1]).__name__ == "JSONRenderer"
            event = _add_component(None, "info", {"event": "Field extracted"})
            assert event["component"] == "intake"
        finally:
            package_logger.setLevel(previous)
