"""
Pytest configuration and fixtures.
"""

import pytest
import os
from unittest.mock import patch

from src.intake.models import Utterance


@pytest.fixture(autouse=True)
def mock_env_vars():
    """Mock environment variables for tests."""
    env_vars = {
        "LOG_LEVEL": "DEBUG",
        "LLM_PROVIDER": "openai",
        "OPENAI_API_KEY": "",  # No key: the LLM tier stays off unless a test injects one
        "OPENAI_MODEL": "gpt-4o-mini",
        "GROQ_API_KEY": "",
        "GROQ_MODEL": "llama-3.3-70b-versatile",
        "SMS_LLM_ENABLED": "true",
        "SMS_LLM_TIMEOUT_SECONDS": "3.0",
        "LLM_MAX_TOKENS": "150",
    }

    with patch.dict(os.environ, env_vars):
        # Clear config cache
        from src.intake.config import get_config
        get_config.cache_clear()
        yield
        get_config.cache_clear()


@pytest.fixture
def pothole_call():
    """A short English call with name and spoken address."""
    return [
        Utterance(role="agent", text="Thanks for calling the city. What's your name?"),
        Utterance(role="caller", text="My name is John Smith, calling about a pothole"),
        Utterance(role="agent", text="And where is it?"),
        Utterance(role="caller", text="Uh, I live at eleven twenty two Main Street"),
    ]


@pytest.fixture
def end_of_call_payload():
    """Sample end-of-call-report webhook body."""
    return {
        "message": {
            "type": "end-of-call-report",
            "endedReason": "customer-ended-call",
            "transcript": (
                "AI: Thanks for calling. What's your name?\n"
                "User: My name is John Smith.\n"
                "AI: What's the address?\n"
                "User: 450 Elm Street. There's a big pothole."
            ),
            "call": {"id": "call-123", "type": "inboundPhoneCall"},
            "artifact": {
                "messages": [
                    {"role": "system", "message": "You are a city intake agent.", "time": 0},
                    {"role": "bot", "message": "Thanks for calling. What's your name?", "time": 1},
                    {"role": "user", "message": "My name is John Smith.", "time": 2},
                    {"role": "bot", "message": "What's the address?", "time": 3},
                    {"role": "user", "message": "450 Elm Street. There's a big pothole.", "time": 4},
                ]
            },
            "analysis": {"summary": "Caller reported a pothole.", "successEvaluation": "true"},
        },
        "transport": {"callSid": "CA789012"},
    }
