"""
Structured logging setup for the extraction engine.

The engine is a library: the host application normally owns logging. Hosts
without their own setup call ``configure_logging()`` once at startup; the
level defaults to the LOG_LEVEL setting and only the ``src.intake`` loggers
are raised or lowered to it.
"""

import logging
from typing import Optional

import structlog

from src.intake.config import get_config

PACKAGE_LOGGER = "src.intake"


def _add_component(logger, method_name, event_dict):
    event_dict.setdefault("component", "intake")
    return event_dict


def configure_logging(log_level: Optional[str] = None, *, json_logs: Optional[bool] = None) -> None:
    """
    Configure structured logging.

    Args:
        log_level: Level for the package loggers (defaults to config).
        json_logs: Force JSON (True) or console (False) output. By default
            DEBUG renders for the console and everything else as JSON.
    """
    level_name = (log_level or get_config().log_level or "INFO").upper()
    if json_logs is None:
        json_logs = level_name != "DEBUG"

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _add_component,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s")
    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, level_name, logging.INFO))
