"""
Module: logger.py
Description: Structured logging configuration for the webhook sender.

Configures structlog for JSON output. Provides consistent logging
across all modules with structured context, and keeps webhook
secrets and signatures out of the log stream.

Key Components:
- JSON output with timestamp and level
- Redaction of secret-bearing keys
- Level filtering from settings.log_level
- get_logger() helper function

Dependencies: structlog, logging, datetime
Author: Webhook Sender Team
"""

import logging
from datetime import datetime, timezone

import structlog

from ..config.settings import settings

_REDACTED = "***REDACTED***"
_SENSITIVE_KEYS = frozenset({"secret", "signature", "authorization"})


def _add_timestamp(logger, method_name, event_dict):
    """
    Add ISO 8601 timestamp to log entries.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with timestamp
    """
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def _add_log_level(logger, method_name, event_dict):
    """Add upper-cased log level to the event dictionary."""
    event_dict["level"] = method_name.upper()
    return event_dict


def _redact_sensitive(logger, method_name, event_dict):
    """Mask values logged under secret-bearing keys."""
    for key in event_dict:
        if key.lower() in _SENSITIVE_KEYS:
            event_dict[key] = _REDACTED
    return event_dict


structlog.configure(
    processors=[
        _add_timestamp,
        _add_log_level,
        _redact_sensitive,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ],
    logger_factory=structlog.WriteLoggerFactory(),
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(settings.log_level)
    ),
    cache_logger_on_first_use=True,
)


def get_logger(name: str) -> structlog.typing.FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Webhook delivered", work_item_id="...", status_code=200)
    """
    return structlog.get_logger(name)
