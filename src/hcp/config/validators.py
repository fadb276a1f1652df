"""
Configuration validation utilities.

This module turns raw TOML tables into validated configuration dataclasses.
"""

import logging
from typing import Any, Dict

from .. import __version__
from ..models.config import (
    DEFAULT_BASE_URL,
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIMEOUT_SECONDS,
    AppConfig,
    LoggingConfig,
    NotifyConfig,
)
from ..validation import (
    ValidationError,
    validate_base_url,
    validate_enum_choice,
    validate_positive_float,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def validate_notify_config(notify_data: Dict[str, Any]) -> NotifyConfig:
    """
    Validate and create a NotifyConfig from the `[notify]` table.

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(notify_data, dict):
        raise ValidationError("notify must be a table", field_name="notify")

    base_url = validate_base_url(
        notify_data.get("base_url", DEFAULT_BASE_URL),
        field_name="notify.base_url",
    )

    timeout_seconds = validate_positive_float(
        notify_data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
        min_value=0.1,
        max_value=300.0,
        field_name="notify.timeout_seconds",
    )

    user_agent = notify_data.get("user_agent", f"hcp/{__version__}")
    if not isinstance(user_agent, str) or not user_agent.strip():
        raise ValidationError(
            "notify.user_agent must be a non-empty string",
            field_name="notify.user_agent",
            value=user_agent,
        )

    unknown = set(notify_data) - {"base_url", "timeout_seconds", "user_agent"}
    if unknown:
        logger.warning(f"Ignoring unknown keys in [notify]: {sorted(unknown)}")

    return NotifyConfig(
        base_url=base_url,
        timeout_seconds=timeout_seconds,
        user_agent=user_agent,
    )


def validate_logging_config(logging_data: Dict[str, Any]) -> LoggingConfig:
    """Validate and create a LoggingConfig from the `[logging]` table."""
    if not isinstance(logging_data, dict):
        raise ValidationError("logging must be a table", field_name="logging")

    level = validate_enum_choice(
        logging_data.get("level", DEFAULT_LOG_LEVEL),
        valid_choices=LOG_LEVELS,
        field_name="logging.level",
        case_sensitive=False,
    )
    return LoggingConfig(level=level)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """Validate a whole parsed configuration file."""
    return AppConfig(
        notify=validate_notify_config(config_data.get("notify", {})),
        logging=validate_logging_config(config_data.get("logging", {})),
    )
