"""
Validation and error handling for the hcp package.

This module provides input validation and the exception taxonomy used to
report configuration, supervision and notification failures.
"""

from .exceptions import (
    CaptureError,
    ErrorSeverity,
    NotificationError,
    SpawnError,
    SupervisorError,
    ValidationError,
    WaitError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)

from .validators import (
    is_valid_check_id,
    validate_base_url,
    validate_check_id,
    validate_enum_choice,
    validate_positive_float,
)

__all__ = [
    # Exceptions
    "CaptureError",
    "ErrorSeverity",
    "NotificationError",
    "SpawnError",
    "SupervisorError",
    "ValidationError",
    "WaitError",
    # Error handling
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    # Validators
    "is_valid_check_id",
    "validate_base_url",
    "validate_check_id",
    "validate_enum_choice",
    "validate_positive_float",
]
