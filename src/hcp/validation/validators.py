"""
Validation functions for identifiers and configuration values.
"""

import re
from typing import Any, List, Optional

from .exceptions import ValidationError

# Positions of the hyphens in the 8-4-4-4-12 layout.
_CHECK_ID_LENGTH = 36
_HYPHEN_POSITIONS = (8, 13, 18, 23)


def _is_id_group(chars: str) -> bool:
    # Any ASCII letter is accepted, not only a-f; existing ids rely on this.
    return all(c.isascii() and c.isalnum() for c in chars)


def is_valid_check_id(token: str) -> bool:
    """
    Check whether a token has the layout of a health check id.

    The id is 36 characters long with hyphens at positions 8, 13, 18 and 23,
    and ASCII alphanumeric characters everywhere else.

    Args:
        token: Candidate identifier

    Returns:
        True if the token is a well-formed identifier, False otherwise
    """
    if not isinstance(token, str) or len(token) != _CHECK_ID_LENGTH:
        return False
    if any(token[pos] != "-" for pos in _HYPHEN_POSITIONS):
        return False
    return (
        _is_id_group(token[:8])
        and _is_id_group(token[9:13])
        and _is_id_group(token[14:18])
        and _is_id_group(token[19:23])
        and _is_id_group(token[24:])
    )


def validate_check_id(value: Any, field_name: str = "check_id") -> str:
    """
    Validate a health check id.

    Args:
        value: Identifier to validate
        field_name: Name of the field being validated

    Returns:
        The validated identifier

    Raises:
        ValidationError: If the identifier is missing or malformed
    """
    if value is None:
        raise ValidationError(
            "No Healthcheck Id given",
            field_name=field_name,
            value=value
        )
    if not is_valid_check_id(value):
        raise ValidationError(
            f"Healthcheck Id isn't a valid uuid '{value}'",
            field_name=field_name,
            value=value
        )
    return value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a positive float.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_enum_choice(
    value: Any,
    valid_choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice as spelled in valid_choices

    Raises:
        ValidationError: If value is not a valid choice
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )

    for choice in valid_choices:
        if value == choice or (not case_sensitive and value.lower() == choice.lower()):
            return choice

    raise ValidationError(
        f"{field_name} must be one of {valid_choices}, got '{value}'",
        field_name=field_name,
        value=value
    )


def validate_base_url(value: Any, field_name: str = "base_url") -> str:
    """
    Validate an http(s) base URL and strip trailing slashes.

    Raises:
        ValidationError: If the value is not an http or https URL
    """
    if not isinstance(value, str) or not re.match(r'^https?://[^\s/]+', value):
        raise ValidationError(
            f"{field_name} must be an http or https URL, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value.rstrip("/")
