"""
System interaction utilities.

Environment filtering for the child process and presence-only flag lookups.
"""

from .environment import (
    CHECK_ID_ENV_VAR,
    CONFIG_ENV_VAR,
    CONFIG_ENV_VARS,
    IGNORE_CODE_ENV_VAR,
    TEE_ENV_VAR,
    env_flag_enabled,
    filter_environment,
)

__all__ = [
    "CHECK_ID_ENV_VAR",
    "CONFIG_ENV_VAR",
    "CONFIG_ENV_VARS",
    "IGNORE_CODE_ENV_VAR",
    "TEE_ENV_VAR",
    "env_flag_enabled",
    "filter_environment",
]
