"""
Configuration management for the hcp package.

This module provides loading and validation of the optional TOML config file
with singleton management, and resolution of the per-invocation RunConfig.
"""

from .manager import (
    clear_config_cache,
    get_config,
    is_config_loaded,
    set_config_path,
)

from .loader import (
    CONFIG_PATH_ENV_VAR,
    load_main_config,
    load_toml_file,
    resolve_config_path,
)
from .run_config import resolve_run_config
from .validators import (
    validate_app_config,
    validate_logging_config,
    validate_notify_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "resolve_run_config",
    # Advanced interface
    "CONFIG_PATH_ENV_VAR",
    "load_toml_file",
    "load_main_config",
    "resolve_config_path",
    "validate_app_config",
    "validate_logging_config",
    "validate_notify_config",
]
